class LifxError(Exception):
    pass


class ConfigurationError(LifxError):
    pass


class InvalidInputError(LifxError, ValueError):
    pass


class NotConnectedError(LifxError):
    pass
