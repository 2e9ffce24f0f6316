from .client import DEFAULT_API_URL, LifxCloud

__all__ = ["DEFAULT_API_URL", "LifxCloud"]
