"""
Exception types for AssetNav.

Resolution failures are reported as data (None, empty lists, diagnostic
dicts). These exceptions cover the few conditions that cannot be.
"""


class AssetNavError(Exception):
    """Base class for all AssetNav errors."""


class AssetRootUnavailable(AssetNavError):
    """The asset root exists but cannot be listed at all."""

    def __init__(self, root: str, reason: str = ""):
        self.root = root
        self.reason = reason
        message = f"Asset root {root} is not accessible"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsafePathError(AssetNavError):
    """A relative path would escape the asset root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path escapes asset root: {path!r}")


class UnknownCategoryError(AssetNavError, ValueError):
    """A document category name is not one of the supported categories."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown document category: {category!r}")
