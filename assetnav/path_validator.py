"""
Path validation and normalization.

Every path handed to a document viewer passes through here. Relative paths
are confined to a whitelist of public roots; absolute URLs are passed
through as long as they carry no traversal segments.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

ALLOWED_ROOTS = ("/projects/", "/assets/", "/public/")
URL_SCHEMES = ("http://", "https://")


def is_url(path: str) -> bool:
    return path.startswith(URL_SCHEMES)


def validate_path(path) -> bool:
    """
    Check that a path is safe to expose.

    Args:
        path: Candidate path or URL

    Returns:
        True for URLs without '..', and for relative paths without '..' or
        '//' that start with one of the allowed roots
    """
    if not path or not isinstance(path, str):
        return False

    if is_url(path):
        return ".." not in path

    if ".." in path:
        return False

    if "//" in path:
        return False

    return path.startswith(ALLOWED_ROOTS)


def normalize_path(path) -> Optional[str]:
    """
    Normalize a path to a single leading '/' and validate it.

    Returns:
        The normalized path, or None if it is empty or fails validation.
        normalize_path(normalize_path(p)) == normalize_path(p).
    """
    if not path or not isinstance(path, str):
        return None

    trimmed = path.strip()
    if not trimmed:
        return None

    if is_url(trimmed):
        if not validate_path(trimmed):
            logger.warning("Rejected URL with traversal segment")
            return None
        return trimmed

    if not trimmed.startswith("/"):
        trimmed = f"/{trimmed}"

    if not validate_path(trimmed):
        logger.debug(f"Rejected path {trimmed!r}")
        return None

    return trimmed
