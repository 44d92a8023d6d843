"""
Helpers for stored document paths that point at Google Drive.

Stored paths are often Drive sharing links; viewers need the preview or
embed form, and download links need the direct-download form.
"""

import re
from typing import Optional

DRIVE_ID_PATTERNS = [
    # https://drive.google.com/file/d/FILE_ID/view?usp=sharing
    re.compile(r'drive\.google\.com/file/d/([a-zA-Z0-9_-]+)'),
    # https://drive.google.com/open?id=FILE_ID
    re.compile(r'drive\.google\.com/open\?id=([a-zA-Z0-9_-]+)'),
    # https://drive.google.com/uc?export=download&id=FILE_ID
    re.compile(r'drive\.google\.com/uc\?.*id=([a-zA-Z0-9_-]+)'),
    # https://docs.google.com/document/d/FILE_ID/edit
    re.compile(r'docs\.google\.com/[^/]+/d/([a-zA-Z0-9_-]+)'),
]


def is_google_drive_url(url) -> bool:
    return isinstance(url, str) and 'drive.google.com' in url


def get_google_drive_file_id(url) -> Optional[str]:
    """Return the Drive file id embedded in a URL, or None."""
    if not url or not isinstance(url, str):
        return None
    for pattern in DRIVE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def convert_google_drive_url(url, use_embed: bool = False):
    """
    Convert a Drive sharing URL into a viewable URL.

    Args:
        url: Any URL; non-Drive URLs are returned unchanged
        use_embed: Always return the /preview form, which works in iframes

    Returns:
        ".../file/d/<id>/view" if the input was a view URL and use_embed is
        False, otherwise ".../file/d/<id>/preview"
    """
    file_id = get_google_drive_file_id(url)
    if not file_id:
        return url
    if not use_embed and '/view' in url:
        return f"https://drive.google.com/file/d/{file_id}/view"
    return f"https://drive.google.com/file/d/{file_id}/preview"


def convert_google_drive_to_download_url(url):
    file_id = get_google_drive_file_id(url)
    if file_id:
        return f"https://drive.google.com/uc?export=download&id={file_id}"
    return url
