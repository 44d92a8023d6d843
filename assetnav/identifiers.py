"""
Identifier Normalization for AssetNav

Parses loosely formatted strings coming from folder names, chat messages
and record fields into canonical tokens:
- Job numbers ("U2524", "PRO-2025-003")
- Drawing numbers ("R-1", "R-3A")
- Change order numbers ("U2524 - CO #007" -> "007")

Every function here is pure and total: bad input yields None, never an
exception.
"""

import re
from typing import Optional

# Job number patterns in order of precedence
JOB_NUMBER_PATTERNS = [
    # "U2524" or "U2524_Valley View"
    (re.compile(r'^U\d+', re.IGNORECASE), 0),
    # "PRO 042_U2524_Valley View" -> inner U number
    (re.compile(r'PRO\s*\d+[_-](U\d+)', re.IGNORECASE), 1),
    # "PRO-2025-003"
    (re.compile(r'^PRO-2025-\d+', re.IGNORECASE), 0),
]

DRAWING_NUMBER_PATTERN = re.compile(r'\b([Rr]-?\d+[A-Z]?)\b', re.IGNORECASE)

# Drawing number embedded in a file name, e.g. "U2961_R-1_APP 00_Plan.pdf"
FILENAME_DRAWING_PATTERN = re.compile(r'[_-](R-\d+[A-Z]?)', re.IGNORECASE)

CO_PREFIX_PATTERN = re.compile(r'^CO\s*#?\s*', re.IGNORECASE)

DEFAULT_CO_NUMBER = "001"


def extract_job_number(name) -> Optional[str]:
    """
    Extract a job number from a folder name or free-form project identifier.

    Args:
        name: Raw identifier, e.g. "U2524_Valley View" or "PRO 042_U2524_Name"

    Returns:
        The job number token, or None if no pattern matches
    """
    if not isinstance(name, str) or not name:
        return None

    for pattern, group in JOB_NUMBER_PATTERNS:
        match = pattern.search(name)
        if match:
            return match.group(group)

    return None


def normalize_drawing_number(text) -> Optional[str]:
    """
    Find the first drawing number in text and put it in canonical form.

    "r1" -> "R-1", "r-12b" -> "R-12B", "R-3A" is already canonical.
    """
    if not isinstance(text, str) or not text:
        return None

    match = DRAWING_NUMBER_PATTERN.search(text)
    if not match:
        return None

    return re.sub(r'^R(\d)', r'R-\1', match.group(1).upper())


def extract_drawing_number_from_filename(filename, url: str = "") -> Optional[str]:
    """
    Pull a dashed drawing number out of a file name, falling back to its URL.

    Args:
        filename: File name such as "U2961_R-1_APP 00_Layout.pdf"
        url: Optional URL or asset path of the same file

    Returns:
        Upper-cased drawing number or None
    """
    for candidate in (filename, url):
        if not isinstance(candidate, str) or not candidate:
            continue
        match = FILENAME_DRAWING_PATTERN.search(candidate)
        if match:
            return match.group(1).upper()
    return None


def derive_co_number(change_order_id, job_number: Optional[str] = None) -> str:
    """
    Reduce a change order identifier to its bare number.

    Strips a leading "<job> - CO #" and then any "CO #"/"CO#" prefix.

    Args:
        change_order_id: e.g. "U2524 - CO #007", "CO#12" or "003"
        job_number: Job number that may prefix the identifier

    Returns:
        The remaining number text, or "001" if nothing is left
    """
    co_number = str(change_order_id or "").strip()

    if job_number:
        job_prefix = re.compile(rf'^{re.escape(job_number)}\s*-\s*CO\s*#?\s*', re.IGNORECASE)
        co_number = job_prefix.sub('', co_number).strip()

    co_number = CO_PREFIX_PATTERN.sub('', co_number).strip()

    return co_number or DEFAULT_CO_NUMBER


def format_change_order_id(job_number: str, raw_change_order_id, index: int = 0) -> str:
    """
    Format a change order identifier for display as "<job> - CO #NNN".

    The number is taken from a trailing "#<digits>" or "_<digits>" in the raw
    identifier; when none is found the 1-based list position is used.
    """
    raw = str(raw_change_order_id or "").strip()

    match = re.search(r'#(\d+)$', raw) or re.search(r'[#_](\d+)$', raw)
    if match:
        number = match.group(1).zfill(3)
    elif raw.isdigit():
        number = raw.zfill(3)
    else:
        number = "000"

    if int(number) == 0:
        number = str(index + 1).zfill(3)

    return f"{job_number} - CO #{number}"


def sequential_number(index: int) -> str:
    """Placeholder change order sequence number: 100 + list position + 1."""
    return str(100 + index + 1).zfill(3)
