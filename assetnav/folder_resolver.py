"""
Project Folder Resolution

Maps a job number, optionally combined with the project's display name, to
one concrete directory on the asset store. Folder names on disk drift from
the canonical "<job>_ <name>" form (extra spaces, different casing, the
"PRO 042_" prefix style), so lookup falls back through progressively
looser matches before giving up.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .store import AssetStore
from .errors import AssetRootUnavailable, UnsafePathError

logger = logging.getLogger(__name__)

PRO_PREFIX_PATTERN = re.compile(r'^(PRO\s*\d+[_-])', re.IGNORECASE)

# On disk, plain job numbers are joined to the name as "U2961_ JMEUC PUMP STATION"
FOLDER_NAME_SEPARATOR = "_ "


def build_project_folder_name(job_number: Optional[str], project_name: Optional[str] = None,
                              separator: str = FOLDER_NAME_SEPARATOR) -> str:
    """
    Build the conventional folder name for a project.

    Args:
        job_number: Job number, e.g. "U2961" or "PRO 042_U2524"
        project_name: Optional display name
        separator: Joiner used when the job number has no "PRO NNN_" prefix

    Returns:
        "PRO 042_<name>" for prefixed job numbers, "<job><separator><name>"
        otherwise, or the bare job number when there is no usable name
    """
    folder = job_number or ""
    name = (project_name or "").strip()
    if not name or name in folder:
        return folder

    pro_match = PRO_PREFIX_PATTERN.match(folder)
    if pro_match:
        return f"{pro_match.group(1)}{name}"
    return f"{folder}{separator}{name}"


def sorted_names(names: List[str]) -> List[str]:
    """Sort names case-insensitively with an exact-case tiebreak."""
    return sorted(names, key=lambda n: (n.lower(), n))


def list_directory_names(store: AssetStore, rel_path: str = "") -> List[str]:
    """
    List directory names under a path, sorted deterministically.

    Raises:
        AssetRootUnavailable: If the directory exists but cannot be listed
    """
    try:
        entries = store.list_entries(rel_path)
    except FileNotFoundError:
        return []
    except (OSError, UnsafePathError) as e:
        raise AssetRootUnavailable(f"{store!r}:{rel_path or '/'}", str(e)) from e
    return sorted_names([e.name for e in entries if e.is_dir and not e.name.startswith(".")])


def match_project_folder(directory_names: List[str], job_number: str,
                         project_name: Optional[str] = None) -> Optional[str]:
    """
    Pick a project folder from an already-sorted list of directory names.

    Resolution order, first success wins:
    1. Exact (case-sensitive) match of the conventional folder name
    2. The only folder starting with the job number (case-insensitive)
    3. Among several such folders, the one containing the project name
    4. The first folder starting with the job number

    Returns:
        The chosen directory name or None
    """
    if not job_number:
        return None

    expected = build_project_folder_name(job_number, project_name)
    if expected in directory_names:
        return expected

    job_lower = job_number.lower()
    candidates = [name for name in directory_names if name.lower().startswith(job_lower)]

    if len(candidates) == 1:
        return candidates[0]

    if project_name and candidates:
        name_lower = project_name.strip().lower()
        for candidate in candidates:
            if name_lower and name_lower in candidate.lower():
                return candidate

    if candidates:
        logger.debug(f"Ambiguous folders for {job_number}: {candidates}; using {candidates[0]}")
        return candidates[0]

    return None


def find_project_folder(store: AssetStore, job_number: str,
                        project_name: Optional[str] = None) -> Optional[str]:
    """Find the project folder for a job number directly under the store root."""
    return match_project_folder(list_directory_names(store), job_number, project_name)


@dataclass
class FolderResolution:
    """Outcome of a folder lookup, including diagnostics when it fails."""
    job_number: str
    expected_folder: str
    folder_name: Optional[str] = None
    available_folders: List[str] = field(default_factory=list)
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.folder_name is not None

    def diagnostic(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "availableFolders": list(self.available_folders),
        }


def resolve_project_folder(store: AssetStore, job_number: str,
                           project_name: Optional[str] = None) -> FolderResolution:
    """
    Resolve a project folder, never raising for ordinary misses.

    A missing asset root or an unmatched job number produces a
    FolderResolution with folder_name None and the sibling directory names
    as diagnostics. Only a root that exists but cannot be listed raises.

    Raises:
        AssetRootUnavailable: If the asset root cannot be listed
    """
    expected = build_project_folder_name(job_number, project_name)
    resolution = FolderResolution(job_number=job_number, expected_folder=expected)

    if not store.exists(""):
        resolution.error = "Assets directory not found"
        resolution.message = f'The project folder "{expected}" cannot be located: assets directory not found.'
        logger.warning(f"Asset root missing while resolving {job_number}")
        return resolution

    names = list_directory_names(store)
    folder = match_project_folder(names, job_number, project_name)
    if folder is not None:
        resolution.folder_name = folder
        logger.info(f"Resolved {job_number} to folder {folder}")
        return resolution

    resolution.available_folders = names
    resolution.error = "Project directory not found"
    available = ", ".join(names) if names else "no directories found"
    resolution.message = f'The project folder "{expected}" does not exist. Available folders: {available}.'
    logger.warning(f"No project folder for {job_number}")
    return resolution
