"""
Standard project folder catalog.

Every project root is presented with the same six category folders, in the
same order, whether or not they exist on disk.
"""

import logging
from typing import Dict, List

from .tree_builder import FileNode, make_folder_node

logger = logging.getLogger(__name__)

STANDARD_PROJECT_FOLDERS = [
    "AE Commands",
    "Contract Drawing",
    "Documents",
    "Approval Drawing",
    "FFu",
    "Take Order",
]

_STANDARD_KEYS = {name.lower() for name in STANDARD_PROJECT_FOLDERS}


def is_standard_folder(name: str) -> bool:
    return name.lower() in _STANDARD_KEYS


def ensure_standard_folders(nodes: List[FileNode], project_rel_path: str,
                            public_prefix: str = "") -> List[FileNode]:
    """
    Force the standard folders into a project root listing.

    Args:
        nodes: First-level nodes of a project root, as built by build_file_tree
        project_rel_path: Relative path of the project root, used for
            placeholder ids and paths
        public_prefix: URL prefix used for placeholder paths

    Returns:
        Standard folders in catalog order (existing ones keep their children,
        missing ones become empty placeholders), then other folders
        alphabetically, then files alphabetically.
    """
    standard: Dict[str, FileNode] = {}
    others: List[FileNode] = []
    files: List[FileNode] = []

    for node in nodes:
        if not node.is_folder:
            files.append(node)
        elif is_standard_folder(node.name) and node.name.lower() not in standard:
            standard[node.name.lower()] = node
        else:
            # case-variant duplicates of a standard folder stay reachable here
            others.append(node)

    result: List[FileNode] = []
    for standard_name in STANDARD_PROJECT_FOLDERS:
        existing = standard.get(standard_name.lower())
        if existing is not None:
            result.append(existing)
        else:
            logger.debug(f"Adding placeholder {standard_name} under {project_rel_path}")
            result.append(make_folder_node(project_rel_path, standard_name, public_prefix,
                                           children=[]))

    result.extend(sorted(others, key=lambda n: (n.name.lower(), n.name)))
    result.extend(sorted(files, key=lambda n: (n.name.lower(), n.name)))
    return result
