"""
File Tree Builder

Scans a directory on the asset store into a tree of FileNode objects for
the UI tree renderers. The walk uses an explicit work stack that carries
the remaining depth budget, so deep or adversarial trees cannot exhaust
the call stack.
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Any

from .store import AssetStore, join_rel
from .errors import UnsafePathError

logger = logging.getLogger(__name__)

FOLDER = "folder"
FILE = "file"


@dataclass
class FileNode:
    """
    A file or folder in a project tree.

    For folders, children is None when the folder was not expanded (depth
    budget exhausted) and an empty list when it was expanded and is empty.
    """
    id: str
    name: str
    type: str
    path: str
    extension: Optional[str] = None
    size: Optional[int] = None
    children: Optional[List["FileNode"]] = None

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "name": self.name, "type": self.type, "path": self.path}
        if self.extension is not None:
            data["extension"] = self.extension
        if self.size is not None:
            data["size"] = self.size
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def public_path(public_prefix: str, relative_path: str) -> str:
    """Join a public URL prefix and a relative path with single '/' separators."""
    relative_path = relative_path.replace("\\", "/").strip("/")
    prefix = public_prefix.rstrip("/")
    if not relative_path:
        return prefix or "/"
    return f"{prefix}/{relative_path}"


def node_sort_key(node: FileNode):
    """Folders before files, then case-insensitive name."""
    return (0 if node.is_folder else 1, node.name.lower(), node.name)


def sort_nodes(nodes: List[FileNode]) -> List[FileNode]:
    nodes.sort(key=node_sort_key)
    return nodes


def is_excluded(name: str, exclude: Iterable[str]) -> bool:
    """True for dotfiles and names containing any exclusion token."""
    if name.startswith("."):
        return True
    upper = name.upper()
    return any(token and token.upper() in upper for token in exclude)


def make_folder_node(base_path: str, name: str, public_prefix: str,
                     children: Optional[List[FileNode]] = None) -> FileNode:
    relative_path = join_rel(base_path, name)
    return FileNode(
        id=relative_path,
        name=name,
        type=FOLDER,
        path=public_path(public_prefix, relative_path),
        children=children,
    )


def build_file_tree(store: AssetStore, rel_dir: str, base_path: str = "",
                    public_prefix: str = "", max_depth: Optional[int] = None,
                    exclude: Iterable[str] = ()) -> List[FileNode]:
    """
    Build a sorted file tree for a directory.

    Args:
        store: Asset store to read from
        rel_dir: Directory to scan, relative to the store root
        base_path: Relative-path accumulator used for node ids and paths
        public_prefix: URL prefix prepended to every node path
        max_depth: Levels of sub-folders to expand; None for unbounded,
            0 lists rel_dir only and leaves its folders unexpanded
        exclude: Case-insensitive name tokens to skip (e.g. "RFI")

    Returns:
        Top-level nodes of rel_dir. An unreadable directory contributes an
        empty list at its position; the rest of the scan continues.
    """
    exclude = tuple(exclude)
    root: List[FileNode] = []
    stack = [(rel_dir, base_path, max_depth, root)]

    while stack:
        dir_path, node_base, budget, target = stack.pop()

        try:
            entries = store.list_entries(dir_path)
        except (OSError, UnsafePathError) as e:
            logger.warning(f"Unable to read directory {dir_path or '/'}: {e}")
            continue

        for entry in entries:
            if is_excluded(entry.name, exclude):
                continue

            entry_rel = join_rel(dir_path, entry.name)
            node_rel = join_rel(node_base, entry.name)

            if entry.is_dir:
                expand = budget is None or budget > 0
                node = make_folder_node(node_base, entry.name, public_prefix,
                                        children=[] if expand else None)
                if expand:
                    next_budget = None if budget is None else budget - 1
                    stack.append((entry_rel, node_rel, next_budget, node.children))
            else:
                node = FileNode(
                    id=node_rel,
                    name=entry.name,
                    type=FILE,
                    path=public_path(public_prefix, node_rel),
                    extension=os.path.splitext(entry.name)[1].lower(),
                    size=_file_size(store, entry_rel),
                )
            target.append(node)

        sort_nodes(target)

    return root


def _file_size(store: AssetStore, rel_path: str) -> Optional[int]:
    try:
        return store.stat(rel_path).size
    except (OSError, UnsafePathError) as e:
        logger.debug(f"Unable to stat {rel_path}: {e}")
        return None

