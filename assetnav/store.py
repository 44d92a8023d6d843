"""
Asset Store Interface

Read-only view of the shared asset store that project folders live on.
All paths handed to a store are '/'-separated and relative to its root;
the empty string names the root itself.
"""

import os
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from .errors import UnsafePathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """A single directory entry."""
    name: str
    is_dir: bool


@dataclass(frozen=True)
class EntryStat:
    """Size and kind of a store path."""
    size: int
    is_dir: bool


def join_rel(*parts: str) -> str:
    """Join relative path parts with '/', dropping empty parts."""
    return "/".join(p.strip("/") for p in parts if p and p.strip("/"))


class AssetStore(ABC):
    """
    Abstract read-only asset store.

    Implementations raise OSError subclasses when a path cannot be read;
    callers decide whether that is fatal.
    """

    @abstractmethod
    def list_entries(self, rel_path: str = "") -> List[Entry]:
        """
        List the entries of a directory.

        Args:
            rel_path: Directory path relative to the store root

        Returns:
            Entries in the order the backend reports them
        """

    @abstractmethod
    def stat(self, rel_path: str) -> EntryStat:
        """Return size and kind for a path."""

    @abstractmethod
    def exists(self, rel_path: str) -> bool:
        """Return True if the path exists."""


class LocalAssetStore(AssetStore):
    """Asset store backed by a directory on the local filesystem."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def __repr__(self) -> str:
        return f"LocalAssetStore({self.root!r})"

    def _full_path(self, rel_path: str) -> str:
        parts = [p for p in rel_path.replace("\\", "/").split("/") if p]
        if any(p == ".." for p in parts):
            raise UnsafePathError(rel_path)
        full_path = os.path.normpath(os.path.join(self.root, *parts))
        if full_path != self.root and not full_path.startswith(self.root + os.sep):
            raise UnsafePathError(rel_path)
        return full_path

    def list_entries(self, rel_path: str = "") -> List[Entry]:
        entries = []
        with os.scandir(self._full_path(rel_path)) as it:
            for entry in it:
                # symlinks are listed as files and never descended into
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                entries.append(Entry(entry.name, is_dir))
        return entries

    def stat(self, rel_path: str) -> EntryStat:
        full_path = self._full_path(rel_path)
        st = os.stat(full_path)
        return EntryStat(size=st.st_size, is_dir=os.path.isdir(full_path))

    def exists(self, rel_path: str) -> bool:
        try:
            return os.path.exists(self._full_path(rel_path))
        except UnsafePathError:
            logger.warning(f"Rejected unsafe path {rel_path!r}")
            return False
