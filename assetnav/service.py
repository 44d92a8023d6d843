"""
Request-level operations for AssetNav.

Wires the resolution engine together for its callers (CLI, MCP server, web
handlers):
- Project file trees with the standard folders merged in
- Sidebar project listing
- Full asset directory tree
- Document path resolution for viewers and download links
- Change order listings with predicted document paths

Results are plain dicts ready for JSON serialization. Ordinary misses are
reported inside the result; only an asset root that cannot be listed raises.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import unquote

from .config import Settings, load_settings
from .doc_resolver import ChangeOrderRecord, record_from_metadata, resolve_and_validate
from .drive_urls import (
    convert_google_drive_to_download_url, convert_google_drive_url, is_google_drive_url
)
from .folder_resolver import list_directory_names, resolve_project_folder
from .identifiers import format_change_order_id, sequential_number
from .projects import ProjectRegistry
from .standard_folders import ensure_standard_folders
from .store import AssetStore, LocalAssetStore
from .tree_builder import build_file_tree, public_path

logger = logging.getLogger(__name__)

DOCUMENT_MODES = ("path", "view", "embed", "download")


def _timestamp() -> str:
    return datetime.now().isoformat()


class AssetNavigator:
    """Entry point for folder, tree and document lookups."""

    def __init__(self, settings: Optional[Settings] = None,
                 registry: Optional[ProjectRegistry] = None,
                 asset_store: Optional[AssetStore] = None,
                 files_store: Optional[AssetStore] = None):
        self.settings = settings or load_settings()
        self.registry = registry if registry is not None else ProjectRegistry.from_file(
            self.settings.project_registry)
        self.asset_store = asset_store or LocalAssetStore(self.settings.asset_root)
        self.files_store = files_store or LocalAssetStore(self.settings.files_root)

    @property
    def files_prefix(self) -> str:
        return public_path(self.settings.public_prefix, self.settings["files_subdir"])

    def project_files(self, project_id: str, project_name: Optional[str] = None,
                      max_depth: Optional[int] = None) -> Dict[str, Any]:
        """
        Build the file tree for one project folder.

        Args:
            project_id: Job number, possibly URL-encoded
            project_name: Display name; looked up in the registry if omitted
            max_depth: Folder levels to expand below the project root; None
                for the whole tree

        Returns:
            {"data", "projectId", "projectFolder", "count", "timestamp"} on
            success, or {"data": [], "error", "message", "availableFolders"}

        Raises:
            AssetRootUnavailable: If the asset root cannot be listed
        """
        decoded = unquote(project_id or "").strip()
        name = project_name or self.registry.project_name(decoded)

        resolution = resolve_project_folder(self.asset_store, decoded, name)
        if not resolution.found:
            return {"data": [], **resolution.diagnostic()}

        folder = resolution.folder_name
        prefix = self.settings.public_prefix
        tree = build_file_tree(self.asset_store, folder, base_path=folder, public_prefix=prefix,
                               max_depth=max_depth)
        tree = ensure_standard_folders(tree, folder, prefix)

        return {
            "data": [node.to_dict() for node in tree],
            "projectId": decoded,
            "projectFolder": folder,
            "count": len(tree),
            "timestamp": _timestamp(),
        }

    def sidebar_projects(self) -> Dict[str, Any]:
        """
        List every top-level folder of the files area as a sidebar project.

        Each project carries a depth-limited tree with the standard folders
        merged in. Entries matching the sidebar exclusion tokens are hidden.

        Raises:
            AssetRootUnavailable: If the files directory cannot be listed
        """
        if not self.files_store.exists(""):
            return {
                "data": [],
                "error": "Files directory not found",
                "message": "The files directory does not exist.",
            }

        # raises if the files root exists but cannot be listed
        list_directory_names(self.files_store)

        prefix = self.files_prefix
        exclude = self.settings.sidebar_exclude
        projects = build_file_tree(self.files_store, "", public_prefix=prefix,
                                   max_depth=0, exclude=exclude)

        for project in projects:
            if not project.is_folder:
                continue
            children = build_file_tree(self.files_store, project.name, base_path=project.name,
                                       public_prefix=prefix,
                                       max_depth=self.settings.sidebar_depth,
                                       exclude=exclude)
            project.children = ensure_standard_folders(children, project.name, prefix)

        return {
            "data": [project.to_dict() for project in projects],
            "count": len(projects),
            "timestamp": _timestamp(),
        }

    def directory_tree(self) -> Dict[str, Any]:
        """Return the full, unbounded tree of the files area."""
        if not self.files_store.exists(""):
            return {"data": [], "error": "Files directory not found"}
        list_directory_names(self.files_store)
        tree = build_file_tree(self.files_store, "", public_prefix=self.files_prefix)
        return {"data": [node.to_dict() for node in tree]}

    def open_document(self, category: str, metadata: Mapping[str, Any],
                      stored_path: Optional[str] = None,
                      project_id: Optional[str] = None,
                      mode: str = "path") -> Optional[str]:
        """
        Resolve the viewer path for a document record.

        Missing project names are filled in from the registry. Google Drive
        links are rewritten for the requested mode: "view" and "embed" give
        the viewer forms, "download" the direct-download form, "path" leaves
        them as stored.

        Returns:
            A validated path or URL, or None when no document is available

        Raises:
            UnknownCategoryError: If the category is not recognized
            ValueError: If the mode is not one of DOCUMENT_MODES
        """
        if mode not in DOCUMENT_MODES:
            raise ValueError(f"Unknown document mode: {mode!r}")
        record = record_from_metadata(category, metadata, project_id)

        job_number = getattr(record, "job_number", None)
        if job_number and hasattr(record, "project_name") and not record.project_name:
            name = self.registry.project_name(job_number)
            if name:
                record = replace(record, project_name=name)

        path = resolve_and_validate(record, stored_path)
        if path is None:
            logger.info(f"No {record.category} document available for {dict(metadata)!r}")
            return None

        if is_google_drive_url(path):
            if mode == "download":
                return convert_google_drive_to_download_url(path)
            if mode in ("view", "embed"):
                return convert_google_drive_url(path, use_embed=(mode == "embed"))
        return path

    def change_order_listing(self, job_number: str, change_orders: List[Mapping[str, Any]],
                             project_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Format change orders and predict their document paths.

        Unless a change order carries its own sequential number, one is
        derived from list position (100 + index + 1); those are not stable
        identifiers.
        """
        name = project_name or self.registry.project_name(job_number)
        rows = []

        for index, co in enumerate(change_orders):
            raw_id = co.get("changeOrderId") or co.get("change_order_id") or ""
            formatted_id = format_change_order_id(job_number, raw_id, index)
            sequence = str(co.get("sequentialNumber") or co.get("sequential_number")
                           or sequential_number(index))
            record = ChangeOrderRecord(
                change_order_id=formatted_id,
                job_number=job_number,
                project_name=name,
                sequential_number=sequence,
            )
            stored = co.get("pdfPath") or co.get("pdf_path")
            rows.append({
                "id": f"co-{job_number}-{raw_id}-{index}",
                "changeOrderId": formatted_id,
                "sequentialNumber": sequence,
                "description": co.get("description"),
                "pdfPath": resolve_and_validate(record, stored),
            })

        return rows
