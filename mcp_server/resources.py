# Resource definition module for AssetNav MCP server

from mcp_server.server import mcp, error_handler
from assetnav.config import load_settings
from assetnav.folder_resolver import list_directory_names
from assetnav.identifiers import extract_job_number
from assetnav.store import LocalAssetStore

@mcp.resource("assetnav://folders")
@error_handler
def list_project_folders() -> dict:
    """
    List the project folders on the asset root with the job number parsed from each name.
    Returns:
      dict with a 'folders' key, listing name and job_number for each folder.
    """
    store = LocalAssetStore(load_settings().asset_root)
    if not store.exists(""):
        raise RuntimeError("Asset root not found: " + store.root)
    folders = [
        {"name": name, "job_number": extract_job_number(name)}
        for name in list_directory_names(store)
    ]
    return {"folders": folders}
