# Tool definition module for AssetNav MCP server

from typing import Dict, Optional
from mcp_server.server import mcp, error_handler
from assetnav.identifiers import extract_job_number, normalize_drawing_number
from assetnav.service import AssetNavigator


def get_navigator() -> AssetNavigator:
    """Build a navigator from current settings; nothing is cached between calls."""
    return AssetNavigator()


@mcp.tool()
@error_handler
def project_files(project_id: str, project_name: Optional[str] = None) -> dict:
    """
    Return the file tree of a project folder with the standard folders merged in.
    Arguments:
      project_id: Job number, e.g. "U2524"
      project_name: Optional display name used to pick between similar folders
    Returns:
      dict with:
        - status: "success" or "error"
        - folder: The resolved project folder name (if success)
        - tree: List of file/folder nodes (if success)
        - message, available_folders: Diagnostics (if error)
    """
    if not isinstance(project_id, str) or not project_id.strip():
        return {"status": "error", "message": "project_id must be a non-empty string"}

    result = get_navigator().project_files(project_id, project_name)
    if result.get("error"):
        return {
            "status": "error",
            "message": result.get("message") or result["error"],
            "available_folders": result.get("availableFolders", []),
        }
    return {"status": "success", "folder": result["projectFolder"], "tree": result["data"]}


@mcp.tool()
@error_handler
def sidebar_projects() -> dict:
    """
    List all projects in the files area with depth-limited trees for the sidebar.
    """
    result = get_navigator().sidebar_projects()
    if result.get("error"):
        return {"status": "error", "message": result["error"]}
    return {"status": "success", "projects": result["data"]}


@mcp.tool()
@error_handler
def resolve_document(category: str, fields: Dict[str, str],
                     stored_path: Optional[str] = None,
                     project_id: Optional[str] = None,
                     mode: str = "path") -> dict:
    """
    Resolve the viewer path for a document record.
    Arguments:
      category: drawing, invoice, submission, change_order or rfi
      fields: Record fields such as dwgNo, jobNo, projectName, revision, description
      stored_path: Path already known for the document, if any
      project_id: Project id used by /projects/ paths
      mode: "path", "view", "embed" or "download"; applied to Google Drive links
    Returns:
      dict with status "success" and path, or status "not_found"
    """
    if not isinstance(fields, dict):
        return {"status": "error", "message": "fields must be a dict"}
    path = get_navigator().open_document(category, fields, stored_path, project_id, mode)
    if path is None:
        return {"status": "not_found", "message": "No document available"}
    return {"status": "success", "path": path}


@mcp.tool()
@error_handler
def extract_identifiers(text: str) -> dict:
    """
    Extract the job number and drawing number found in a piece of text.
    """
    return {
        "status": "success",
        "job_number": extract_job_number(text),
        "drawing_number": normalize_drawing_number(text),
    }
