"""
Document Path Resolution for AssetNav

Predicts where a project document lives from its record metadata when the
source records carry no stored path. Supported categories:
- Drawings (approval drawings folder, legacy drawing log)
- Invoices
- Submissions
- Change orders (one folder per change order)
- RFIs

Each category is its own record type holding only the fields its naming
templates use. Templates are tried most specific first; a record with too
little metadata for any template resolves to None, meaning "no document
available". Predicted paths are best effort and are not checked on disk.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union
from urllib.parse import quote

from .errors import UnknownCategoryError
from .folder_resolver import build_project_folder_name
from .identifiers import derive_co_number, extract_drawing_number_from_filename
from .path_validator import is_url, normalize_path

logger = logging.getLogger(__name__)

APPROVAL_DRAWINGS_FOLDER = "05 Approval Drawings"
DOCUMENTS_FOLDER = "04 Documents"
CHANGE_ORDER_FOLDER = "Change Order (CO)"
RFI_FOLDER = "004_RFI's/PRO_RFI's"
LEGACY_DRAWING_FOLDER = "Drawing-Log"

DEFAULT_REVISION = "00"
MAX_DESCRIPTION_LENGTH = 150
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


# === Record types ===

@dataclass
class DrawingRecord:
    drawing_number: Optional[str] = None
    job_number: Optional[str] = None
    project_name: Optional[str] = None
    revision: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[str] = None
    record_id: Optional[str] = None

    category = "drawing"


@dataclass
class InvoiceRecord:
    invoice_id: Optional[str] = None
    project_id: Optional[str] = None

    category = "invoice"


@dataclass
class SubmissionRecord:
    drawing_number: Optional[str] = None
    project_id: Optional[str] = None
    record_id: Optional[str] = None

    category = "submission"


@dataclass
class ChangeOrderRecord:
    change_order_id: Optional[str] = None
    job_number: Optional[str] = None
    project_name: Optional[str] = None
    sequential_number: Optional[str] = None

    category = "change_order"


@dataclass
class RfiRecord:
    rfi_number: Optional[str] = None
    job_number: Optional[str] = None
    project_name: Optional[str] = None
    project_id: Optional[str] = None
    record_id: Optional[str] = None

    category = "rfi"


DocumentRecord = Union[DrawingRecord, InvoiceRecord, SubmissionRecord, ChangeOrderRecord, RfiRecord]


# === Helpers ===

def encode_segment(value: Any) -> str:
    """Percent-encode one path segment the way browsers encode URI components."""
    return quote(str(value), safe="!'()*~")


def sanitize_description(description: Optional[str]) -> str:
    """Strip characters invalid in file names, collapse whitespace, cap length."""
    if not description:
        return ""
    cleaned = INVALID_FILENAME_CHARS.sub("", str(description))
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned[:MAX_DESCRIPTION_LENGTH]


def document_project_folder(job_number: Optional[str], project_name: Optional[str]) -> Optional[str]:
    """Folder name used in document paths: "<job>_<name>" or "PRO 042_<name>"."""
    if job_number:
        return build_project_folder_name(job_number, project_name, separator="_")
    name = (project_name or "").strip()
    return name or None


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _asset_path(*segments: str) -> str:
    return "/assets/" + "/".join(segments)


def _project_path(project_id: str, section: str, name: str) -> str:
    return f"/projects/{encode_segment(project_id)}/{section}/{encode_segment(name)}.pdf"


# === Per-category templates ===

def _drawing_candidates(record: DrawingRecord) -> Iterator[str]:
    dwg_no = _clean(record.drawing_number)
    job = _clean(record.job_number)
    project_id = _clean(record.project_id)

    if dwg_no:
        folder = document_project_folder(job, record.project_name)
        description = sanitize_description(record.description)
        revision = _clean(record.revision) or DEFAULT_REVISION

        if folder and job and description:
            filename = f"{job}_{dwg_no}_APP {revision}_{description}.pdf"
            yield _asset_path(encode_segment(folder), APPROVAL_DRAWINGS_FOLDER, encode_segment(filename))
        if folder and job:
            yield _asset_path(encode_segment(folder), APPROVAL_DRAWINGS_FOLDER,
                              encode_segment(f"{job}_{dwg_no}.pdf"))
        if folder:
            yield _asset_path(encode_segment(folder), APPROVAL_DRAWINGS_FOLDER,
                              encode_segment(f"{dwg_no}.pdf"))
        if job:
            yield _asset_path(encode_segment(job), LEGACY_DRAWING_FOLDER, f"{encode_segment(dwg_no)}.pdf")
        if project_id:
            yield _project_path(project_id, "drawings", dwg_no)

    record_id = _clean(record.record_id)
    if project_id and record_id:
        yield _project_path(project_id, "drawing_log", record_id)


def _invoice_candidates(record: InvoiceRecord) -> Iterator[str]:
    invoice_id = _clean(record.invoice_id)
    project_id = _clean(record.project_id)
    if invoice_id and project_id:
        yield _project_path(project_id, "invoices", invoice_id)


def _submission_candidates(record: SubmissionRecord) -> Iterator[str]:
    project_id = _clean(record.project_id)
    if not project_id:
        return
    drawing_number = _clean(record.drawing_number)
    if drawing_number:
        yield _project_path(project_id, "submissions", drawing_number)
    record_id = _clean(record.record_id)
    if record_id:
        yield _project_path(project_id, "upcoming_submissions", record_id)


def _change_order_candidates(record: ChangeOrderRecord) -> Iterator[str]:
    change_order_id = _clean(record.change_order_id)
    job = _clean(record.job_number)
    if not (change_order_id and job):
        return

    co_number = derive_co_number(change_order_id, job)
    sequence = _clean(record.sequential_number) or co_number
    folder = document_project_folder(job, record.project_name)
    co_folder = f"PRO CO#{sequence}_{job}_CO#{co_number}"
    filename = f"{co_folder} (1).pdf"

    yield "/assets/files/" + "/".join([
        encode_segment(folder),
        DOCUMENTS_FOLDER,
        CHANGE_ORDER_FOLDER,
        encode_segment(co_folder),
        encode_segment(filename),
    ])


def _rfi_candidates(record: RfiRecord) -> Iterator[str]:
    rfi_no = _clean(record.rfi_number)
    job = _clean(record.job_number)
    project_id = _clean(record.project_id)

    if rfi_no and job:
        folder = document_project_folder(job, record.project_name)
        yield _asset_path(encode_segment(folder), DOCUMENTS_FOLDER, RFI_FOLDER,
                          f"{encode_segment(rfi_no)}.pdf")
    if rfi_no and project_id:
        yield _project_path(project_id, "rfi", rfi_no)

    record_id = _clean(record.record_id)
    if record_id and project_id:
        yield _project_path(project_id, "rfi_submissions", record_id)


_CANDIDATES: Dict[type, Callable[[Any], Iterator[str]]] = {
    DrawingRecord: _drawing_candidates,
    InvoiceRecord: _invoice_candidates,
    SubmissionRecord: _submission_candidates,
    ChangeOrderRecord: _change_order_candidates,
    RfiRecord: _rfi_candidates,
}


# === Public API ===

def stored_path_override(stored_path: Optional[str]) -> Optional[str]:
    """
    Apply the stored-path short-circuit.

    URLs and '/'-rooted paths are returned as stored; any other non-empty
    value gets a leading '/'. Blank values return None.
    """
    if not stored_path or not isinstance(stored_path, str):
        return None
    trimmed = stored_path.strip()
    if not trimmed:
        return None
    if is_url(trimmed) or trimmed.startswith("/"):
        return trimmed
    return f"/{trimmed}"


def candidate_paths(record: DocumentRecord) -> Iterator[str]:
    """Yield every synthesized path for a record, most specific first."""
    try:
        generator = _CANDIDATES[type(record)]
    except KeyError:
        raise TypeError(f"Unsupported document record: {type(record).__name__}") from None
    return generator(record)


def resolve_document_path(record: DocumentRecord, stored_path: Optional[str] = None) -> Optional[str]:
    """
    Resolve the path of a document.

    Args:
        record: One of the category record types
        stored_path: Path already known to the source records, if any

    Returns:
        The stored path when present, else the most specific synthesized
        path, else None
    """
    override = stored_path_override(stored_path)
    if override is not None:
        return override

    for path in candidate_paths(record):
        return path

    logger.debug(f"No {record.category} template applies to {record!r}")
    return None


def resolve_and_validate(record: DocumentRecord, stored_path: Optional[str] = None) -> Optional[str]:
    """
    Resolve a document path that passes the path validator.

    A stored path is validated on its own. Otherwise the first synthesized
    candidate that validates wins, so a description the validator rejects
    (e.g. one containing "...") falls through to the shorter templates.
    """
    override = stored_path_override(stored_path)
    if override is not None:
        return normalize_path(override)

    for path in candidate_paths(record):
        valid = normalize_path(path)
        if valid is not None:
            return valid
        logger.debug(f"Skipping rejected {record.category} path {path!r}")

    return None


# === Loose metadata adapters ===

CATEGORY_ALIASES = {
    "drawing": "drawing",
    "drawings": "drawing",
    "drawing_log": "drawing",
    "drawings_yet_to_return": "drawing",
    "drawings_yet_to_release": "drawing",
    "invoice": "invoice",
    "invoices": "invoice",
    "invoice_history": "invoice",
    "submission": "submission",
    "submissions": "submission",
    "upcoming_submissions": "submission",
    "change_order": "change_order",
    "change_orders": "change_order",
    "rfi": "rfi",
    "rfis": "rfi",
    "rfi_submissions": "rfi",
}

DRAWING_NUMBER_KEYS = ("dwgNo", "dwg_no", "drawingNo", "drawing_number")
JOB_NUMBER_KEYS = ("jobNo", "job_number", "jobNumber", "projectNumber", "project_number")
PROJECT_NAME_KEYS = ("projectName", "project_name")
PROJECT_ID_KEYS = ("projectId", "project_id")
FILE_NAME_KEYS = ("fileName", "file_name", "filename")


def _pick(data: Mapping[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = _clean(data.get(key))
        if value is not None:
            return value
    return None


def _drawing_number(data: Mapping[str, Any]) -> Optional[str]:
    """Drawing number from its field, else parsed from an attached file name or URL."""
    drawing_number = _pick(data, DRAWING_NUMBER_KEYS)
    if drawing_number:
        return drawing_number
    file_name = _pick(data, FILE_NAME_KEYS)
    url = _pick(data, ("pdfPath", "pdf_path", "url"))
    if file_name or url:
        return extract_drawing_number_from_filename(file_name or "", url or "")
    return None


def normalize_category(category: str) -> str:
    key = str(category or "").strip().lower().replace("-", "_")
    try:
        return CATEGORY_ALIASES[key]
    except KeyError:
        raise UnknownCategoryError(category) from None


def record_from_metadata(category: str, data: Mapping[str, Any],
                         project_id: Optional[str] = None) -> DocumentRecord:
    """
    Build a typed record from a loosely keyed metadata dict.

    Accepts the camelCase and snake_case field names used by the dashboard's
    record sources, and module names such as "drawing_log" or
    "rfi_submissions" as categories.

    Raises:
        UnknownCategoryError: If the category is not recognized
    """
    kind = normalize_category(category)
    project_id = _clean(project_id) or _pick(data, PROJECT_ID_KEYS)
    record_id = _pick(data, ("id",))

    if kind == "drawing":
        return DrawingRecord(
            drawing_number=_drawing_number(data),
            job_number=_pick(data, JOB_NUMBER_KEYS),
            project_name=_pick(data, PROJECT_NAME_KEYS),
            revision=_pick(data, ("revision", "rev")),
            description=_pick(data, ("description",)),
            project_id=project_id,
            record_id=record_id,
        )
    if kind == "invoice":
        return InvoiceRecord(
            invoice_id=_pick(data, ("invoiceId", "invoice_id")) or record_id,
            project_id=project_id,
        )
    if kind == "submission":
        return SubmissionRecord(
            drawing_number=_drawing_number(data),
            project_id=project_id,
            record_id=record_id,
        )
    if kind == "change_order":
        return ChangeOrderRecord(
            change_order_id=_pick(data, ("changeOrderId", "change_order_id")) or record_id,
            job_number=_pick(data, JOB_NUMBER_KEYS),
            project_name=_pick(data, PROJECT_NAME_KEYS),
            sequential_number=_pick(data, ("sequentialNumber", "sequential_number")),
        )
    return RfiRecord(
        rfi_number=_pick(data, ("rfiNo", "rfi_no", "proRfiNo", "pro_rfi_no", "rfi_number")),
        job_number=_pick(data, JOB_NUMBER_KEYS),
        project_name=_pick(data, PROJECT_NAME_KEYS),
        project_id=project_id,
        record_id=record_id,
    )
