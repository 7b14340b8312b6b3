"""Utility package for fetching and exporting blocket.se car ads."""

from .cli import main as cli_main
from .client import (
    acquire_token,
    create_session,
    extract_token,
    fetch_catalog,
    fetch_listings,
)
from .errors import (
    BlocketError,
    DecodeError,
    ExtractionError,
    NetworkError,
    NotFoundError,
    RowError,
)
from .export import ExportSummary, dump_json, export_csv, project_row
from .models import Ad, CategoryCatalog, CategoryCounter, ExportRow, SearchResult
from .selector import Selection, require_selection, select_by_label

__all__ = [
    "Ad",
    "BlocketError",
    "CategoryCatalog",
    "CategoryCounter",
    "DecodeError",
    "ExportRow",
    "ExportSummary",
    "ExtractionError",
    "NetworkError",
    "NotFoundError",
    "RowError",
    "SearchResult",
    "Selection",
    "acquire_token",
    "cli_main",
    "create_session",
    "dump_json",
    "export_csv",
    "extract_token",
    "fetch_catalog",
    "fetch_listings",
    "project_row",
    "require_selection",
    "select_by_label",
]
