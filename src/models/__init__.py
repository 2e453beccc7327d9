"""Domain models for the Excel -> real_estate_company reconciler."""

from .cell_value import CellValue, HyperlinkValue, PlainValue
from .config_models import DatabaseConfig, OutputConfig, ReconcileConfig, SearchColumns
from .match_result import CandidateRecord, MatchResult
from .processing_result import ReconcileResult
from .source_sheet import SourceSheet

__all__ = [
    # Cell values
    "CellValue",
    "HyperlinkValue",
    "PlainValue",
    # Configuration models
    "DatabaseConfig",
    "OutputConfig",
    "ReconcileConfig",
    "SearchColumns",
    # Processing models
    "CandidateRecord",
    "MatchResult",
    "ReconcileResult",
    "SourceSheet",
]
