"""SQL 텍스트 분석 모듈."""

from sqlapp.analysis.parameter_extractor import (
    ParameterExtractor,
    ScanMode,
    extract_parameter_names,
    extract_parameter_occurrences,
)
from sqlapp.analysis.statement_analyzer import (
    StatementAnalyzer,
    has_limit_clause,
    has_offset_clause,
    has_order_by_clause,
    has_paging_conflict,
    is_select_query,
    is_suitable_for_paging,
    paging_compatibility,
)

__all__ = [
    "ParameterExtractor",
    "ScanMode",
    "StatementAnalyzer",
    "extract_parameter_names",
    "extract_parameter_occurrences",
    "has_limit_clause",
    "has_offset_clause",
    "has_order_by_clause",
    "has_paging_conflict",
    "is_select_query",
    "is_suitable_for_paging",
    "paging_compatibility",
]
