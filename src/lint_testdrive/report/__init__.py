"""Report aggregation: checker buckets, overlap shares and sections."""

from .aggregator import (
    DEFAULT_OVERLAP_THRESHOLD,
    DEFAULT_SECTION_ORDER,
    ReportBuilder,
    build_report,
    rank_overlaps,
)
from .cooccurrence import count_cooccurrences, identities_by_position
from .excerpt import dedent_excerpt, pinpoint_column
from .models import (
    CheckerBucket,
    CheckerIdentity,
    Finding,
    OverlapShare,
    Report,
    ReportInputError,
    SourcePosition,
)
from .render import format_overlaps, render_json, render_text
from .subchecker import SUB_CHECKER_PATTERN, extract_sub_checker

__all__ = [
    "DEFAULT_OVERLAP_THRESHOLD",
    "DEFAULT_SECTION_ORDER",
    "ReportBuilder",
    "build_report",
    "rank_overlaps",
    "count_cooccurrences",
    "identities_by_position",
    "dedent_excerpt",
    "pinpoint_column",
    "CheckerBucket",
    "CheckerIdentity",
    "Finding",
    "OverlapShare",
    "Report",
    "ReportInputError",
    "SourcePosition",
    "format_overlaps",
    "render_json",
    "render_text",
    "SUB_CHECKER_PATTERN",
    "extract_sub_checker",
]
