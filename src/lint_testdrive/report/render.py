"""Render a Report as text lines or JSON."""

import json
from typing import List, Sequence

from .excerpt import dedent_excerpt, pinpoint_column
from .models import CheckerBucket, Finding, OverlapShare, Report


def format_overlaps(overlaps: Sequence[OverlapShare]) -> str:
    """Format already-filtered overlap shares as a line suffix."""
    if not overlaps:
        return ""
    parts = [f"{o.other.display_name} ({o.percent})" for o in overlaps]
    return "; intersects with " + ", ".join(parts)


def format_finding(finding: Finding, indent: str = "") -> List[str]:
    """Format one finding with its dedented, caret-pinpointed excerpt."""
    lines = [f"{indent}{finding.position}: {finding.message}"]
    if not finding.source_lines:
        return lines

    excerpt, column = dedent_excerpt(finding.source_lines, finding.position.column)
    text = pinpoint_column("\n".join(excerpt), column)
    lines.extend(f"{indent}  {line}" for line in text.split("\n"))
    return lines


def _bucket_lines(bucket: CheckerBucket, count: int, indent: str, verbose: bool) -> List[str]:
    lines = [f"{indent}* {bucket.name}: {count} issues{format_overlaps(bucket.overlaps)}"]
    if verbose:
        for finding in bucket.findings:
            lines.extend(format_finding(finding, indent + "    "))
    return lines


def render_text(report: Report, verbose: bool = False) -> List[str]:
    """Render the report as plain text lines.

    Checker lines count the checker's own findings plus those of its
    sub-checkers; sub-checker lines count their own findings.
    """
    lines = [f"There are {report.total_issues} issues found"]
    for label in report.section_order:
        lines.append(f"=== Section {label} ===")
        for bucket in report.sections.get(label, ()):
            lines.extend(_bucket_lines(bucket, bucket.total_issue_count, "  ", verbose))
            for sub in bucket.sub_checkers:
                lines.extend(_bucket_lines(sub, sub.issue_count, "    ", verbose))
    return lines


def render_json(report: Report) -> str:
    """Render the report as an indented JSON document."""
    return json.dumps(report.to_dict(), indent=2)
