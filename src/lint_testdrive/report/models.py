"""Data model for checker reports.

Findings are the atomic input. Everything else (buckets, overlap shares,
the report itself) is derived per build and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


class ReportInputError(ValueError):
    """Raised when findings or the section lookup cannot produce a report."""


@dataclass(frozen=True, order=True)
class SourcePosition:
    """Exact location of a finding. Equality is plain tuple equality."""
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


@dataclass(frozen=True)
class Finding:
    """A single issue reported by a checker."""
    checker: str
    message: str
    position: SourcePosition
    sub_checker: Optional[str] = None
    source_lines: Tuple[str, ...] = ()
    severity: str = ""

    @property
    def identity(self) -> "CheckerIdentity":
        return CheckerIdentity(self.checker, self.sub_checker or "")


@dataclass(frozen=True, order=True)
class CheckerIdentity:
    """Composite key of checker name and optional sub-checker name.

    An empty ``sub_checker`` denotes the checker as a whole.
    """
    checker: str
    sub_checker: str = ""

    @property
    def display_name(self) -> str:
        if not self.sub_checker:
            return self.checker
        return f"{self.checker}/{self.sub_checker}"

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class OverlapShare:
    """Fraction of one identity's findings co-located with another identity's."""
    other: CheckerIdentity
    share: float

    @property
    def percent(self) -> str:
        return f"{100 * self.share:.0f}%"


@dataclass(frozen=True)
class CheckerBucket:
    """Findings of one checker, or of one sub-checker nested under it.

    ``findings`` holds only findings without a sub-checker for top-level
    buckets; findings with a sub-checker live in the matching entry of
    ``sub_checkers``. Sub-checker buckets never nest further.
    """
    identity: CheckerIdentity
    findings: Tuple[Finding, ...] = ()
    sub_checkers: Tuple["CheckerBucket", ...] = ()
    overlaps: Tuple[OverlapShare, ...] = ()

    @property
    def name(self) -> str:
        return self.identity.sub_checker or self.identity.checker

    @property
    def issue_count(self) -> int:
        return len(self.findings)

    @property
    def total_issue_count(self) -> int:
        """Own findings plus those of every nested sub-checker bucket."""
        return self.issue_count + sum(sub.issue_count for sub in self.sub_checkers)

    def sub_checker(self, name: str) -> Optional["CheckerBucket"]:
        for sub in self.sub_checkers:
            if sub.name == name:
                return sub
        return None

    def overlap_with(self, other: CheckerIdentity) -> Optional[float]:
        for overlap in self.overlaps:
            if overlap.other == other:
                return overlap.share
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "issues": self.total_issue_count,
            "findings": [
                {
                    "position": str(f.position),
                    "message": f.message,
                    "severity": f.severity,
                }
                for f in self.findings
            ],
            "sub_checkers": [sub.to_dict() for sub in self.sub_checkers],
            "overlaps": [
                {"name": o.other.display_name, "share": o.share}
                for o in self.overlaps
            ],
        }


@dataclass(frozen=True)
class Report:
    """Aggregated report over one batch of findings."""
    total_issues: int
    sections: Dict[str, Tuple[CheckerBucket, ...]] = field(default_factory=dict)
    section_order: Tuple[str, ...] = ()

    def iter_sections(self) -> Iterator[Tuple[str, Tuple[CheckerBucket, ...]]]:
        """Yield (label, buckets) in canonical order, skipping empty sections."""
        for label in self.section_order:
            buckets = self.sections.get(label, ())
            if buckets:
                yield label, buckets

    def checker(self, name: str) -> Optional[CheckerBucket]:
        for buckets in self.sections.values():
            for bucket in buckets:
                if bucket.name == name:
                    return bucket
        return None

    @property
    def checker_names(self) -> List[str]:
        return [bucket.name for _, buckets in self.iter_sections() for bucket in buckets]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_issues": self.total_issues,
            "section_order": list(self.section_order),
            "sections": {
                label: [bucket.to_dict() for bucket in buckets]
                for label, buckets in self.iter_sections()
            },
        }
