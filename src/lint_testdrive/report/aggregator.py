"""Checker aggregation and report assembly.

Groups findings by checker (and sub-checker), derives overlap shares from
position co-occurrence, and assigns checkers to report sections. The build is
a pure function of its inputs: no I/O and no state kept between builds.
"""

import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .cooccurrence import count_cooccurrences
from .models import (
    CheckerBucket,
    CheckerIdentity,
    Finding,
    OverlapShare,
    Report,
    ReportInputError,
)

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_THRESHOLD = 0.5

DEFAULT_SECTION_ORDER: Tuple[str, ...] = (
    "default",
    "bugs",
    "unused",
    "format",
    "complexity",
    "performance",
    "test",
    "comment",
    "style",
    "other",
)


def rank_overlaps(
    cooccurred: Optional[Counter],
    finding_count: int,
    threshold: float,
) -> Tuple[OverlapShare, ...]:
    """Turn raw co-occurrence counts of one identity into ranked shares.

    Shares are sorted by share descending, then by the other identity's
    display name. Only shares strictly above ``threshold`` are kept. An
    identity without findings has no shares.
    """
    if not cooccurred or finding_count <= 0:
        return ()
    shares = [
        OverlapShare(other=other, share=count / finding_count)
        for other, count in cooccurred.items()
    ]
    shares.sort(key=lambda s: (-s.share, s.other.display_name))
    return tuple(s for s in shares if s.share > threshold)


class ReportBuilder:
    """Build a Report from a batch of findings."""

    def __init__(
        self,
        overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD,
        section_order: Sequence[str] = DEFAULT_SECTION_ORDER,
    ):
        """Initialize the builder.

        Args:
            overlap_threshold: Overlap shares at or below this value are dropped
            section_order: Canonical section labels, catch-all last
        """
        if not section_order:
            raise ValueError("section_order must not be empty")
        if len(set(section_order)) != len(section_order):
            raise ValueError(f"section_order has duplicate labels: {list(section_order)}")
        self.overlap_threshold = overlap_threshold
        self.section_order = tuple(section_order)

    def select_findings(
        self,
        findings: Iterable[Finding],
        checker_sections: Mapping[str, str],
    ) -> List[Finding]:
        """Drop findings of checkers missing from ``checker_sections``.

        Raises:
            ReportInputError: On an empty checker name or a section label
                outside the canonical order
        """
        kept: List[Finding] = []
        excluded: Counter = Counter()
        for finding in findings:
            if not finding.checker:
                raise ReportInputError(f"Finding at {finding.position} has no checker name")
            section = checker_sections.get(finding.checker)
            if not section:
                excluded[finding.checker] += 1
                continue
            if section not in self.section_order:
                raise ReportInputError(
                    f"Checker '{finding.checker}' is assigned to unknown section "
                    f"'{section}' (known: {', '.join(self.section_order)})"
                )
            kept.append(finding)

        if excluded:
            logger.debug(
                f"Excluded {sum(excluded.values())} findings from unmapped checkers: "
                f"{', '.join(sorted(excluded))}"
            )
        return kept

    def build_buckets(self, findings: Sequence[Finding]) -> List[CheckerBucket]:
        """Build one bucket per checker, sorted by checker name.

        Nested sub-checker buckets are sorted by sub-checker name.
        """
        by_identity: Dict[CheckerIdentity, List[Finding]] = defaultdict(list)
        sub_names: Dict[str, set] = defaultdict(set)
        for finding in findings:
            identity = finding.identity
            by_identity[identity].append(finding)
            if identity.sub_checker:
                sub_names[identity.checker].add(identity.sub_checker)
            else:
                sub_names.setdefault(identity.checker, set())

        cooccurrences = count_cooccurrences(findings)

        def make_bucket(identity: CheckerIdentity, **extra) -> CheckerBucket:
            own = by_identity.get(identity, [])
            return CheckerBucket(
                identity=identity,
                findings=tuple(own),
                overlaps=rank_overlaps(
                    cooccurrences.get(identity), len(own), self.overlap_threshold
                ),
                **extra,
            )

        buckets = []
        for checker in sorted(sub_names):
            nested = tuple(
                make_bucket(CheckerIdentity(checker, sub))
                for sub in sorted(sub_names[checker])
            )
            buckets.append(make_bucket(CheckerIdentity(checker), sub_checkers=nested))
        return buckets

    def build(
        self,
        findings: Iterable[Finding],
        checker_sections: Mapping[str, str],
    ) -> Report:
        """Aggregate findings into a sectioned report.

        Args:
            findings: Findings of one analysis run
            checker_sections: Checker name to section label; checkers absent
                from it are excluded from the report and from its totals

        Returns:
            Report with sections keyed by label and buckets sorted by name
        """
        kept = self.select_findings(findings, checker_sections)

        sections: Dict[str, List[CheckerBucket]] = defaultdict(list)
        for bucket in self.build_buckets(kept):
            sections[checker_sections[bucket.identity.checker]].append(bucket)

        return Report(
            total_issues=len(kept),
            sections={label: tuple(buckets) for label, buckets in sections.items()},
            section_order=self.section_order,
        )


def build_report(
    findings: Iterable[Finding],
    checker_sections: Mapping[str, str],
    overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD,
    section_order: Sequence[str] = DEFAULT_SECTION_ORDER,
) -> Report:
    """Shortcut for ``ReportBuilder(...).build(...)``."""
    builder = ReportBuilder(overlap_threshold=overlap_threshold, section_order=section_order)
    return builder.build(findings, checker_sections)
