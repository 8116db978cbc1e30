"""Tests for ReportBuilder: checker buckets, overlap shares and sections."""

import pytest

from lint_testdrive.report.aggregator import (
    DEFAULT_SECTION_ORDER,
    ReportBuilder,
    build_report,
    rank_overlaps,
)
from lint_testdrive.report.models import (
    CheckerIdentity,
    Finding,
    OverlapShare,
    ReportInputError,
    SourcePosition,
)


def _finding(checker, line, sub=None, filename="main.go"):
    return Finding(
        checker=checker,
        message=f"{sub}: issue" if sub else "issue",
        position=SourcePosition(filename, line, 1),
        sub_checker=sub,
    )


@pytest.fixture
def sections():
    return {"A": "bugs", "B": "style"}


@pytest.fixture
def scenario():
    """Three A findings (one from sub-checker r1) and two B findings.

    A/r1 and B share line 3.
    """
    return [
        _finding("A", 1),
        _finding("A", 2),
        _finding("A", 3, sub="r1"),
        _finding("B", 3),
        _finding("B", 4),
    ]


class TestEndToEnd:
    def test_total_counts_every_mapped_finding(self, scenario, sections):
        report = build_report(scenario, sections)
        assert report.total_issues == 5

    def test_bucket_layout(self, scenario, sections):
        report = build_report(scenario, sections)
        a = report.checker("A")
        b = report.checker("B")

        assert a.issue_count == 2
        assert [s.name for s in a.sub_checkers] == ["r1"]
        assert a.sub_checker("r1").issue_count == 1
        assert a.total_issue_count == 3
        assert b.issue_count == 2
        assert b.sub_checkers == ()

    def test_overlap_shares_use_strict_threshold(self, scenario, sections):
        report = build_report(scenario, sections, overlap_threshold=0.5)
        r1 = report.checker("A").sub_checker("r1")

        assert r1.overlap_with(CheckerIdentity("B")) == 1.0
        # B's share with A/r1 is exactly 0.5 and is dropped
        assert report.checker("B").overlaps == ()
        assert report.checker("A").overlaps == ()

    def test_lower_threshold_keeps_half_share(self, scenario, sections):
        report = build_report(scenario, sections, overlap_threshold=0.4)
        assert report.checker("B").overlap_with(CheckerIdentity("A", "r1")) == 0.5

    def test_sections_follow_lookup(self, scenario, sections):
        report = build_report(scenario, sections)
        assert [b.name for b in report.sections["bugs"]] == ["A"]
        assert [b.name for b in report.sections["style"]] == ["B"]
        assert [label for label, _ in report.iter_sections()] == ["bugs", "style"]
        assert report.section_order == DEFAULT_SECTION_ORDER


class TestExclusion:
    def test_unmapped_checkers_are_excluded_from_totals(self, scenario):
        report = build_report(scenario, {"A": "bugs"})
        assert report.total_issues == 3
        assert report.checker("B") is None

    def test_unmapped_checkers_do_not_create_overlaps(self, scenario):
        report = build_report(scenario, {"A": "bugs"}, overlap_threshold=0.0)
        assert report.checker("A").sub_checker("r1").overlaps == ()

    def test_empty_input(self):
        report = build_report([], {"A": "bugs"})
        assert report.total_issues == 0
        assert list(report.iter_sections()) == []

    def test_empty_checker_name_fails_fast(self):
        with pytest.raises(ReportInputError, match="no checker name"):
            build_report([_finding("", 1)], {"": "bugs"})

    def test_unknown_section_label_fails_fast(self):
        with pytest.raises(ReportInputError, match="unknown section 'nope'"):
            build_report([_finding("A", 1)], {"A": "nope"})


class TestOverlapShares:
    def test_shares_are_directional(self):
        """A has 10 findings, B has 2, and they meet at 2 positions."""
        findings = [_finding("A", line) for line in range(10)]
        findings += [_finding("B", 0), _finding("B", 1)]
        report = build_report(findings, {"A": "bugs", "B": "bugs"}, overlap_threshold=0.0)

        assert report.checker("A").overlap_with(CheckerIdentity("B")) == pytest.approx(0.2)
        assert report.checker("B").overlap_with(CheckerIdentity("A")) == 1.0

    def test_every_kept_share_exceeds_threshold(self):
        findings = [_finding("A", line) for line in range(4)]
        findings += [_finding("B", 0), _finding("C", 0), _finding("C", 1), _finding("D", 9)]
        mapping = {name: "other" for name in "ABCD"}
        for threshold in (0.0, 0.25, 0.5, 0.75):
            report = build_report(findings, mapping, overlap_threshold=threshold)
            for _, buckets in report.iter_sections():
                for bucket in buckets:
                    assert all(o.share > threshold for o in bucket.overlaps)

    def test_same_checker_same_position_no_overlap(self):
        report = build_report([_finding("A", 1), _finding("A", 1)], {"A": "bugs"}, overlap_threshold=0.0)
        assert report.checker("A").overlaps == ()

    def test_checker_with_only_sub_checker_findings_has_no_shares(self):
        findings = [_finding("A", 1, sub="r1"), _finding("B", 1)]
        report = build_report(findings, {"A": "bugs", "B": "bugs"}, overlap_threshold=0.0)
        a = report.checker("A")
        assert a.issue_count == 0
        assert a.overlaps == ()
        assert a.sub_checker("r1").overlap_with(CheckerIdentity("B")) == 1.0


class TestRankOverlaps:
    def test_sorted_by_share_then_name(self):
        counts = {
            CheckerIdentity("zeta"): 2,
            CheckerIdentity("alpha"): 2,
            CheckerIdentity("mid", "r"): 4,
        }
        ranked = rank_overlaps(counts, 4, 0.0)
        assert [o.other.display_name for o in ranked] == ["mid/r", "alpha", "zeta"]

    def test_zero_findings_gives_no_shares(self):
        assert rank_overlaps({CheckerIdentity("B"): 1}, 0, 0.0) == ()

    def test_no_counts(self):
        assert rank_overlaps(None, 3, 0.0) == ()

    def test_threshold_drops_equal_share(self):
        ranked = rank_overlaps({CheckerIdentity("B"): 1}, 2, 0.5)
        assert ranked == ()
        ranked = rank_overlaps({CheckerIdentity("B"): 2}, 2, 0.5)
        assert ranked == (OverlapShare(CheckerIdentity("B"), 1.0),)


class TestDeterminism:
    def test_repeated_builds_are_identical(self):
        findings = [
            _finding("gocritic", 1, sub="ifElseChain"),
            _finding("gocritic", 2, sub="appendAssign"),
            _finding("revive", 1, sub="exported"),
            _finding("govet", 1),
            _finding("errcheck", 2),
            _finding("staticcheck", 2, sub="SA1019"),
        ]
        mapping = {
            "gocritic": "style",
            "revive": "style",
            "govet": "default",
            "errcheck": "default",
            "staticcheck": "default",
        }
        builder = ReportBuilder(overlap_threshold=0.0)
        first = builder.build(findings, mapping)
        second = builder.build(list(reversed(findings)), mapping)

        assert first.to_dict() == second.to_dict()
        assert [b.name for b in first.sections["default"]] == ["errcheck", "govet", "staticcheck"]
        assert [b.name for b in first.sections["style"]] == ["gocritic", "revive"]
        assert [s.name for s in first.checker("gocritic").sub_checkers] == [
            "appendAssign",
            "ifElseChain",
        ]


class TestBuilderValidation:
    def test_empty_section_order_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            ReportBuilder(section_order=[])

    def test_duplicate_section_order_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            ReportBuilder(section_order=["bugs", "bugs"])

    def test_custom_section_order_is_carried(self):
        report = ReportBuilder(section_order=["mine", "other"]).build(
            [_finding("A", 1)], {"A": "mine"}
        )
        assert report.section_order == ("mine", "other")
