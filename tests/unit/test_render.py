"""Tests for text and JSON report rendering."""

import json

from lint_testdrive.report.aggregator import build_report
from lint_testdrive.report.models import CheckerIdentity, Finding, OverlapShare, SourcePosition
from lint_testdrive.report.render import format_finding, format_overlaps, render_json, render_text


def _finding(checker, line, sub=None, source_lines=(), column=1):
    return Finding(
        checker=checker,
        message=f"{sub}: issue" if sub else "issue",
        position=SourcePosition("pkg/main.go", line, column),
        sub_checker=sub,
        source_lines=source_lines,
    )


def _report():
    findings = [
        _finding("govet", 1),
        _finding("govet", 2),
        _finding("gocritic", 3, sub="ifElseChain"),
        _finding("errcheck", 3),
    ]
    return build_report(findings, {"govet": "default", "errcheck": "default", "gocritic": "style"})


class TestFormatOverlaps:
    def test_empty(self):
        assert format_overlaps(()) == ""

    def test_percentages_without_decimals(self):
        overlaps = [
            OverlapShare(CheckerIdentity("gocritic", "ifElseChain"), 1.0),
            OverlapShare(CheckerIdentity("revive"), 2 / 3),
        ]
        assert format_overlaps(overlaps) == (
            "; intersects with gocritic/ifElseChain (100%), revive (67%)"
        )


class TestRenderText:
    def test_layout(self):
        lines = render_text(_report())
        assert lines[0] == "There are 4 issues found"
        assert lines[1] == "=== Section default ==="
        assert lines[2] == "  * errcheck: 1 issues; intersects with gocritic/ifElseChain (100%)"
        assert lines[3] == "  * govet: 2 issues"
        style = lines.index("=== Section style ===")
        assert lines[style + 1] == "  * gocritic: 1 issues"
        assert lines[style + 2] == "    * ifElseChain: 1 issues; intersects with errcheck (100%)"

    def test_every_section_has_a_header(self):
        lines = render_text(_report())
        headers = [line for line in lines if line.startswith("=== Section")]
        assert len(headers) == 10
        assert headers[-1] == "=== Section other ==="

    def test_verbose_lists_findings(self):
        lines = render_text(_report(), verbose=True)
        assert "      pkg/main.go:1:1: issue" in lines


class TestFormatFinding:
    def test_single_line_excerpt_gets_caret(self):
        finding = _finding("govet", 7, source_lines=("\t\tx := f()",), column=5)
        assert format_finding(finding) == [
            "pkg/main.go:7:5: issue",
            "  x := f()",
            "    ^",
        ]

    def test_multi_line_excerpt_is_dedented_without_caret(self):
        finding = _finding("govet", 7, source_lines=("\tif x {", "\t\treturn", "\t}"), column=2)
        assert format_finding(finding) == [
            "pkg/main.go:7:2: issue",
            "  if x {",
            "  \treturn",
            "  }",
        ]

    def test_no_excerpt(self):
        assert format_finding(_finding("govet", 1)) == ["pkg/main.go:1:1: issue"]


class TestRenderJson:
    def test_structure(self):
        data = json.loads(render_json(_report()))
        assert data["total_issues"] == 4
        assert list(data["sections"]) == ["default", "style"]
        gocritic = data["sections"]["style"][0]
        assert gocritic["name"] == "gocritic"
        assert gocritic["issues"] == 1
        assert gocritic["sub_checkers"][0]["overlaps"] == [{"name": "errcheck", "share": 1.0}]
