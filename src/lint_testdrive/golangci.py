"""Run golangci-lint and decode its JSON output into findings."""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, List, Optional, Pattern, Union

from .core.config import GolangciLintConfig
from .report.models import Finding, SourcePosition
from .report.subchecker import compile_pattern, extract_sub_checker
from .utils.subprocess_utils import SubprocessError, check_command_exists, run_command

logger = logging.getLogger(__name__)

# golangci-lint exits 1 when it reports issues; both are successful runs.
OK_EXIT_CODES = (0, 1)


class GolangciLintError(Exception):
    """golangci-lint could not be run or exited unexpectedly."""

    def __init__(self, message: str, exit_code: Optional[int] = None, stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)


class MalformedOutputError(GolangciLintError):
    """golangci-lint output is not the expected JSON document."""


def parse_findings(
    output: Union[str, bytes],
    sub_checker_pattern: Union[str, Pattern[str], None] = None,
) -> List[Finding]:
    """Decode golangci-lint JSON output.

    golangci-lint JSON structure:
    {
      "Issues": [
        {
          "FromLinter": "gocritic",
          "Text": "ifElseChain: rewrite if-else to switch statement",
          "Severity": "",
          "SourceLines": ["\tif x {"],
          "Pos": {"Filename": "main.go", "Offset": 120, "Line": 10, "Column": 2}
        }
      ]
    }

    Raises:
        MalformedOutputError: If the output is not a JSON object of that shape
    """
    try:
        data = json.loads(output)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedOutputError(f"cannot decode golangci-lint JSON output: {e}") from e
    if not isinstance(data, dict):
        raise MalformedOutputError(
            f"golangci-lint JSON output must be an object, got {type(data).__name__}"
        )

    issues = data.get("Issues") or []
    if not isinstance(issues, list):
        raise MalformedOutputError("golangci-lint 'Issues' must be a list")

    pattern = compile_pattern(sub_checker_pattern)
    findings = []
    for index, issue in enumerate(issues):
        try:
            findings.append(_decode_issue(issue, pattern))
        except (AttributeError, TypeError, ValueError) as e:
            raise MalformedOutputError(f"malformed issue #{index}: {e}") from e
    return findings


def _decode_issue(issue: Any, pattern: Pattern[str]) -> Finding:
    pos = issue.get("Pos") or {}
    message = issue.get("Text", "")
    return Finding(
        checker=issue.get("FromLinter", ""),
        message=message,
        position=SourcePosition(
            filename=pos.get("Filename", ""),
            line=int(pos.get("Line", 0)),
            column=int(pos.get("Column", 0)),
        ),
        sub_checker=extract_sub_checker(message, pattern),
        source_lines=tuple(issue.get("SourceLines") or ()),
        severity=issue.get("Severity") or "",
    )


def load_findings(
    path: Path,
    sub_checker_pattern: Union[str, Pattern[str], None] = None,
) -> List[Finding]:
    """Decode findings from a saved ``golangci-lint run --out-format=json`` file."""
    try:
        output = path.read_bytes()
    except OSError as e:
        raise GolangciLintError(f"cannot read golangci-lint output {path}: {e}") from e
    return parse_findings(output, sub_checker_pattern)


class GolangciLintRunner:
    """Run golangci-lint over a Go source tree.

    The linters to run are selected by the golangci-lint config file found
    in the sources directory (``.golangci-testdrive.yml`` by default).
    """

    def __init__(self, config: Optional[GolangciLintConfig] = None):
        self.config = config or GolangciLintConfig()

    def command(self) -> List[str]:
        return [
            self.config.executable,
            "run",
            "--out-format=json",
            f"--config={self.config.config_file}",
            *self.config.extra_args,
        ]

    def run(self, sources_path: Path) -> str:
        """Run golangci-lint and return its raw JSON output.

        Raises:
            GolangciLintError: If the tool is missing, times out, or exits
                with a status other than 0 or 1
        """
        if not check_command_exists(self.config.executable):
            raise GolangciLintError(f"{self.config.executable} not found in PATH")

        cmd = self.command()
        logger.info(f"Running {' '.join(cmd)} in {sources_path}")
        try:
            result = run_command(
                cmd,
                cwd=sources_path,
                ok_codes=OK_EXIT_CODES,
                timeout=self.config.timeout,
            )
        except SubprocessError as e:
            raise GolangciLintError(
                f"unexpected golangci-lint exit code {e.returncode}",
                exit_code=e.returncode,
                stderr=e.stderr,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise GolangciLintError(
                f"golangci-lint timed out after {self.config.timeout}s"
            ) from e
        except UnicodeDecodeError as e:
            raise MalformedOutputError(f"golangci-lint output is not valid UTF-8: {e}") from e

        if result.stderr:
            logger.debug(f"golangci-lint stderr:\n{result.stderr}")
        return result.stdout

    def collect(
        self,
        sources_path: Path,
        sub_checker_pattern: Union[str, Pattern[str], None] = None,
    ) -> List[Finding]:
        """Run golangci-lint and decode its findings."""
        findings = parse_findings(self.run(sources_path), sub_checker_pattern)
        logger.info(f"golangci-lint reported {len(findings)} issues")
        return findings
