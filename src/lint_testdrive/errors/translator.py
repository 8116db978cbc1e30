"""Translate technical errors to user-friendly messages."""

import re
from dataclasses import dataclass
from typing import List

from rich.markup import escape


@dataclass
class UserFriendlyError:
    """User-friendly error representation."""
    original_error: Exception
    title: str
    explanation: str
    actions: List[str]
    show_technical: bool = False


class ErrorTranslator:
    """Translate technical errors to user-friendly messages."""

    # Matched against "<ExceptionType>: <message>", first match wins.
    ERROR_PATTERNS = {
        r"golangci-lint not found|No such file or directory: 'golangci-lint'": {
            "title": "golangci-lint is not installed",
            "explanation": "The golangci-lint executable could not be found in PATH.",
            "actions": [
                "Install it: https://golangci-lint.run/welcome/install/",
                "Or point golangci_lint.executable in the config at the binary",
            ],
        },
        r"not found in PATH": {
            "title": "Analysis tool not found",
            "explanation": "The configured analysis executable could not be found in PATH.",
            "actions": [
                "Check golangci_lint.executable in the config",
            ],
        },
        r"timed out": {
            "title": "Analysis timed out",
            "explanation": "golangci-lint did not finish within the configured timeout.",
            "actions": [
                "Raise golangci_lint.timeout in the config",
                "Or drop the timeout to wait for completion",
            ],
        },
        r"MalformedOutputError": {
            "title": "Unreadable golangci-lint output",
            "explanation": "golangci-lint did not produce the expected JSON report.",
            "actions": [
                "Check the golangci-lint version supports --out-format=json",
                "Run golangci-lint by hand in the sources directory to inspect its output",
            ],
        },
        r"GolangciLintError: unexpected golangci-lint exit code": {
            "title": "golangci-lint failed",
            "explanation": "golangci-lint exited with a status other than 0 (clean) or 1 (issues found).",
            "actions": [
                "Check that the sources path is a Go module that builds",
                "Check the golangci-lint config file in the sources directory",
            ],
        },
        r"ReportInputError": {
            "title": "Cannot build report",
            "explanation": "The findings or the checker catalog are inconsistent.",
            "actions": [
                "Check every catalog section is listed in report.section_order",
                "Check the findings all name their checker",
            ],
        },
        r"ValidationError|config": {
            "title": "Invalid configuration",
            "explanation": "The configuration file could not be loaded.",
            "actions": [
                "Fix the reported fields in the YAML config",
            ],
        },
    }

    def translate(self, error: Exception) -> UserFriendlyError:
        """Convert exception to user-friendly format."""
        error_type = type(error).__name__
        full_error = f"{error_type}: {error}"

        for pattern, translation in self.ERROR_PATTERNS.items():
            if re.search(pattern, full_error, re.IGNORECASE):
                return UserFriendlyError(
                    original_error=error,
                    title=translation["title"],
                    explanation=translation["explanation"],
                    actions=translation["actions"],
                    show_technical=True,
                )

        # Fallback for unknown errors
        return UserFriendlyError(
            original_error=error,
            title="Unexpected error",
            explanation=str(error),
            actions=["Re-run with --log-level DEBUG for details"],
            show_technical=False,
        )

    def format_for_cli(self, friendly_error: UserFriendlyError) -> str:
        """Format error for CLI display (rich markup)."""
        output = f"[bold red]{friendly_error.title}[/]\n\n"
        output += f"{escape(friendly_error.explanation)}\n\n"

        output += "[bold]How to fix:[/]\n"
        for i, action in enumerate(friendly_error.actions, 1):
            output += f"  {i}. {action}\n"

        if friendly_error.show_technical:
            output += f"\n[dim]Technical details:[/]\n[dim]{escape(str(friendly_error.original_error))}[/]"

        return output
