"""Sub-checker extraction from finding messages.

Composite checkers (gocritic, revive, staticcheck and friends) prefix their
messages with the name of the nested rule, e.g. ``"ifElseChain: rewrite
if-else to switch statement"``. The prefix becomes the sub-checker label.
"""

import re
from typing import Optional, Pattern, Union

SUB_CHECKER_PATTERN = r"^([\w-]+(\([\w\s-]+\))?):"

# \w and \s match ASCII only, as in golangci-lint's own (RE2) matching.
_default_pattern = re.compile(SUB_CHECKER_PATTERN, re.ASCII)


def compile_pattern(pattern: Union[str, Pattern[str], None]) -> Pattern[str]:
    """Compile a sub-checker pattern, requiring at least one capture group."""
    if pattern is None:
        return _default_pattern
    compiled = re.compile(pattern, re.ASCII) if isinstance(pattern, str) else pattern
    if compiled.groups < 1:
        raise ValueError(
            f"Sub-checker pattern must have a capture group, got '{compiled.pattern}'"
        )
    return compiled


def extract_sub_checker(
    message: str,
    pattern: Union[str, Pattern[str], None] = None,
) -> Optional[str]:
    """Return the sub-checker label leading ``message``, or None.

    Args:
        message: Free-text message of a finding
        pattern: Regex whose first group is the label (default SUB_CHECKER_PATTERN)

    Returns:
        The label without its trailing colon, or None if the message has no prefix
    """
    match = compile_pattern(pattern).match(message)
    if not match or not match.group(1):
        return None
    return match.group(1)
