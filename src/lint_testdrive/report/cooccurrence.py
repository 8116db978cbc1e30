"""Co-occurrence indexing of findings by source position.

Two checkers reporting at the exact same position most likely caught the
same underlying issue. Counts are directional: ``counts[a][b]`` is the number
of positions where ``a`` reported and ``b`` reported too.
"""

import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, Set

from .models import CheckerIdentity, Finding, SourcePosition

logger = logging.getLogger(__name__)

CooccurrenceCounts = Dict[CheckerIdentity, Counter]


def identities_by_position(
    findings: Iterable[Finding],
) -> Dict[SourcePosition, Set[CheckerIdentity]]:
    """Group the distinct identities reporting at each position."""
    by_position: Dict[SourcePosition, Set[CheckerIdentity]] = defaultdict(set)
    for finding in findings:
        by_position[finding.position].add(finding.identity)
    return dict(by_position)


def count_cooccurrences(findings: Iterable[Finding]) -> CooccurrenceCounts:
    """Count, for every ordered pair of distinct identities, shared positions.

    A position reported only by one identity (even several times) adds
    nothing.
    """
    counts: CooccurrenceCounts = defaultdict(Counter)
    shared_positions = 0
    for identities in identities_by_position(findings).values():
        if len(identities) < 2:
            continue
        shared_positions += 1
        for first in identities:
            for second in identities:
                if first != second:
                    counts[first][second] += 1

    logger.debug(f"{shared_positions} positions reported by more than one checker")
    return dict(counts)
