"""Map checkers to report sections from a checker catalog."""

import logging
from typing import Dict, Iterable, Optional, Sequence

from .core.config import CheckerDefinition
from .report.aggregator import DEFAULT_SECTION_ORDER
from .report.models import Finding

logger = logging.getLogger(__name__)


def section_for(checker: CheckerDefinition, section_order: Sequence[str] = DEFAULT_SECTION_ORDER) -> str:
    """Pick the section of a single checker.

    Enabled-by-default checkers go to the first section. Otherwise the first
    section (catch-all excluded) named in the checker's presets wins, and
    the catch-all takes everything else.
    """
    if checker.enabled_by_default:
        return section_order[0]
    for section in section_order[:-1]:
        if section in checker.presets:
            return section
    return section_order[-1]


def build_section_map(
    catalog: Iterable[CheckerDefinition],
    section_order: Sequence[str] = DEFAULT_SECTION_ORDER,
    findings: Iterable[Finding] = (),
    unknown_checker_section: Optional[str] = None,
) -> Dict[str, str]:
    """Build the checker -> section lookup used to assemble a report.

    Deprecated checkers are left out so their findings are excluded. When
    ``unknown_checker_section`` is set, checkers seen in ``findings`` but
    missing from the catalog are mapped to it instead of being excluded.
    """
    sections: Dict[str, str] = {}
    deprecated = set()
    for checker in catalog:
        if checker.deprecated:
            deprecated.add(checker.name)
            continue
        sections[checker.name] = section_for(checker, section_order)

    if unknown_checker_section:
        unknown = {
            f.checker for f in findings
            if f.checker and f.checker not in sections and f.checker not in deprecated
        }
        if unknown:
            logger.info(
                f"Mapping {len(unknown)} uncataloged checkers to section "
                f"'{unknown_checker_section}': {', '.join(sorted(unknown))}"
            )
        for name in unknown:
            sections[name] = unknown_checker_section

    return sections
