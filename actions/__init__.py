"""Domain/action generation."""

from .domains import DOMAINS, CATEGORY_LABELS, DomainSpec
from .generator import (
    ActionGenerator,
    HeuristicActionGenerator,
    DomainMatch,
    generate_actions,
    match_domains,
    describe_action,
    normalize_text,
    select_category_area,
)

__all__ = [
    "DOMAINS",
    "CATEGORY_LABELS",
    "DomainSpec",
    "ActionGenerator",
    "HeuristicActionGenerator",
    "DomainMatch",
    "generate_actions",
    "match_domains",
    "describe_action",
    "normalize_text",
    "select_category_area",
]
