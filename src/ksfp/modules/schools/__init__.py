"""
Schools module - School catalogue, scoring, filtering and the browse API.
"""

from ksfp.modules.schools.catalog import SchoolCatalog
from ksfp.modules.schools.filters import (
    SchoolFilter,
    apply_private_fee,
    filter_schools,
    format_currency,
    rank_schools,
)
from ksfp.modules.schools.models import Grade, Ownership, SchoolRecord, ScoredSchool, Stream
from ksfp.modules.schools.router import router
from ksfp.modules.schools.scoring import SortKey, SortOrder, score_school, sort_schools

__all__ = [
    "Grade",
    "Ownership",
    "SchoolCatalog",
    "SchoolFilter",
    "SchoolRecord",
    "ScoredSchool",
    "SortKey",
    "SortOrder",
    "Stream",
    "apply_private_fee",
    "filter_schools",
    "format_currency",
    "rank_schools",
    "router",
    "score_school",
    "sort_schools",
]
