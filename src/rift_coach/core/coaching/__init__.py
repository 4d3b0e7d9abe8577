"""Coaching tips: static catalog, category scores and the tip aggregator."""

from rift_coach.core.coaching.catalog import TIP_CATALOG, CatalogTip, tips_for
from rift_coach.core.coaching.category_scores import derive_category_scores
from rift_coach.core.coaching.tips import generate_tips

__all__ = [
    "CatalogTip",
    "TIP_CATALOG",
    "tips_for",
    "derive_category_scores",
    "generate_tips",
]
