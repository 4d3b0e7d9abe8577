"""Static coaching tip catalog.

Tips are selected from here by error type; nothing is generated. Lookups are
plain dictionary reads keyed by the error type value.
"""

from pydantic import BaseModel, ConfigDict, Field

from rift_coach.contracts.common import ErrorType


class CatalogTip(BaseModel):
    """A catalog entry; ``priority`` is its rank within the category."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    title: str
    description: str
    priority: int = Field(ge=1)


ERROR_CATEGORIES: dict[str, str] = {
    ErrorType.CS_MISSING.value: "Farm",
    ErrorType.VISION.value: "Vision",
    ErrorType.POSITIONING.value: "Positioning",
    ErrorType.MAP_AWARENESS.value: "Map Awareness",
    ErrorType.OBJECTIVE.value: "Objectives",
    ErrorType.TRADING.value: "Trading",
    ErrorType.TIMING.value: "Timing",
    ErrorType.WAVE_MANAGEMENT.value: "Wave Management",
    ErrorType.ITEMIZATION.value: "Items",
    ErrorType.COOLDOWN_TRACKING.value: "Cooldowns",
    ErrorType.ROAMING.value: "Roaming",
    ErrorType.TEAMFIGHT.value: "Teamfight",
}


def _tips(error_type: ErrorType, *entries: tuple[str, str, str]) -> tuple[CatalogTip, ...]:
    category = ERROR_CATEGORIES[error_type.value]
    return tuple(
        CatalogTip(
            id=tip_id, category=category, title=title, description=description, priority=rank
        )
        for rank, (tip_id, title, description) in enumerate(entries, start=1)
    )


TIP_CATALOG: dict[str, tuple[CatalogTip, ...]] = {
    ErrorType.CS_MISSING.value: _tips(
        ErrorType.CS_MISSING,
        (
            "cs-1",
            "Practice last hitting",
            "Go into Practice Tool and train last hitting without using abilities. "
            "Aim for 80+ CS at 10 min.",
        ),
        (
            "cs-2",
            "CS under tower",
            "Learn the pattern: 2 tower shots + 1 auto for melees, 1 tower shot + 1 auto "
            "for casters (with starting items).",
        ),
    ),
    ErrorType.VISION.value: _tips(
        ErrorType.VISION,
        (
            "vision-1",
            "Buy Control Wards",
            "Buy a Control Ward on every back. Place it in your jungle or near objectives.",
        ),
        (
            "vision-2",
            "Ward before objectives",
            "Place wards 1 minute before Dragon/Baron spawns to gather information.",
        ),
    ),
    ErrorType.POSITIONING.value: _tips(
        ErrorType.POSITIONING,
        (
            "pos-1",
            "Stay with your team",
            "In mid/late game, don't separate from your team unless you have vision and "
            "know where enemies are.",
        ),
        (
            "pos-2",
            "Respect fog of war",
            "If you don't see 3+ enemies on the map, play as if they're coming for you.",
        ),
    ),
    ErrorType.MAP_AWARENESS.value: _tips(
        ErrorType.MAP_AWARENESS,
        (
            "map-1",
            "Check your minimap",
            "Force yourself to look at your minimap every 3 seconds. "
            "It's a habit you need to develop.",
        ),
        (
            "map-2",
            "Track the enemy jungler",
            "Mentally note where the enemy jungler was last seen. If spotted bot, "
            "they'll be top in 30-40 sec.",
        ),
    ),
    ErrorType.OBJECTIVE.value: _tips(
        ErrorType.OBJECTIVE,
        (
            "obj-1",
            "Prioritize objectives",
            'After a kill or gaining an advantage, always think: "What objective can I take?"',
        ),
        (
            "obj-2",
            "Time objectives",
            "Dragon respawns after 5 min, Baron after 6 min. Prepare 1 min before spawn.",
        ),
    ),
    ErrorType.TRADING.value: _tips(
        ErrorType.TRADING,
        (
            "trade-1",
            "Trade when enemy last hits",
            "Attack the enemy when they go to last hit a minion. They have to choose "
            "between hitting you or taking the CS.",
        ),
        (
            "trade-2",
            "Respect power spikes",
            "Watch out for levels 2, 3, 6 and item completions. These are moments when "
            "your opponent becomes stronger.",
        ),
    ),
}


def tips_for(error_type: str) -> tuple[CatalogTip, ...]:
    """Catalog tips for an error type (empty for types without tips)."""
    return TIP_CATALOG.get(error_type, ())
