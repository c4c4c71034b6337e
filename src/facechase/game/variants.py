"""Variant profiles: which features each revision of the game has."""

from dataclasses import dataclass
from enum import Enum, auto


class Scoring(Enum):
    """How a run earns score."""
    TIME = auto()    # +1 per running tick, shown as ticks // divisor
    POINTS = auto()  # +1 (or mega value) per point collected


@dataclass(frozen=True)
class Variant:
    name: str
    display_name: str
    start_screen: bool
    audio: bool
    scoring: Scoring
    throttled_publish: bool = False

    @property
    def has_points(self) -> bool:
        return self.scoring is Scoring.POINTS


CLASSIC = Variant(
    name="classic",
    display_name="Classic",
    start_screen=False,
    audio=False,
    scoring=Scoring.TIME,
)

ARCADE = Variant(
    name="arcade",
    display_name="Arcade",
    start_screen=True,
    audio=True,
    scoring=Scoring.TIME,
)

COLLECTOR = Variant(
    name="collector",
    display_name="Collector",
    start_screen=True,
    audio=True,
    scoring=Scoring.POINTS,
)

COLLECTOR_SMOOTH = Variant(
    name="collector_smooth",
    display_name="Collector (smooth)",
    start_screen=True,
    audio=True,
    scoring=Scoring.POINTS,
    throttled_publish=True,
)

VARIANTS: dict[str, Variant] = {
    v.name: v for v in (CLASSIC, ARCADE, COLLECTOR, COLLECTOR_SMOOTH)
}


def get_variant(name: str) -> Variant:
    """Look up a variant by name, raising KeyError with the valid names."""
    try:
        return VARIANTS[name]
    except KeyError:
        raise KeyError(f"Unknown variant '{name}', expected one of {sorted(VARIANTS)}") from None
