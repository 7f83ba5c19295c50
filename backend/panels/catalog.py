"""
Acoustic panel catalog and panel set selection.

Each panel set is a fixed bundle of physical panels (sizes in feet).
Minimum wall widths are derived from the panel widths plus default gaps:

- Set of 3:  3 x 1ft panels + 2 x 0.5ft gaps = 4ft, need ~5ft with margin
- Set of 5:  5 x 1ft panels + 4 x 0.5ft gaps = 7ft, need ~8ft with margin
- Set of 10: (4+2+2) x 1ft + 2 x 2ft + 9 x 0.5ft gaps = 16.5ft, need ~18ft
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# Clearance above and below the tallest panel when mounting
MOUNTING_CLEARANCE_FT = 2.0


@dataclass(frozen=True)
class PanelSpec:
    """A physical panel shape and how many of it ship in a set."""
    width_ft: float
    height_ft: float
    quantity: int

    def __post_init__(self):
        if self.width_ft <= 0 or self.height_ft <= 0:
            raise ValueError(f"Panel dimensions must be positive, got {self.width_ft}x{self.height_ft}")
        if self.quantity < 1:
            raise ValueError(f"Panel quantity must be >= 1, got {self.quantity}")


@dataclass(frozen=True)
class PanelSet:
    """A purchasable set of panels with its wall fit thresholds."""
    id: int
    name: str
    specs: Tuple[PanelSpec, ...]
    min_wall_width_ft: float
    max_panel_height_ft: float

    def __post_init__(self):
        if not self.specs:
            raise ValueError(f"Panel set {self.id} has no panel specs")
        if self.total_panel_count != self.id:
            raise ValueError(
                f"Panel set {self.id} contains {self.total_panel_count} panels"
            )

    @property
    def total_panel_count(self) -> int:
        return sum(spec.quantity for spec in self.specs)

    @property
    def total_panel_width_ft(self) -> float:
        return sum(spec.width_ft * spec.quantity for spec in self.specs)


@dataclass(frozen=True)
class PanelCatalog:
    """Read-only collection of panel sets, keyed by set id."""
    sets: Tuple[PanelSet, ...]

    def __post_init__(self):
        ids = [panel_set.id for panel_set in self.sets]
        if not ids:
            raise ValueError("Panel catalog is empty")
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate panel set ids in catalog: {ids}")

    def get(self, set_id: int) -> PanelSet:
        for panel_set in self.sets:
            if panel_set.id == set_id:
                return panel_set
        raise KeyError(f"Unknown panel set: {set_id}")

    def ids(self) -> List[int]:
        """Set ids ordered from the largest set to the smallest."""
        return sorted(
            (panel_set.id for panel_set in self.sets),
            key=lambda set_id: self.get(set_id).total_panel_count,
            reverse=True,
        )

    def smallest(self) -> PanelSet:
        return self.get(self.ids()[-1])

    def as_dict(self) -> Dict[int, PanelSet]:
        return {panel_set.id: panel_set for panel_set in self.sets}


DEFAULT_CATALOG = PanelCatalog(sets=(
    PanelSet(
        id=3,
        name="Set of 3",
        specs=(
            PanelSpec(width_ft=1, height_ft=4, quantity=3),
        ),
        min_wall_width_ft=5,
        max_panel_height_ft=4,
    ),
    PanelSet(
        id=5,
        name="Set of 5",
        specs=(
            PanelSpec(width_ft=1, height_ft=4, quantity=2),
            PanelSpec(width_ft=1, height_ft=3, quantity=2),
            PanelSpec(width_ft=1, height_ft=2, quantity=1),
        ),
        min_wall_width_ft=8,
        max_panel_height_ft=4,
    ),
    PanelSet(
        id=10,
        name="Set of 10",
        specs=(
            PanelSpec(width_ft=1, height_ft=4, quantity=4),
            PanelSpec(width_ft=1, height_ft=3, quantity=2),
            PanelSpec(width_ft=1, height_ft=2, quantity=2),
            PanelSpec(width_ft=2, height_ft=2, quantity=2),
        ),
        min_wall_width_ft=18,
        max_panel_height_ft=4,
    ),
))


def select_best_panel_set(
    wall_width_ft: float,
    wall_height_ft: float,
    catalog: PanelCatalog = DEFAULT_CATALOG,
    mounting_clearance_ft: float = MOUNTING_CLEARANCE_FT,
) -> int:
    """
    Pick the largest panel set that fits on the wall.

    A set fits when the wall is at least as wide as the set's minimum width
    and tall enough for its tallest panel plus the mounting clearance.
    Falls back to the smallest set when nothing fits.

    Args:
        wall_width_ft: Estimated wall width in feet
        wall_height_ft: Estimated wall height in feet
        catalog: Panel sets to choose from
        mounting_clearance_ft: Extra height required above the tallest panel

    Returns:
        Id of the selected panel set
    """
    for set_id in catalog.ids():
        panel_set = catalog.get(set_id)
        if (wall_width_ft >= panel_set.min_wall_width_ft and
                wall_height_ft >= panel_set.max_panel_height_ft + mounting_clearance_ft):
            return set_id

    return catalog.smallest().id
