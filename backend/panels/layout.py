"""
Panel layout generation.

Expands a panel set into individual panels and arranges them in a single
row along the wall. Positions and sizes are returned as percentages of the
wall so they can be mapped onto any wall region of any image.

Layout strategies:
- standard:   bottom-aligned row with uniform gaps
- staggered:  alternating high/low vertical offsets around the wall midline
- asymmetric: alternating tight and wide gaps, bottom-aligned
- mixed:      short panels rotated to landscape, bottom-aligned
"""

import random
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from .catalog import DEFAULT_CATALOG, PanelCatalog


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing and placement constants, all in feet."""
    default_gap_ft: float = 0.5
    min_gap_ft: float = 0.1
    bottom_margin_ft: float = 1.5
    stagger_offsets_ft: Tuple[float, ...] = (0.0, 0.8, 0.3, 1.0, 0.5)
    stagger_baseline_ft: float = 0.5
    stagger_y_range: Tuple[float, float] = (5.0, 95.0)
    tight_gap_ft: float = 0.25
    wide_gap_ft: float = 1.0
    min_gap_scale: float = 0.1
    rotate_max_height_ft: float = 2.0
    min_size_pct: float = 1.0


DEFAULT_LAYOUT_CONFIG = LayoutConfig()


@dataclass(frozen=True)
class IndividualPanel:
    """One physical panel instance."""
    width_ft: float
    height_ft: float
    rotated: bool = False


@dataclass(frozen=True)
class LayoutPanel:
    """Panel placement as percentages of the wall (center point and size)."""
    x: float
    y: float
    width: float
    height: float


def expand_panel_set(set_id: int, catalog: PanelCatalog = DEFAULT_CATALOG) -> List[IndividualPanel]:
    """Repeat each spec of a panel set by its quantity."""
    panels = []
    for spec in catalog.get(set_id).specs:
        for _ in range(spec.quantity):
            panels.append(IndividualPanel(width_ft=spec.width_ft, height_ft=spec.height_ft))
    return panels


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _sort_tallest_first(panels: List[IndividualPanel]) -> List[IndividualPanel]:
    return sorted(panels, key=lambda p: -p.height_ft)


def _uniform_gaps(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    config: LayoutConfig,
) -> List[float]:
    """Gaps between neighbours, shrunk (never below the floor) so the row fits."""
    if len(panels) < 2:
        return []

    gap_ft = config.default_gap_ft
    total_panel_width_ft = sum(p.width_ft for p in panels)
    total_width_ft = total_panel_width_ft + (len(panels) - 1) * gap_ft

    if total_width_ft > wall_width_ft:
        gap_ft = max(
            config.min_gap_ft,
            (wall_width_ft - total_panel_width_ft) / (len(panels) - 1),
        )

    return [gap_ft] * (len(panels) - 1)


def _alternating_gaps(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    config: LayoutConfig,
) -> List[float]:
    """Tight/wide alternating gaps, scaled down together if the row overflows."""
    gaps = [
        config.tight_gap_ft if i % 2 == 0 else config.wide_gap_ft
        for i in range(len(panels) - 1)
    ]
    if not gaps:
        return gaps

    total_panel_width_ft = sum(p.width_ft for p in panels)
    total_gaps_ft = sum(gaps)

    if total_panel_width_ft + total_gaps_ft > wall_width_ft:
        available_ft = wall_width_ft - total_panel_width_ft
        scale = max(config.min_gap_scale, available_ft / total_gaps_ft)
        gaps = [gap * scale for gap in gaps]

    return gaps


def _place_row(
    panels: List[IndividualPanel],
    gaps: List[float],
    wall_width_ft: float,
    wall_height_ft: float,
    center_y_ft: Callable[[int, IndividualPanel], float],
    config: LayoutConfig,
    y_range: Tuple[float, float] = (0.0, 100.0),
) -> List[LayoutPanel]:
    """
    Walk panels left to right and convert their positions to wall percentages.

    The row is centered horizontally; if it is wider than the wall it starts
    at the left edge and overflows to the right.
    """
    total_width_ft = sum(p.width_ft for p in panels) + sum(gaps)
    current_x_ft = max(0.0, (wall_width_ft - total_width_ft) / 2)

    layouts = []
    for i, panel in enumerate(panels):
        panel_center_x_ft = current_x_ft + panel.width_ft / 2
        panel_center_y_ft = center_y_ft(i, panel)

        layouts.append(LayoutPanel(
            x=_clamp(panel_center_x_ft / wall_width_ft * 100, 0.0, 100.0),
            y=_clamp(panel_center_y_ft / wall_height_ft * 100, *y_range),
            width=_clamp(panel.width_ft / wall_width_ft * 100, config.min_size_pct, 100.0),
            height=_clamp(panel.height_ft / wall_height_ft * 100, config.min_size_pct, 100.0),
        ))

        if i < len(gaps):
            current_x_ft += panel.width_ft + gaps[i]

    return layouts


def _bottom_aligned(wall_height_ft: float, config: LayoutConfig) -> Callable[[int, IndividualPanel], float]:
    def center_y(_: int, panel: IndividualPanel) -> float:
        return wall_height_ft - config.bottom_margin_ft - panel.height_ft / 2
    return center_y


def _standard_layout(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    wall_height_ft: float,
    config: LayoutConfig,
) -> List[LayoutPanel]:
    panels = _sort_tallest_first(panels)
    gaps = _uniform_gaps(panels, wall_width_ft, config)
    return _place_row(
        panels, gaps, wall_width_ft, wall_height_ft,
        _bottom_aligned(wall_height_ft, config), config,
    )


def _staggered_layout(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    wall_height_ft: float,
    config: LayoutConfig,
) -> List[LayoutPanel]:
    panels = _sort_tallest_first(panels)
    gaps = _uniform_gaps(panels, wall_width_ft, config)
    offsets = config.stagger_offsets_ft or (0.0,)

    def center_y(i: int, _: IndividualPanel) -> float:
        # Offsets wrap for sets larger than the table
        return wall_height_ft / 2 + offsets[i % len(offsets)] - config.stagger_baseline_ft

    return _place_row(
        panels, gaps, wall_width_ft, wall_height_ft,
        center_y, config, y_range=config.stagger_y_range,
    )


def _asymmetric_layout(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    wall_height_ft: float,
    config: LayoutConfig,
) -> List[LayoutPanel]:
    panels = _sort_tallest_first(panels)
    gaps = _alternating_gaps(panels, wall_width_ft, config)
    return _place_row(
        panels, gaps, wall_width_ft, wall_height_ft,
        _bottom_aligned(wall_height_ft, config), config,
    )


def _mixed_layout(
    panels: List[IndividualPanel],
    wall_width_ft: float,
    wall_height_ft: float,
    config: LayoutConfig,
) -> List[LayoutPanel]:
    # Rotation is decided on the expansion order, before sorting
    rotated = []
    for i, panel in enumerate(panels):
        if panel.height_ft <= config.rotate_max_height_ft and i % 2 == 0:
            rotated.append(IndividualPanel(
                width_ft=panel.height_ft,
                height_ft=panel.width_ft,
                rotated=True,
            ))
        else:
            rotated.append(replace(panel, rotated=False))

    rotated.sort(key=lambda p: (p.rotated, -p.height_ft))
    gaps = _uniform_gaps(rotated, wall_width_ft, config)
    return _place_row(
        rotated, gaps, wall_width_ft, wall_height_ft,
        _bottom_aligned(wall_height_ft, config), config,
    )


LAYOUT_STRATEGIES: Dict[str, Callable[..., List[LayoutPanel]]] = {
    "standard": _standard_layout,
    "staggered": _staggered_layout,
    "asymmetric": _asymmetric_layout,
    "mixed": _mixed_layout,
}

RANDOM_STRATEGY = "random"


def get_strategy_names() -> List[str]:
    """Available layout strategy names (excluding 'random')."""
    return list(LAYOUT_STRATEGIES.keys())


def resolve_strategy(strategy: str, rng: Optional[random.Random] = None) -> str:
    """
    Resolve a strategy name, picking one uniformly when 'random' is requested.

    Raises:
        ValueError: If the strategy name is unknown
    """
    if strategy == RANDOM_STRATEGY:
        return (rng or random.Random()).choice(get_strategy_names())
    if strategy not in LAYOUT_STRATEGIES:
        raise ValueError(
            f"Unknown layout strategy '{strategy}', expected one of "
            f"{get_strategy_names() + [RANDOM_STRATEGY]}"
        )
    return strategy


def generate_layout(
    set_id: int,
    wall_width_ft: float,
    wall_height_ft: float,
    strategy: str = "standard",
    catalog: PanelCatalog = DEFAULT_CATALOG,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    rng: Optional[random.Random] = None,
) -> List[LayoutPanel]:
    """
    Generate panel placements for a panel set on a wall.

    A row wider than the wall is not an error: overflowing panels are
    clamped or dropped later when mapped to pixels.

    Args:
        set_id: Panel set id from the catalog
        wall_width_ft: Wall width in feet
        wall_height_ft: Wall height in feet
        strategy: Layout strategy name, or 'random'
        catalog: Panel catalog to expand the set from
        config: Spacing and placement constants
        rng: Random source used when strategy is 'random'

    Returns:
        One LayoutPanel per physical panel in the set
    """
    if wall_width_ft <= 0 or wall_height_ft <= 0:
        raise ValueError(f"Wall dimensions must be positive, got {wall_width_ft}x{wall_height_ft}ft")

    resolved = resolve_strategy(strategy, rng)
    panels = expand_panel_set(set_id, catalog)

    print(f"[LAYOUT] Using pattern: {resolved} ({len(panels)} panels, "
          f"wall {wall_width_ft}ft x {wall_height_ft}ft)")

    return LAYOUT_STRATEGIES[resolved](panels, wall_width_ft, wall_height_ft, config)
