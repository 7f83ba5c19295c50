"""Acoustic panel catalog and wall layout generation."""

from .catalog import (
    PanelSpec,
    PanelSet,
    PanelCatalog,
    DEFAULT_CATALOG,
    MOUNTING_CLEARANCE_FT,
    select_best_panel_set,
)
from .layout import (
    LayoutConfig,
    LayoutPanel,
    IndividualPanel,
    DEFAULT_LAYOUT_CONFIG,
    LAYOUT_STRATEGIES,
    RANDOM_STRATEGY,
    expand_panel_set,
    generate_layout,
    get_strategy_names,
    resolve_strategy,
)

__all__ = [
    # Catalog
    "PanelSpec",
    "PanelSet",
    "PanelCatalog",
    "DEFAULT_CATALOG",
    "MOUNTING_CLEARANCE_FT",
    "select_best_panel_set",
    # Layout
    "LayoutConfig",
    "LayoutPanel",
    "IndividualPanel",
    "DEFAULT_LAYOUT_CONFIG",
    "LAYOUT_STRATEGIES",
    "RANDOM_STRATEGY",
    "expand_panel_set",
    "generate_layout",
    "get_strategy_names",
    "resolve_strategy",
]
