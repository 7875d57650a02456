"""
Preset shape geometry: shape kinds, guide formulas and connection sites
"""
from .catalog import (
    ConnectionSite,
    ShapeKind,
    PRESETS,
    center_site,
    compute_sites,
    get_preset,
)
from .guides import GuideEvaluator

__all__ = [
    "ConnectionSite",
    "ShapeKind",
    "PRESETS",
    "center_site",
    "compute_sites",
    "get_preset",
    "GuideEvaluator",
]
