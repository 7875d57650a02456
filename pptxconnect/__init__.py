"""
pptxconnect

Orthogonal (elbow) connector routing for slide shapes, with PowerPoint
read/write support
"""
from .config import RoutingConfig, default_config
from .errors import GuideFormulaError, InvalidRoutingInput
from .geom.path import encode_path_data, parse_path_data
from .geom.primitives import Point, Rect, Segment
from .logger import RoutingLogger, RoutingWarning, get_logger
from .routing import (
    AdjustmentPoint,
    ConnectorPath,
    ConnectorRouter,
    SiteSelection,
    apply_adjustment,
    compute_best_site_pair,
    compute_routing,
    derive_adjustment_points,
)
from .shapes.catalog import ConnectionSite, ShapeKind, compute_sites

__version__ = "0.1.0"

__all__ = [
    "RoutingConfig",
    "default_config",
    "GuideFormulaError",
    "InvalidRoutingInput",
    "encode_path_data",
    "parse_path_data",
    "Point",
    "Rect",
    "Segment",
    "RoutingLogger",
    "RoutingWarning",
    "get_logger",
    "AdjustmentPoint",
    "ConnectorPath",
    "ConnectorRouter",
    "SiteSelection",
    "apply_adjustment",
    "compute_best_site_pair",
    "compute_routing",
    "derive_adjustment_points",
    "ConnectionSite",
    "ShapeKind",
    "compute_sites",
]
