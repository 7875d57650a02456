"""Orthogonal connector routing: site selection, candidate routes, collision, bend handles"""
from .engine import (
    ConnectorPath,
    ConnectorRouter,
    compute_best_site_pair,
    compute_routing,
    get_router,
)
from .sites import SiteSelection, find_site, nearest_site, select_site_pair
from .obstacles import Obstacle, build_obstacles, element_bounds
from .adjustment import (
    AdjustmentPoint,
    DragAxis,
    apply_adjustment,
    derive_adjustment_points,
)
from .creation import (
    DraggedConnection,
    connect_to_nearest_site,
    connection_point,
    find_target_element,
    preview_path_data,
)
from .reconnect import apply_route, find_connected_connectors, reroute_connected, reroute_elements

__all__ = [
    "ConnectorPath",
    "ConnectorRouter",
    "compute_best_site_pair",
    "compute_routing",
    "get_router",
    "SiteSelection",
    "find_site",
    "nearest_site",
    "select_site_pair",
    "Obstacle",
    "build_obstacles",
    "element_bounds",
    "AdjustmentPoint",
    "DragAxis",
    "apply_adjustment",
    "derive_adjustment_points",
    "DraggedConnection",
    "connect_to_nearest_site",
    "connection_point",
    "find_target_element",
    "preview_path_data",
    "apply_route",
    "find_connected_connectors",
    "reroute_connected",
    "reroute_elements",
]
