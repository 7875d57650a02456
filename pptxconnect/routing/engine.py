"""
Connector routing engine

Runs the routing pipeline for an elbow connector between two shapes:
connection sites -> site pair -> obstacles -> candidate routes ->
collision test -> (first clear candidate | best-effort fallback).

Every call is a pure function of its inputs; the router keeps no state
between calls apart from its configuration and logger.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..config import RoutingConfig, default_config
from ..errors import InvalidRoutingInput
from ..geom.path import encode_path_data, points_from_segments
from ..geom.primitives import Point, Segment
from ..logger import RoutingLogger, get_logger
from ..model.intermediate import BaseElement, ShapeElement
from ..shapes.catalog import ConnectionSite, ShapeKind, compute_sites
from .collision import first_clear_candidate
from .fallback import fallback_candidate
from .obstacles import build_obstacles, element_bounds, element_shape_kind
from .sites import SiteSelection, find_site, select_site_pair
from .synthesizer import generate_candidates


@dataclass(frozen=True)
class ConnectorPath:
    """Routed connector: ordered segments plus the sites they attach to"""
    segments: Tuple[Segment, ...]
    start_site: ConnectionSite
    end_site: ConnectionSite
    best_effort: bool = False  # True when every candidate collided and the fallback route was used
    strategy: str = ""

    @property
    def points(self) -> List[Point]:
        return points_from_segments(self.segments)

    @property
    def path_data(self) -> str:
        """``M x y L x y ...`` encoding for drawing surfaces"""
        return encode_path_data(self.segments)


class ConnectorRouter:
    """Elbow connector router"""

    def __init__(self, logger: Optional[RoutingLogger] = None, config: Optional[RoutingConfig] = None):
        """
        Args:
            logger: RoutingLogger instance (uses the default logger if None)
            config: RoutingConfig instance (uses default_config if None)
        """
        self.config = config or default_config
        self.logger = logger or get_logger()

    def sites_for(self, element: BaseElement, include_center: bool = False) -> List[ConnectionSite]:
        """Connection sites of an element; unknown shape kinds get the rectangle set"""
        bounds = element_bounds(element)
        kind = element_shape_kind(element)
        adjustments = None
        if isinstance(element, ShapeElement):
            adjustments = element.adjustments
            if kind == ShapeKind.UNKNOWN:
                self.logger.warn_unknown_shape_kind(element.id, element.shape_type)
        return compute_sites(kind, bounds, adjustments, include_center=include_center)

    @staticmethod
    def _require_endpoints(start_shape: Optional[BaseElement], end_shape: Optional[BaseElement]) -> None:
        if start_shape is None or end_shape is None:
            raise InvalidRoutingInput("Routing needs both a start and an end shape")

    def _select_sites(
        self,
        start_shape: BaseElement,
        end_shape: BaseElement,
        start_sites: List[ConnectionSite],
        end_sites: List[ConnectionSite],
        start_site_name: Optional[str],
        end_site_name: Optional[str],
    ) -> SiteSelection:
        if start_site_name and find_site(start_sites, start_site_name) is None:
            self.logger.warn_site_not_found(start_shape.id, start_site_name)
        if end_site_name and find_site(end_sites, end_site_name) is None:
            self.logger.warn_site_not_found(end_shape.id, end_site_name)
        return select_site_pair(start_sites, end_sites, start_site_name, end_site_name)

    def compute_best_site_pair(self, start_shape: BaseElement, end_shape: BaseElement) -> SiteSelection:
        """Automatic site selection without computing a path"""
        self._require_endpoints(start_shape, end_shape)
        return select_site_pair(self.sites_for(start_shape), self.sites_for(end_shape))

    def compute_routing(
        self,
        start_shape: BaseElement,
        end_shape: BaseElement,
        start_site_name: Optional[str] = None,
        end_site_name: Optional[str] = None,
        all_elements: Iterable[BaseElement] = (),
        connector_id: Optional[str] = None,
    ) -> ConnectorPath:
        """
        Route an elbow connector from start_shape to end_shape.

        Args:
            start_shape: Element the connector starts at
            end_shape: Element the connector ends at
            start_site_name: Requested start site (id, ``cxnN`` or cardinal name)
            end_site_name: Requested end site
            all_elements: Every element on the slide (obstacle source, not mutated)
            connector_id: Id of the connector being re-routed, excluded from obstacles

        Returns:
            ConnectorPath; ``best_effort`` is True when the fallback route was used

        Raises:
            InvalidRoutingInput: missing endpoint or missing/negative bounds
        """
        self._require_endpoints(start_shape, end_shape)
        start_bounds = element_bounds(start_shape)
        end_bounds = element_bounds(end_shape)

        selection = self._select_sites(
            start_shape, end_shape,
            self.sites_for(start_shape), self.sites_for(end_shape),
            start_site_name, end_site_name,
        )
        obstacles = build_obstacles(all_elements, start_shape.id, end_shape.id, connector_id)
        candidates = generate_candidates(
            selection.start_site, selection.end_site, start_bounds, end_bounds, self.config,
        )

        chosen = first_clear_candidate(
            candidates, obstacles, start_bounds, end_bounds, self.config.collision_samples,
        )
        best_effort = chosen is None
        if best_effort:
            self.logger.warn_best_effort_route(connector_id, start_shape.id, end_shape.id, len(candidates))
            chosen = fallback_candidate(selection.start_site, selection.end_site, self.config.fallback_offset)
        else:
            self.logger.debug(
                f"Routed {start_shape.id}:{selection.start_site.id} -> "
                f"{end_shape.id}:{selection.end_site.id} via {chosen.strategy} "
                f"({len(obstacles)} obstacles)"
            )

        return ConnectorPath(
            segments=chosen.segments,
            start_site=selection.start_site,
            end_site=selection.end_site,
            best_effort=best_effort,
            strategy=chosen.strategy,
        )


_default_router = ConnectorRouter()


def get_router() -> ConnectorRouter:
    """Get default router (its logger keeps no warnings)"""
    return _default_router


def compute_routing(
    start_shape: BaseElement,
    end_shape: BaseElement,
    start_site_name: Optional[str] = None,
    end_site_name: Optional[str] = None,
    all_elements: Iterable[BaseElement] = (),
    connector_id: Optional[str] = None,
) -> ConnectorPath:
    """Route with the default router (see ConnectorRouter.compute_routing)"""
    return _default_router.compute_routing(
        start_shape, end_shape, start_site_name, end_site_name, all_elements, connector_id,
    )


def compute_best_site_pair(start_shape: BaseElement, end_shape: BaseElement) -> SiteSelection:
    """Automatic site selection with the default router"""
    return _default_router.compute_best_site_pair(start_shape, end_shape)
