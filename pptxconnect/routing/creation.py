"""
Interactive connector creation

Drag-and-drop helpers: hit-testing the element under the pointer, snapping a
dragged connector to the nearest connection site of the target, and the
preview path drawn while dragging
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_ELEMENT_SIZE_PX
from ..geom.path import format_coordinate
from ..geom.primitives import Point, Rect
from ..model.intermediate import BaseElement, ConnectorElement, Style
from .engine import ConnectorPath, ConnectorRouter, get_router
from .reconnect import apply_route
from .sites import find_site, nearest_site


@dataclass(frozen=True)
class DraggedConnection:
    """Result of dropping a connector onto a target element"""
    path: ConnectorPath
    start_element_id: str
    end_element_id: str
    start_site_name: str
    end_site_name: str
    connector_type: str = "elbow"

    @property
    def path_data(self) -> str:
        return self.path.path_data

    @property
    def start_point(self) -> Point:
        return self.path.start_site.point

    @property
    def end_point(self) -> Point:
        return self.path.end_site.point

    def to_connector(self, connector_id: str, style: Optional[Style] = None) -> ConnectorElement:
        """Build the connector element for this connection"""
        connector = ConnectorElement(
            id=connector_id,
            source_id=self.start_element_id,
            target_id=self.end_element_id,
            connector_type=self.connector_type,
            style=style or Style(arrow_end="triangle"),
        )
        return apply_route(connector, self.path)


def _hit_box(element: BaseElement) -> Rect:
    # Elements without a size get the default box used when drawing them
    return Rect(
        float(element.x or 0.0),
        float(element.y or 0.0),
        float(element.w if element.w is not None else DEFAULT_ELEMENT_SIZE_PX),
        float(element.h if element.h is not None else DEFAULT_ELEMENT_SIZE_PX),
    )


def find_target_element(
    point: Point,
    elements: Sequence[BaseElement],
    exclude_id: Optional[str] = None,
) -> Optional[BaseElement]:
    """Topmost element (last in list order) under the point, skipping connectors and exclude_id"""
    for element in reversed(elements):
        if element.id == exclude_id or element.element_type == "line":
            continue
        if _hit_box(element).contains(point):
            return element
    return None


def connection_point(element: BaseElement, name: str, router: Optional[ConnectorRouter] = None) -> Point:
    """
    Point of a named connection site, ``center`` included.

    Unresolved names fall back to the element center.
    """
    router = router or get_router()
    sites = router.sites_for(element, include_center=True)
    site = find_site(sites, name)
    if site is None:
        router.logger.warn_site_not_found(element.id, name)
        site = sites[-1]  # center
    return site.point


def connect_to_nearest_site(
    router: ConnectorRouter,
    start: BaseElement,
    target: BaseElement,
    drag_position: Point,
    all_elements: Iterable[BaseElement] = (),
    start_site_name: Optional[str] = None,
    connector_id: Optional[str] = None,
) -> DraggedConnection:
    """
    Route a dragged connector to the target site nearest the pointer.

    Args:
        router: ConnectorRouter used for site lookup and routing
        start: Element the drag began on
        target: Element under the pointer
        drag_position: Current pointer position
        all_elements: Every element on the slide
        start_site_name: Site the drag began from; picked nearest the pointer if None
        connector_id: Id of the connector being dragged, if it already exists

    Returns:
        DraggedConnection with the routed path
    """
    if not start_site_name:
        start_site_name = nearest_site(router.sites_for(start), drag_position).id
    end_site_name = nearest_site(router.sites_for(target), drag_position).id

    path = router.compute_routing(
        start, target, start_site_name, end_site_name,
        all_elements=all_elements, connector_id=connector_id,
    )
    return DraggedConnection(
        path=path,
        start_element_id=start.id,
        end_element_id=target.id,
        start_site_name=path.start_site.id,
        end_site_name=path.end_site.id,
    )


def preview_path_data(
    router: ConnectorRouter,
    start: BaseElement,
    start_site_name: str,
    pointer: Point,
    target: Optional[BaseElement] = None,
    all_elements: Iterable[BaseElement] = (),
) -> str:
    """Path drawn while dragging: routed when over a target, a straight line otherwise"""
    if target is not None:
        return connect_to_nearest_site(
            router, start, target, pointer, all_elements, start_site_name=start_site_name,
        ).path_data

    origin = connection_point(start, start_site_name, router)
    return (
        f"M {format_coordinate(origin.x)} {format_coordinate(origin.y)} "
        f"L {format_coordinate(pointer.x)} {format_coordinate(pointer.y)}"
    )
