"""
Re-routing of attached connectors after a shape moves
"""
from dataclasses import replace
from typing import Dict, List, Sequence

from ..geom.primitives import Rect
from ..model.intermediate import BaseElement, ConnectorElement
from .engine import ConnectorPath, ConnectorRouter


def find_connected_connectors(element_id: str, elements: Sequence[BaseElement]) -> List[ConnectorElement]:
    """Connectors whose source or target is element_id, in list order"""
    return [
        element for element in elements
        if isinstance(element, ConnectorElement) and element.is_attached_to(element_id)
    ]


def apply_route(connector: ConnectorElement, path: ConnectorPath) -> ConnectorElement:
    """New connector value following a routed path (geometry, points and site names)"""
    points = tuple(path.points)
    box = Rect.from_points(points)
    return replace(
        connector,
        x=box.x,
        y=box.y,
        w=box.width,
        h=box.height,
        points=points,
        start_site_name=path.start_site.id,
        end_site_name=path.end_site.id,
    )


def reroute_connected(
    router: ConnectorRouter,
    moved: BaseElement,
    elements: Sequence[BaseElement],
) -> List[ConnectorElement]:
    """
    Re-route every elbow connector attached to a moved element.

    Both ends get a fresh automatic site pair, so custom bends are dropped.
    ``moved`` replaces the element with the same id in ``elements``; the
    input sequence is not modified.

    Args:
        router: ConnectorRouter used for routing
        moved: The element at its new position
        elements: Every element on the slide

    Returns:
        Re-routed connectors, in list order. Connectors whose other end is
        not on the slide are left out.
    """
    current = [moved if element.id == moved.id else element for element in elements]
    by_id: Dict[str, BaseElement] = {element.id: element for element in current}

    rerouted = []
    for connector in find_connected_connectors(moved.id, current):
        if not connector.is_elbow:
            continue
        start = by_id.get(connector.source_id)
        end = by_id.get(connector.target_id)
        if start is None or end is None:
            router.logger.debug(
                f"Connector {connector.id} is not attached at both ends; skipping re-route"
            )
            continue
        path = router.compute_routing(start, end, all_elements=current, connector_id=connector.id)
        rerouted.append(apply_route(connector, path))
    return rerouted


def reroute_elements(router: ConnectorRouter, elements: Sequence[BaseElement]) -> List[BaseElement]:
    """
    Re-route every attached elbow connector on a slide.

    Requested site names stored on a connector are kept when they resolve.
    Returns a new element list in the same order; connectors that are not
    elbow connectors or not attached at both ends are passed through.
    """
    by_id: Dict[str, BaseElement] = {element.id: element for element in elements}
    result: List[BaseElement] = []
    for element in elements:
        if isinstance(element, ConnectorElement) and element.is_elbow:
            start = by_id.get(element.source_id) if element.source_id else None
            end = by_id.get(element.target_id) if element.target_id else None
            if start is not None and end is not None:
                path = router.compute_routing(
                    start, end,
                    element.start_site_name, element.end_site_name,
                    all_elements=elements, connector_id=element.id,
                )
                result.append(apply_route(element, path))
                continue
        result.append(element)
    return result
