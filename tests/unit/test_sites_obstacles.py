"""
Unit tests for site selection and obstacle set building.
"""
from __future__ import annotations

import pytest

from pptxconnect.errors import InvalidRoutingInput
from pptxconnect.geom.primitives import Point, Rect
from pptxconnect.model.intermediate import (
    ConnectorElement,
    GroupElement,
    ImageElement,
    ShapeElement,
    TextElement,
)
from pptxconnect.routing.obstacles import build_obstacles, element_bounds, element_shape_kind
from pptxconnect.routing.sites import (
    alignment_penalty,
    find_site,
    nearest_site,
    select_site_pair,
)
from pptxconnect.shapes.catalog import ConnectionSite, ShapeKind, compute_sites


def _sites(kind: str, x: float, y: float, w: float, h: float):
    return compute_sites(kind, Rect(x, y, w, h))


# ---- find_site ----
def test_find_site_by_id_index_and_cardinal_alias() -> None:
    sites = _sites("rectangle", 0.0, 0.0, 100.0, 50.0)
    assert find_site(sites, "bottom").id == "bottom"
    assert find_site(sites, "cxn1").id == "right"
    assert find_site(sites, "cxn9") is None
    assert find_site(sites, "nowhere") is None
    assert find_site(sites, None) is None


def test_find_site_cardinal_alias_on_custom_ids() -> None:
    sites = [ConnectionSite(f"s{i}", Point(float(i), 0.0), 0.0) for i in range(4)]
    assert find_site(sites, "bottom").id == "s2"
    assert find_site(sites, "left").id == "s3"


# ---- alignment_penalty ----
def test_alignment_penalty() -> None:
    assert alignment_penalty(0.0, 180.0) == 0.0
    assert alignment_penalty(0.0, 0.0) == 180.0
    assert alignment_penalty(90.0, 180.0) == 90.0
    assert alignment_penalty(270.0, 90.0) == 0.0
    assert alignment_penalty(None, 90.0) == 0.0


# ---- select_site_pair ----
def test_automatic_selection_prefers_facing_sites() -> None:
    a = _sites("rectangle", 100.0, 100.0, 100.0, 80.0)
    b = _sites("circle", 400.0, 100.0, 100.0, 100.0)
    selection = select_site_pair(a, b)
    assert selection.start_site_name == "right"
    assert selection.end_site_name == "left"


def test_explicit_pair_is_used_without_scoring() -> None:
    a = _sites("rectangle", 100.0, 100.0, 100.0, 80.0)
    b = _sites("circle", 400.0, 100.0, 100.0, 100.0)
    selection = select_site_pair(a, b, "top", "bottom")
    assert selection.start_site_name == "top"
    assert selection.end_site_name == "bottom"


def test_partial_or_unresolved_names_fall_back_to_automatic() -> None:
    a = _sites("rectangle", 100.0, 100.0, 100.0, 80.0)
    b = _sites("circle", 400.0, 100.0, 100.0, 100.0)
    assert select_site_pair(a, b, "top", None).start_site_name == "right"
    assert select_site_pair(a, b, "top", "nowhere").start_site_name == "right"


def test_ties_keep_first_pair() -> None:
    start = [ConnectionSite("p", Point(0.0, 0.0), None), ConnectionSite("q", Point(0.0, 0.0), None)]
    end = [ConnectionSite("r", Point(10.0, 0.0), None), ConnectionSite("s", Point(10.0, 0.0), None)]
    selection = select_site_pair(start, end)
    assert (selection.start_site.id, selection.end_site.id) == ("p", "r")


def test_empty_site_list_raises() -> None:
    sites = _sites("rectangle", 0.0, 0.0, 10.0, 10.0)
    with pytest.raises(InvalidRoutingInput):
        select_site_pair([], sites)
    with pytest.raises(InvalidRoutingInput):
        nearest_site([], Point(0.0, 0.0))


def test_nearest_site() -> None:
    sites = _sites("rectangle", 0.0, 0.0, 100.0, 100.0)
    assert nearest_site(sites, Point(95.0, 40.0)).id == "right"
    assert nearest_site(sites, Point(50.0, -30.0)).id == "top"


# ---- element_bounds ----
def test_group_bounds_are_union_of_children_relative_to_origin() -> None:
    group = GroupElement(
        id="g", x=100.0, y=50.0, w=10.0, h=10.0,
        children=(
            ShapeElement(id="c1", x=0.0, y=0.0, w=40.0, h=20.0),
            ShapeElement(id="c2", x=60.0, y=30.0, w=20.0, h=20.0),
        ),
    )
    assert element_bounds(group) == Rect(100.0, 50.0, 80.0, 50.0)


def test_group_circle_child_uses_smaller_side() -> None:
    group = GroupElement(
        id="g", x=0.0, y=0.0,
        children=(ShapeElement(id="c", x=10.0, y=10.0, w=80.0, h=30.0, shape_type="circle"),),
    )
    assert element_bounds(group) == Rect(10.0, 10.0, 30.0, 30.0)


def test_group_connector_child_uses_points() -> None:
    group = GroupElement(
        id="g", x=5.0, y=5.0,
        children=(ConnectorElement(id="l", points=(Point(0.0, 0.0), Point(0.0, 40.0), Point(20.0, 40.0))),),
    )
    assert element_bounds(group) == Rect(5.0, 5.0, 20.0, 40.0)


def test_empty_group_uses_own_box() -> None:
    group = GroupElement(id="g", x=1.0, y=2.0, w=3.0, h=4.0)
    assert element_bounds(group) == Rect(1.0, 2.0, 3.0, 4.0)


def test_missing_or_negative_bounds_raise() -> None:
    with pytest.raises(InvalidRoutingInput):
        element_bounds(ShapeElement(id="s", x=0.0, y=0.0, w=None, h=10.0))
    with pytest.raises(InvalidRoutingInput):
        element_bounds(ShapeElement(id="s", x=0.0, y=0.0, w=-5.0, h=10.0))
    with pytest.raises(InvalidRoutingInput):
        element_bounds(None)


def test_non_shape_elements_route_like_rectangles() -> None:
    assert element_shape_kind(ImageElement(id="i", x=0.0, y=0.0, w=1.0, h=1.0)) == ShapeKind.RECTANGLE
    assert element_shape_kind(ShapeElement(id="s", shape_type="diamond")) == ShapeKind.DIAMOND


# ---- build_obstacles ----
def test_build_obstacles_filters_endpoints_connector_lines_and_text() -> None:
    elements = [
        ShapeElement(id="A", x=0.0, y=0.0, w=10.0, h=10.0),
        ShapeElement(id="B", x=100.0, y=0.0, w=10.0, h=10.0),
        ShapeElement(id="C", x=50.0, y=0.0, w=10.0, h=10.0, shape_type="ellipse"),
        ImageElement(id="I", x=50.0, y=50.0, w=10.0, h=10.0),
        TextElement(id="T", x=0.0, y=50.0, w=10.0, h=10.0),
        ConnectorElement(id="L", x=0.0, y=0.0, w=1.0, h=1.0),
        ConnectorElement(id="self", x=0.0, y=0.0, w=1.0, h=1.0),
    ]
    obstacles = build_obstacles(elements, "A", "B", connector_id="self")
    assert [o.element_id for o in obstacles] == ["C", "I"]
    assert obstacles[0].shape_kind == ShapeKind.ELLIPSE
    assert obstacles[0].bounds == Rect(50.0, 0.0, 10.0, 10.0)


def test_build_obstacles_does_not_mutate_input() -> None:
    elements = [ShapeElement(id="C", x=50.0, y=0.0, w=10.0, h=10.0)]
    snapshot = list(elements)
    build_obstacles(elements, "A", "B")
    assert elements == snapshot
