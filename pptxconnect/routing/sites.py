"""
Site selector

Picks the pair of connection sites a connector attaches to: either the
explicitly requested pair, or the pair with the best distance + alignment
score
"""
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import InvalidRoutingInput
from ..geom.primitives import Point, euclidean_distance, manhattan_distance
from ..shapes.catalog import ConnectionSite

# Cardinal connection point names map to site positions in catalog order
CARDINAL_SITE_INDEX = {
    'top': 0,
    'right': 1,
    'bottom': 2,
    'left': 3,
}

_INDEXED_SITE_NAME = re.compile(r'^cxn(\d+)$')


@dataclass(frozen=True)
class SiteSelection:
    """Chosen start and end connection sites"""
    start_site: ConnectionSite
    end_site: ConnectionSite

    @property
    def start_site_name(self) -> str:
        return self.start_site.id

    @property
    def end_site_name(self) -> str:
        return self.end_site.id


def find_site(sites: Sequence[ConnectionSite], name: Optional[str]) -> Optional[ConnectionSite]:
    """
    Resolve a requested site name: exact id first, then ``cxnN`` index, then
    the cardinal alias order (top, right, bottom, left). None when unresolved.
    """
    if not name:
        return None
    for site in sites:
        if site.id == name:
            return site
    match = _INDEXED_SITE_NAME.match(name)
    index = int(match.group(1)) if match else CARDINAL_SITE_INDEX.get(name)
    if index is not None and index < len(sites):
        return sites[index]
    return None


def alignment_penalty(start_angle: Optional[float], end_angle: Optional[float]) -> float:
    """
    Angular difference between the start site's reversed direction and the end site's direction.

    0 for complementary sites (right -> left), 180 for sites facing the same way.
    Sites without an angle (center) are not penalized.
    """
    if start_angle is None or end_angle is None:
        return 0.0
    diff = abs(((start_angle + 180.0) % 360.0) - (end_angle % 360.0))
    return min(diff, 360.0 - diff)


def pair_score(start_site: ConnectionSite, end_site: ConnectionSite) -> float:
    return manhattan_distance(start_site.point, end_site.point) + alignment_penalty(start_site.angle, end_site.angle)


def select_site_pair(
    start_sites: Sequence[ConnectionSite],
    end_sites: Sequence[ConnectionSite],
    start_site_name: Optional[str] = None,
    end_site_name: Optional[str] = None,
) -> SiteSelection:
    """
    Select the connection sites for a connector.

    When both names are given and both resolve, that pair is returned without
    scoring. Otherwise every cross pair is scored and the lowest score wins;
    ties keep the first pair in list order.

    Raises:
        InvalidRoutingInput: either site list is empty
    """
    if not start_sites or not end_sites:
        raise InvalidRoutingInput("Both shapes need at least one connection site")

    if start_site_name and end_site_name:
        start_site = find_site(start_sites, start_site_name)
        end_site = find_site(end_sites, end_site_name)
        if start_site is not None and end_site is not None:
            return SiteSelection(start_site, end_site)

    best = SiteSelection(start_sites[0], end_sites[0])
    best_score = float("inf")
    for start_site in start_sites:
        for end_site in end_sites:
            score = pair_score(start_site, end_site)
            if score < best_score:
                best_score = score
                best = SiteSelection(start_site, end_site)
    return best


def nearest_site(sites: Sequence[ConnectionSite], point: Point) -> ConnectionSite:
    """Site closest (Euclidean) to a point; ties keep list order"""
    if not sites:
        raise InvalidRoutingInput("No connection sites to choose from")
    return min(sites, key=lambda site: euclidean_distance(site.point, point))
