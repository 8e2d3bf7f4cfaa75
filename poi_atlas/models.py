"""Place-of-interest models for campaign geography.

Version History:
- v0.2: Added walk/ancestors read helpers for the harness tree view
- v0.1: Initial rank model and forest

A campaign's places of interest form a forest: each node is a world,
continent, region, ... down to a single point, and a child is always
strictly more specific than its parent. The forest is populated from a
campaign payload and only ever grows by appending new nodes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .errors import PoiNotFoundError

logger = logging.getLogger(__name__)


class PoiType(str, Enum):
    """Kind of place, declared from most general to most specific."""

    WORLD = "world"
    CONTINENT = "continent"
    REGION = "region"
    AREA = "area"
    CITY = "city"
    CAMP = "camp"
    NEIGHBORHOOD = "neighborhood"
    POINT = "point"


# Specificity rank: lower is more general.
POI_RANKS: Dict[PoiType, int] = {place: index for index, place in enumerate(PoiType)}


def rank(place: Union[PoiType, str]) -> int:
    """Return the specificity rank of a PoI type (0 = world, 7 = point).

    Accepts the enum member or its wire string. Raises ValueError for a
    string that names no type.
    """
    return POI_RANKS[PoiType(place)]


@dataclass
class PoiNode:
    """One place of interest.

    `poi_id` is assigned by the persistence layer and stays None until the
    create request succeeds. `children` keeps creation order.
    """

    name: str
    place: PoiType
    description: str = ""
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    poi_id: Optional[int] = None

    def __post_init__(self) -> None:
        self.place = PoiType(self.place)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape."""
        return {
            "id": self.poi_id,
            "name": self.name,
            "place": self.place.value,
            "description": self.description,
            "parent": self.parent,
            "children": list(self.children),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any], poi_id: Optional[int] = None) -> "PoiNode":
        """Deserialize from the wire shape.

        `poi_id` overrides the payload's `id`, for payloads keyed by id.
        """
        if poi_id is None and data.get("id") is not None:
            poi_id = int(data["id"])
        parent = data.get("parent")
        return PoiNode(
            poi_id=poi_id,
            name=data["name"],
            place=PoiType(data["place"]),
            description=data.get("description") or "",
            parent=int(parent) if parent is not None else None,
            children=[int(c) for c in data.get("children", [])],
        )


@dataclass
class PoiForest:
    """All places of interest of one campaign.

    `points` maps id to node; `roots` lists the parentless ids in the
    order they were created.
    """

    points: Dict[int, PoiNode] = field(default_factory=dict)
    roots: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __contains__(self, poi_id: object) -> bool:
        return poi_id in self.points

    def get(self, poi_id: int) -> PoiNode:
        """Return the node for `poi_id` or raise PoiNotFoundError."""
        try:
            return self.points[poi_id]
        except KeyError:
            raise PoiNotFoundError(poi_id) from None

    def find(self, poi_id: Optional[int]) -> Optional[PoiNode]:
        """Like get(), but returns None for unknown or unset ids."""
        if poi_id is None:
            return None
        return self.points.get(poi_id)

    def insert(self, node: PoiNode, parent: Optional[int] = None) -> PoiNode:
        """Append a node that the persistence layer has already created.

        The caller has checked the parent with the compatibility validator;
        the hierarchy rule is not re-checked here.

        Args:
            node: New node carrying its server-assigned `poi_id`
            parent: Id of an existing node, or None for a new root

        Returns:
            The node as stored in the forest
        """
        if node.poi_id is None:
            raise ValueError("Cannot insert a place of interest without an assigned id")

        node.parent = parent
        self.points[node.poi_id] = node
        if parent is None:
            self.roots.append(node.poi_id)
        else:
            self.get(parent).children.append(node.poi_id)

        logger.debug("Inserted %s %r (id=%s, parent=%s)", node.place.value, node.name, node.poi_id, parent)
        return node

    def walk(self) -> Iterator[Tuple[int, PoiNode]]:
        """Yield (depth, node) depth-first, roots and children in stored order."""
        stack: List[Tuple[int, int]] = [(0, rid) for rid in reversed(self.roots)]
        while stack:
            depth, poi_id = stack.pop()
            node = self.get(poi_id)
            yield depth, node
            stack.extend((depth + 1, cid) for cid in reversed(node.children))

    def ancestors(self, poi_id: int) -> List[PoiNode]:
        """Return the parent chain of `poi_id`, nearest parent first."""
        chain: List[PoiNode] = []
        node = self.get(poi_id)
        while node.parent is not None:
            node = self.get(node.parent)
            chain.append(node)
        return chain

    def next_id(self) -> int:
        """Smallest id greater than every id in the forest."""
        return max(self.points, default=0) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the campaign payload shape."""
        return {
            "points": {str(pid): node.to_dict() for pid, node in self.points.items()},
            "roots": list(self.roots),
        }

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "PoiForest":
        """Build a forest from a campaign payload.

        `points` may be a mapping of id to node (JSON keys arrive as
        strings) or a list of nodes that carry their own `id`. The payload
        is trusted as-is.
        """
        if not data:
            return PoiForest()

        points_data = data.get("points", {})
        points: Dict[int, PoiNode] = {}
        if isinstance(points_data, dict):
            for key, node_data in points_data.items():
                node = PoiNode.from_dict(node_data, poi_id=int(key))
                points[node.poi_id] = node
        else:
            for node_data in points_data:
                node = PoiNode.from_dict(node_data)
                points[node.poi_id] = node

        return PoiForest(
            points=points,
            roots=[int(r) for r in data.get("roots", [])],
        )
