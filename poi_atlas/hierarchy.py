"""Hierarchy rules for placing a PoI under a parent.

This module provides pure functions: they read the forest and never
modify it.
"""

from __future__ import annotations

from typing import List, Optional, Set, Union

from .errors import IncompatibleHierarchyError, MissingParentError
from .models import PoiForest, PoiType, rank


def parent_place(forest: PoiForest, parent: int) -> PoiType:
    """Type of an existing parent, or MissingParentError."""
    node = forest.find(parent)
    if node is None:
        raise MissingParentError(parent)
    return node.place


def is_compatible(
    forest: PoiForest,
    parent: Optional[int],
    place: Union[PoiType, str, None],
) -> bool:
    """Whether a node of type `place` may be created under `parent`.

    No parent is always compatible. Otherwise the new type must rank
    strictly above the parent's: a region cannot contain another region.

    Raises:
        MissingParentError: `parent` is set but not in the forest
        ValueError: `place` is unset or not a PoI type
    """
    if place is None or place == "":
        raise ValueError("Compatibility is undefined until a type is chosen")
    place_rank = rank(place)
    if parent is None:
        return True
    return place_rank > rank(parent_place(forest, parent))


def require_compatible(
    forest: PoiForest,
    parent: Optional[int],
    place: Union[PoiType, str],
) -> None:
    """Raise IncompatibleHierarchyError unless is_compatible() holds."""
    if not is_compatible(forest, parent, place):
        raise IncompatibleHierarchyError(parent_place(forest, parent).value, PoiType(place).value)


def find_invariant_violations(forest: PoiForest) -> List[str]:
    """Describe every broken forest invariant; empty when the forest is sound.

    Checks membership of roots/children, dangling parents, parent/child
    link agreement, strict rank ordering and cycles.
    """
    problems: List[str] = []
    points = forest.points

    for rid in forest.roots:
        if rid not in points:
            problems.append(f"root {rid} is not a known place")
        elif points[rid].parent is not None:
            problems.append(f"root {rid} has parent {points[rid].parent}")

    for pid, node in points.items():
        if node.poi_id != pid:
            problems.append(f"place {pid} is stored with id {node.poi_id}")

        for cid in node.children:
            if cid not in points:
                problems.append(f"place {pid} lists unknown child {cid}")
            elif points[cid].parent != pid:
                problems.append(f"place {pid} lists child {cid} whose parent is {points[cid].parent}")

        if node.parent is None:
            if pid not in forest.roots:
                problems.append(f"parentless place {pid} is missing from roots")
            continue

        parent = points.get(node.parent)
        if parent is None:
            problems.append(f"place {pid} references missing parent {node.parent}")
            continue
        if pid not in parent.children:
            problems.append(f"place {pid} is not listed among the children of {node.parent}")
        if rank(node.place) <= rank(parent.place):
            problems.append(
                f"place {pid} ({node.place.value}) is not more specific than "
                f"its parent {node.parent} ({parent.place.value})"
            )

    for pid in points:
        seen: Set[int] = set()
        current: Optional[int] = pid
        while current is not None and current in points:
            if current in seen:
                problems.append(f"place {pid} is part of a parent cycle")
                break
            seen.add(current)
            current = points[current].parent

    return problems
