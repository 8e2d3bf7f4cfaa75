"""Selectable parent/type lists for the PoI creation form.

Both builders are pure functions of the forest and the current partial
selection, recomputed whenever either selector changes. Illegal entries
are disabled, never dropped, so the user always sees the whole
vocabulary. An unset selection disables nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .hierarchy import parent_place
from .labels import Translator, get_translator, place_label_key
from .models import PoiForest, PoiType, rank


@dataclass(frozen=True)
class ParentOption:
    """Candidate parent; `poi_id` is None for the "no parent" entry."""

    poi_id: Optional[int]
    label: str
    disabled: bool = False


@dataclass(frozen=True)
class TypeOption:
    """Candidate PoI type."""

    place: PoiType
    label: str
    disabled: bool = False


def parse_parent_id(value: Union[int, str, None]) -> Optional[int]:
    """Normalize a parent selector value: '' and None mean no parent.

    Raises ValueError for text that is not an integer id.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    value = value.strip()
    if not value:
        return None
    return int(value)


def _selected_place(place: Union[PoiType, str, None]) -> Optional[PoiType]:
    if place is None or place == "":
        return None
    return PoiType(place)


def build_parent_options(
    forest: PoiForest,
    selected_place: Union[PoiType, str, None],
    translate: Optional[Translator] = None,
) -> List[ParentOption]:
    """List every place as a candidate parent, "no parent" first, then by id.

    A place is disabled when a type is selected and the place is not
    strictly more general than it.
    """
    translate = translate or get_translator()
    place = _selected_place(selected_place)

    options = [ParentOption(poi_id=None, label=translate("placesOfInterest.clear"))]
    for poi_id, node in sorted(forest.points.items()):
        options.append(ParentOption(
            poi_id=poi_id,
            label=node.name,
            disabled=place is not None and rank(node.place) >= rank(place),
        ))
    return options


def build_type_options(
    forest: PoiForest,
    selected_parent: Union[int, str, None],
    translate: Optional[Translator] = None,
) -> List[TypeOption]:
    """List every PoI type in canonical order.

    A type is disabled when a parent is selected and the type is not
    strictly more specific than the parent. Raises MissingParentError if
    the selected parent is not in the forest.
    """
    translate = translate or get_translator()
    parent = parse_parent_id(selected_parent)
    parent_rank = rank(parent_place(forest, parent)) if parent is not None else None

    return [
        TypeOption(
            place=place,
            label=translate(place_label_key(place.value)),
            disabled=parent_rank is not None and parent_rank >= rank(place),
        )
        for place in PoiType
    ]
