"""Creation-form validation and the create-then-insert flow.

The form collects raw strings (name, type, parent id). validate_draft()
reports per-field problems the way the form displays them; create_poi()
runs the final guard, asks the persistence layer for an id and only then
appends the node to the forest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .errors import CreateRequestError, DraftValidationError
from .hierarchy import is_compatible
from .labels import Translator, get_translator
from .models import PoiForest, PoiNode, PoiType
from .options import parse_parent_id

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 32

# (name, place, parent, description) -> id assigned by the server
CreateRequest = Callable[[str, PoiType, Optional[int], str], int]

_PLACE_VALUES = {place.value for place in PoiType}


@dataclass
class PoiDraft:
    """Raw values of the creation form; '' means not chosen yet."""

    text: str = ""
    place: str = ""
    parent: str = ""


def validate_draft(
    forest: PoiForest,
    draft: PoiDraft,
    translate: Optional[Translator] = None,
) -> Dict[str, str]:
    """Validate a draft for submission.

    Returns:
        Mapping of field name ("text", "place", "parent") to message;
        empty when the draft can be submitted
    """
    translate = translate or get_translator()
    errors: Dict[str, str] = {}

    name = (draft.text or "").strip()
    if not name:
        errors["text"] = translate("campaign.validationErrorRequired")
    elif len(name) > NAME_MAX_LENGTH:
        errors["text"] = translate("campaign.validationErrorTooLong")

    place = draft.place or ""
    if not place:
        errors["place"] = translate("campaign.typeValidationErrorRequired")
    elif place not in _PLACE_VALUES:
        errors["place"] = translate("campaign.validationErrorInvalidType")

    try:
        parent = parse_parent_id(draft.parent)
    except ValueError:
        errors["parent"] = translate("campaign.parentNotValid")
        return errors

    if parent is not None:
        if parent not in forest:
            errors["parent"] = translate("campaign.parentNotValid")
        elif "place" not in errors and not is_compatible(forest, parent, place):
            errors["parent"] = translate("campaign.parentNotValid")

    return errors


def create_poi(
    forest: PoiForest,
    draft: PoiDraft,
    create_request: CreateRequest,
    description: str = "",
    translate: Optional[Translator] = None,
) -> PoiNode:
    """Validate, persist and append a new place of interest.

    The forest is only touched after the create request returns an id;
    a failed request leaves it unchanged.

    Raises:
        DraftValidationError: the draft is not submittable
        CreateRequestError: the persistence layer rejected the request
    """
    errors = validate_draft(forest, draft, translate)
    if errors:
        logger.warning("Rejected place of interest draft: %s", errors)
        raise DraftValidationError(errors)

    name = draft.text.strip()
    place = PoiType(draft.place)
    parent = parse_parent_id(draft.parent)

    try:
        poi_id = create_request(name, place, parent, description)
    except Exception as e:
        logger.warning("Create request for %r failed: %s", name, e)
        raise CreateRequestError(f"Failed to create place of interest: {e}", cause=e) from e

    node = forest.insert(
        PoiNode(name=name, place=place, description=description, poi_id=int(poi_id)),
        parent,
    )
    logger.info("Created %s %r with id %s", place.value, name, node.poi_id)
    return node
