"""Place-of-interest hierarchy for tabletop campaigns."""

from .errors import (
    CreateRequestError,
    DraftValidationError,
    IncompatibleHierarchyError,
    MissingParentError,
    PoiError,
    PoiNotFoundError,
)
from .form import NAME_MAX_LENGTH, PoiDraft, create_poi, validate_draft
from .hierarchy import find_invariant_violations, is_compatible, require_compatible
from .models import POI_RANKS, PoiForest, PoiNode, PoiType, rank
from .options import ParentOption, TypeOption, build_parent_options, build_type_options, parse_parent_id

__all__ = [
    "CreateRequestError",
    "DraftValidationError",
    "IncompatibleHierarchyError",
    "MissingParentError",
    "PoiError",
    "PoiNotFoundError",
    "NAME_MAX_LENGTH",
    "PoiDraft",
    "create_poi",
    "validate_draft",
    "find_invariant_violations",
    "is_compatible",
    "require_compatible",
    "POI_RANKS",
    "PoiForest",
    "PoiNode",
    "PoiType",
    "rank",
    "ParentOption",
    "TypeOption",
    "build_parent_options",
    "build_type_options",
    "parse_parent_id",
]
