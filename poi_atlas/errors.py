"""Error taxonomy for PoI hierarchy operations.

All of these are local and recoverable: the user fixes the selection
and submits again. Nothing here is retried automatically.
"""

from __future__ import annotations

from typing import Dict, Optional


class PoiError(Exception):
    """Base class for place-of-interest errors."""


class PoiNotFoundError(PoiError, KeyError):
    """A PoI id is not present in the forest."""

    def __init__(self, poi_id: int):
        self.poi_id = poi_id
        super().__init__(poi_id)

    def __str__(self) -> str:
        return f"Place of interest not found: {self.poi_id}"


class MissingParentError(PoiNotFoundError):
    """A referenced parent id does not exist (never coerced to 'no parent')."""

    def __str__(self) -> str:
        return f"Referenced parent does not exist: {self.poi_id}"


class IncompatibleHierarchyError(PoiError, ValueError):
    """The candidate type is not strictly more specific than its parent."""

    def __init__(self, parent_place: str, place: str):
        self.parent_place = parent_place
        self.place = place
        super().__init__(f"A {place} cannot be placed inside a {parent_place}")


class DraftValidationError(PoiError, ValueError):
    """A creation draft failed form validation.

    `errors` maps form field name to a display message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid fields: {fields}")


class CreateRequestError(PoiError):
    """The upstream create request failed; the forest was not modified."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
