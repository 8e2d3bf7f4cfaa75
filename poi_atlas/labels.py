"""Display strings for the PoI creation form.

Keys follow the front end's translation namespace so the same catalogue
can be shared with it.
"""

from __future__ import annotations

from typing import Callable, Dict

Translator = Callable[[str], str]

DEFAULT_LOCALE = "en"

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "placesOfInterest.world": "World",
        "placesOfInterest.continent": "Continent",
        "placesOfInterest.region": "Region",
        "placesOfInterest.area": "Area",
        "placesOfInterest.city": "City",
        "placesOfInterest.camp": "Camp",
        "placesOfInterest.neighborhood": "Neighborhood",
        "placesOfInterest.point": "Point",
        "placesOfInterest.clear": "No parent",
        "placesOfInterest.notAllowed": "not allowed",
        "placesOfInterest.createLocation": "Create a new location",
        "placesOfInterest.create": "Create",
        "campaign.validationErrorRequired": "This field is required",
        "campaign.validationErrorTooLong": "Too long",
        "campaign.typeValidationErrorRequired": "Choose a type",
        "campaign.validationErrorInvalidType": "Invalid type",
        "campaign.parentNotValid": "This parent is not valid for the chosen type",
    },
    "it": {
        "placesOfInterest.world": "Mondo",
        "placesOfInterest.continent": "Continente",
        "placesOfInterest.region": "Regione",
        "placesOfInterest.area": "Area",
        "placesOfInterest.city": "Città",
        "placesOfInterest.camp": "Accampamento",
        "placesOfInterest.neighborhood": "Quartiere",
        "placesOfInterest.point": "Punto",
        "placesOfInterest.clear": "Nessun genitore",
        "placesOfInterest.notAllowed": "non consentito",
        "placesOfInterest.createLocation": "Crea un nuovo luogo",
        "placesOfInterest.create": "Crea",
        "campaign.validationErrorRequired": "Campo obbligatorio",
        "campaign.validationErrorTooLong": "Troppo lungo",
        "campaign.typeValidationErrorRequired": "Scegli un tipo",
        "campaign.validationErrorInvalidType": "Tipo non valido",
        "campaign.parentNotValid": "Questo genitore non è valido per il tipo scelto",
    },
}


def get_translator(locale: str = DEFAULT_LOCALE) -> Translator:
    """Return a key -> text lookup for `locale`.

    Unknown keys fall back to English, then to the key itself.
    """
    catalogue = LABELS.get(locale, {})
    fallback = LABELS[DEFAULT_LOCALE]

    def translate(key: str) -> str:
        return catalogue.get(key) or fallback.get(key, key)

    return translate


def place_label_key(place: str) -> str:
    return f"placesOfInterest.{place}"
