"""
Messages shown to the user, per locale.

The locale is taken from ``config.LOCALE`` (e.g. "en", "de" or "de-DE")
when the message is needed, so changing it affects existing prompts too.
Unknown locales fall back to English.
"""

from . import config


FALLBACK_LOCALE = "en"

MESSAGES = {
    "en": {
        "error.required": "a value is required",
        "error.digitsOnly": "must contain digits only",
        "error.invalidInt": "please enter a valid integer",
        "error.pattern": "input does not match the expected format",
        "error.invalid": "invalid input",
        "error.yesno": "please answer y or n",
        "hint.select": "use arrow keys",
        "hint.multiselect": "space to toggle",
        "status.cancelled": "cancelled",
    },
    "de": {
        "error.required": "eine Eingabe ist erforderlich",
        "error.digitsOnly": "darf nur Ziffern enthalten",
        "error.invalidInt": "bitte eine gültige ganze Zahl eingeben",
        "error.pattern": "Eingabe entspricht nicht dem erwarteten Format",
        "error.invalid": "ungültige Eingabe",
        "error.yesno": "bitte mit y oder n antworten",
        "hint.select": "Pfeiltasten benutzen",
        "hint.multiselect": "Leertaste zum Auswählen",
        "status.cancelled": "abgebrochen",
    },
}


def resolve_locale(locale=None):
    """Get the key in MESSAGES for the given locale tag (default config.LOCALE)."""
    tag = (config.LOCALE if locale is None else locale) or ""
    tag = tag.replace("_", "-").lower()
    if tag in MESSAGES:
        return tag
    language = tag.split("-")[0]
    if language in MESSAGES:
        return language
    return FALLBACK_LOCALE


def get_message(key, locale=None):
    """Get the message for the given key, in the given locale.

    Keys missing for a locale fall back to English. An unknown key raises
    KeyError.
    """
    messages = MESSAGES[resolve_locale(locale)]
    try:
        return messages[key]
    except KeyError:
        return MESSAGES[FALLBACK_LOCALE][key]
