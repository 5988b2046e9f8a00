from enum import Enum


class Language(str, Enum):
    """Locales the assistant can answer in."""

    SPANISH = "es"
    ENGLISH = "en"
