# backend/modules/menu/utils/names.py

"""
Bilingual menu names.

Every bread and topping stores its name as a single string
``"<English>, <French>"``.
"""

from typing import Tuple

from core.translations import Language


def parse_bilingual_name(name: str) -> Tuple[str, str]:
    """
    Split a stored name into ``(name_en, name_fr)``.

    Names that do not split into exactly two comma separated parts are used
    as-is for both languages.
    """
    parts = [part.strip() for part in name.split(",")]
    if len(parts) == 2:
        return parts[0], parts[1]
    return name, name


def create_bilingual_name(name_en: str, name_fr: str) -> str:
    return f"{name_en.strip()}, {name_fr.strip()}"


def get_localized_name(name: str, language: Language = Language.EN) -> str:
    name_en, name_fr = parse_bilingual_name(name)
    return name_fr if Language(language) == Language.FR else name_en


def is_valid_bilingual_name(name: str) -> bool:
    parts = [part.strip() for part in name.split(",")]
    return len(parts) == 2 and all(parts)
