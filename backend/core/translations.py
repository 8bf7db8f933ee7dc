# backend/core/translations.py

"""
Localized text used by the API (status labels, payment labels, and the
messages shown to customers). Every language must define every key; the
tables are checked when this module is imported.
"""

from enum import Enum
from typing import Dict, Mapping


class Language(str, Enum):
    EN = "en"
    FR = "fr"


class TranslationKey(str, Enum):
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    IN_PREPARATION = "in_preparation"
    DELIVERY = "delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    PAID_WITH_POINTS = "paid_with_points"
    PAID_WITH_CASH = "paid_with_cash"
    PICKUP = "pickup"
    SHIPPING = "shipping"
    NOT_ENOUGH_POINTS = "not_enough_points"
    PLEASE_FILL_ALL_FIELDS = "please_fill_all_fields"
    CART_EMPTY = "cart_empty"


TRANSLATIONS: Dict[Language, Dict[TranslationKey, str]] = {
    Language.EN: {
        TranslationKey.AWAITING_CONFIRMATION: "Awaiting Confirmation",
        TranslationKey.CONFIRMED: "Confirmed",
        TranslationKey.IN_PREPARATION: "In Preparation",
        TranslationKey.DELIVERY: "Out for Delivery",
        TranslationKey.DELIVERED: "Delivered",
        TranslationKey.CANCELLED: "Cancelled",
        TranslationKey.PAID_WITH_POINTS: "Paid with Points",
        TranslationKey.PAID_WITH_CASH: "Paid with Cash",
        TranslationKey.PICKUP: "Pickup",
        TranslationKey.SHIPPING: "Shipping",
        TranslationKey.NOT_ENOUGH_POINTS: "Not enough points available",
        TranslationKey.PLEASE_FILL_ALL_FIELDS: "Please fill in all fields",
        TranslationKey.CART_EMPTY: "Your cart is empty",
    },
    Language.FR: {
        TranslationKey.AWAITING_CONFIRMATION: "En Attente de Confirmation",
        TranslationKey.CONFIRMED: "Confirmée",
        TranslationKey.IN_PREPARATION: "En Préparation",
        TranslationKey.DELIVERY: "En Livraison",
        TranslationKey.DELIVERED: "Livrée",
        TranslationKey.CANCELLED: "Annulée",
        TranslationKey.PAID_WITH_POINTS: "Payé avec les Points",
        TranslationKey.PAID_WITH_CASH: "Payé en Espèces",
        TranslationKey.PICKUP: "Retrait",
        TranslationKey.SHIPPING: "Livraison",
        TranslationKey.NOT_ENOUGH_POINTS: "Points insuffisants disponibles",
        TranslationKey.PLEASE_FILL_ALL_FIELDS: "Veuillez remplir tous les champs",
        TranslationKey.CART_EMPTY: "Votre panier est vide",
    },
}


class MissingTranslationError(Exception):
    pass


def validate_translations(
    tables: Mapping[Language, Mapping[TranslationKey, str]]
) -> None:
    """Raise if any language is missing, or misses a key, or has an empty string."""
    for language in Language:
        table = tables.get(language)
        if table is None:
            raise MissingTranslationError(f"No translations for language '{language.value}'")
        missing = [key.value for key in TranslationKey if not table.get(key)]
        if missing:
            raise MissingTranslationError(
                f"Language '{language.value}' is missing keys: {', '.join(missing)}"
            )


def translate(key: TranslationKey, language: Language = Language.EN) -> str:
    return TRANSLATIONS[Language(language)][TranslationKey(key)]


validate_translations(TRANSLATIONS)
