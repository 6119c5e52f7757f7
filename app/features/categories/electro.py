"""Organisation des sous-catégories de la catégorie principale "Electromenagers"."""

from typing import Dict, List, Optional, Sequence, TypeVar

ELECTRO_SITE_CATEGORY = "Electromenagers"
GROS_ELECTRO = "Gros électroménager"
PETIT_ELECTRO = "Petit électroménager"

GROS_ELECTRO_SUBCATEGORIES = (
    "Cave à vin",
    "Chauffe-eau",
    "Climatisation",
    "Congélateurs",
    "Cuisine",
    "Fours",
    "Hottes",
    "Lave-linge",
    "Lave-linge séchant",
    "Lave-vaisselle",
    "Micro-ondes",
    "Plaques de cuisson",
    "Réfrigérateurs",
    "Sèche-linge",
)

PETIT_ELECTRO_SUBCATEGORIES = (
    "Aspirateurs",
    "Autocuiseurs",
    "Blenders",
    "Bouilloires",
    "Cafetières",
    "Centrifugeuses",
    "Fers à repasser",
    "Friteuses",
    "Grille-pain",
    "Machines à café",
    "Mixeurs",
    "Planchas",
    "Robots de cuisine",
    "Sèche-cheveux",
)

ELECTRO_TYPES = ("gros", "petit")

T = TypeVar("T")


def _find(categories: Sequence[T], libelle: str) -> Optional[T]:
    return next((c for c in categories if c.libelle == libelle), None)


def organize(categories: Sequence[T]) -> Dict[str, Dict[str, object]]:
    """
    Regroupe les catégories en gros / petit électroménager :
    {"gros_electromenager": {"category": ..., "subcategories": [...]}, "petit_electromenager": {...}}
    """
    return {
        "gros_electromenager": {
            "category": _find(categories, GROS_ELECTRO),
            "subcategories": [c for c in categories if c.libelle in GROS_ELECTRO_SUBCATEGORIES],
        },
        "petit_electromenager": {
            "category": _find(categories, PETIT_ELECTRO),
            "subcategories": [c for c in categories if c.libelle in PETIT_ELECTRO_SUBCATEGORIES],
        },
    }


def split_by_type(categories: Sequence[T]) -> Dict[str, List[T]]:
    """Listes à plat : sous-catégories + catégorie de regroupement elle-même."""
    return {
        "petits_electromenagers": [
            c for c in categories if c.libelle in PETIT_ELECTRO_SUBCATEGORIES or c.libelle == PETIT_ELECTRO
        ],
        "gros_electromenagers": [
            c for c in categories if c.libelle in GROS_ELECTRO_SUBCATEGORIES or c.libelle == GROS_ELECTRO
        ],
    }
