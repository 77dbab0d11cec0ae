"""Static nominee catalog — read-only category/nominee lookup.

The catalog is versioned data, not part of the mutable model: setup copies the
selected entries into a group's own Category/Nominee rows.
"""
from dataclasses import dataclass
from typing import Optional

from app.config import settings


@dataclass(frozen=True)
class CatalogCategory:
    key: str
    name: str
    nominees: tuple[str, ...]
    sort_order: Optional[int] = None


@dataclass(frozen=True)
class Catalog:
    edition: str
    categories: tuple[CatalogCategory, ...]

    def get(self, key: str) -> Optional[CatalogCategory]:
        for category in self.categories:
            if category.key == key:
                return category
        return None

    def by_name(self, name: str) -> Optional[CatalogCategory]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def ordered(self) -> list[CatalogCategory]:
        """Categories by display-order hint; unhinted entries keep catalog position."""
        return sorted(
            self.categories,
            key=lambda c: c.sort_order if c.sort_order is not None else float("inf"),
        )


_PLACEHOLDER_NOMINEES = ("Nominee A", "Nominee B", "Nominee C", "Nominee D", "Nominee E")

OSCARS_2026 = Catalog(
    edition="oscars_2026",
    categories=(
        CatalogCategory("best_picture", "Best Picture", _PLACEHOLDER_NOMINEES, sort_order=1),
        CatalogCategory("best_director", "Best Director", _PLACEHOLDER_NOMINEES, sort_order=2),
        CatalogCategory("best_actor", "Best Actor", _PLACEHOLDER_NOMINEES, sort_order=3),
        CatalogCategory("best_actress", "Best Actress", _PLACEHOLDER_NOMINEES, sort_order=4),
        CatalogCategory("best_supporting_actor", "Best Supporting Actor", _PLACEHOLDER_NOMINEES, sort_order=5),
        CatalogCategory("best_supporting_actress", "Best Supporting Actress", _PLACEHOLDER_NOMINEES, sort_order=6),
        CatalogCategory("best_original_screenplay", "Best Original Screenplay", _PLACEHOLDER_NOMINEES, sort_order=7),
        CatalogCategory("best_adapted_screenplay", "Best Adapted Screenplay", _PLACEHOLDER_NOMINEES, sort_order=8),
        CatalogCategory("best_animated_feature", "Best Animated Feature", _PLACEHOLDER_NOMINEES, sort_order=9),
        CatalogCategory("best_international_feature", "Best International Feature", _PLACEHOLDER_NOMINEES, sort_order=10),
        CatalogCategory("best_original_song", "Best Original Song", _PLACEHOLDER_NOMINEES, sort_order=11),
    ),
)

CATALOGS: dict[str, Catalog] = {OSCARS_2026.edition: OSCARS_2026}


def get_catalog() -> Catalog:
    """FastAPI dependency: the catalog edition selected in settings."""
    return CATALOGS[settings.CATALOG_EDITION]
