"""Domain models for foods and servings."""

from dataclasses import dataclass
from enum import StrEnum


class FoodUnit(StrEnum):
    """Unit a food's nutrient values refer to."""

    GRAM = "gram"
    MILLILITER = "milliliter"
    ITEM = "item"

    @property
    def symbol(self) -> str:
        """Short label used in generated meal names."""
        return _UNIT_SYMBOLS[self]

    @property
    def per_hundred(self) -> bool:
        """True when values are given per 100 g or 100 ml."""
        return self is not FoodUnit.ITEM


_UNIT_SYMBOLS = {
    FoodUnit.GRAM: "g",
    FoodUnit.MILLILITER: "ml",
    FoodUnit.ITEM: "x",
}


@dataclass(frozen=True)
class FoodRecord:
    """Nutrient values per 100 g/ml, or per single item for ``FoodUnit.ITEM``."""

    name: str
    kcal_per_100: float
    protein_per_100: float
    fat_per_100: float
    carb_per_100: float
    unit: FoodUnit = FoodUnit.GRAM
    brand: str | None = None
    source: str = "manual"


@dataclass(frozen=True)
class Ingredient:
    """A food with the quantity consumed, in the food's unit."""

    food: FoodRecord
    quantity: float


@dataclass(frozen=True)
class FoodLookupResult:
    """Outcome of a food name lookup."""

    term: str
    local_match: FoodRecord | None
    candidates: list[FoodRecord]
