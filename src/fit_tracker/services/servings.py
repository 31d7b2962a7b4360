"""Serving scaling and meal building."""

from fit_tracker.domain.diary import NutrientTotals
from fit_tracker.domain.foods import FoodRecord, FoodUnit, Ingredient


def scale_serving(food: FoodRecord, quantity: float) -> NutrientTotals:
    """Convert a food's reference values into totals for ``quantity``.

    Gram and milliliter foods carry values per 100 units; item foods carry
    values per single item. Non-positive quantities give zero totals.
    """
    if quantity <= 0:
        return NutrientTotals()
    return NutrientTotals(
        kcal=food.kcal_per_100,
        protein=food.protein_per_100,
        fat=food.fat_per_100,
        carb=food.carb_per_100,
    ).scaled(serving_multiplier(food.unit, quantity))


def serving_multiplier(unit: FoodUnit, quantity: float) -> float:
    if unit.per_hundred:
        return quantity / 100
    return quantity


def meal_totals(ingredients: list[Ingredient]) -> NutrientTotals:
    """Sum scaled totals across all ingredients of a meal."""
    total = NutrientTotals()
    for ingredient in ingredients:
        total = total + scale_serving(ingredient.food, ingredient.quantity)
    return total


def default_meal_name(ingredients: list[Ingredient]) -> str:
    """Describe a meal by its ingredients, e.g. ``banan (120g), jajko (x2)``."""
    return ", ".join(_describe(ingredient) for ingredient in ingredients)


def _describe(ingredient: Ingredient) -> str:
    unit = ingredient.food.unit
    quantity = f"{ingredient.quantity:g}"
    if unit.per_hundred:
        return f"{ingredient.food.name} ({quantity}{unit.symbol})"
    return f"{ingredient.food.name} (x{quantity})"
