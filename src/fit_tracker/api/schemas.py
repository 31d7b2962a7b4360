"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from fit_tracker.domain.diary import NutrientTotals
from fit_tracker.domain.foods import FoodRecord, FoodUnit, Ingredient
from fit_tracker.domain.profile import ActivityLevel, BodyMetrics, Sex


class FoodPayload(BaseModel):
    """Food values per 100 g/ml, or per item when ``unit`` is ``item``."""

    name: str = Field(min_length=1)
    kcal_per_100: float = Field(ge=0)
    protein_per_100: float = Field(default=0.0, ge=0)
    fat_per_100: float = Field(default=0.0, ge=0)
    carb_per_100: float = Field(default=0.0, ge=0)
    unit: FoodUnit = FoodUnit.GRAM
    brand: str | None = None

    def to_domain(self) -> FoodRecord:
        return FoodRecord(
            name=self.name,
            kcal_per_100=self.kcal_per_100,
            protein_per_100=self.protein_per_100,
            fat_per_100=self.fat_per_100,
            carb_per_100=self.carb_per_100,
            unit=self.unit,
            brand=self.brand,
        )


class IngredientPayload(BaseModel):
    food: FoodPayload
    quantity: float = Field(gt=0)

    def to_domain(self) -> Ingredient:
        return Ingredient(food=self.food.to_domain(), quantity=self.quantity)


class MealCreateRequest(BaseModel):
    name: str | None = None
    ingredients: list[IngredientPayload]
    save_as_favorite: bool = False


class TotalsPayload(BaseModel):
    """Already-scaled nutrient totals with a display name."""

    name: str = Field(min_length=1)
    kcal: float = Field(ge=0)
    protein: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    carb: float = Field(default=0.0, ge=0)

    def to_totals(self) -> NutrientTotals:
        return NutrientTotals(
            kcal=self.kcal, protein=self.protein, fat=self.fat, carb=self.carb
        )


class ProfileUpdateRequest(BaseModel):
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    age_years: int = Field(gt=0)
    sex: Sex
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY

    def to_metrics(self) -> BodyMetrics:
        return BodyMetrics(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age_years=self.age_years,
            sex=self.sex,
            activity_level=self.activity_level,
        )


class LookupMessage(BaseModel):
    """As-you-type lookup message received over the websocket."""

    field_id: str = "ingredient"
    term: str
