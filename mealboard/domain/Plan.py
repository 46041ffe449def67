"""Plan domain entities: a PlanEntry places one recipe into a (date, meal_type) slot."""
from typing import NamedTuple, Optional
from uuid import uuid4


class Slot(NamedTuple):
    date: str
    meal_type: str


class PlanEntry:
    def __init__(self, recipe_id: str, date: str, meal_type: str, id: Optional[str] = None):
        self.id = id or str(uuid4())
        # weak reference: the recipe may be deleted while the entry survives
        self.recipe_id = recipe_id
        self.date = date
        self.meal_type = meal_type

    @property
    def slot(self) -> Slot:
        return Slot(self.date, self.meal_type)

    def __str__(self) -> str:
        return f"{self.date}/{self.meal_type}: {self.recipe_id} ({self.id})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return PlanEntry(
            recipe_id=d.get("recipe_id", d.get("recipeId", "")),
            date=d.get("date", ""),
            meal_type=d.get("meal_type", d.get("mealType", "")),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "date": self.date,
            "meal_type": self.meal_type,
        }
