"""Grocery list line: one merged (name, unit) bucket built from the plan."""
from typing import List, Optional


class AggregatedIngredient:
    def __init__(self, name: str, unit: str, amount: float = 0, recipes: Optional[List[str]] = None):
        # display casing comes from the first occurrence
        self.name = name
        self.unit = unit
        self.amount = amount
        self.recipes = recipes[:] if recipes else []

    def add(self, amount: float, recipe_name: str):
        self.amount += amount
        if recipe_name not in self.recipes:
            self.recipes.append(recipe_name)

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit} ({', '.join(self.recipes)})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, AggregatedIngredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self):
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "recipes": list(self.recipes),
        }
