"""Ingredient domain entity: one line of a recipe (name, amount, unit)."""
from typing import Optional, Tuple
from uuid import uuid4


class Ingredient:
    def __init__(self, name: str = "", amount: float = 0, unit: str = "", id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.name = name
        self.amount = amount
        self.unit = unit

    def merge_key(self) -> Tuple[str, str]:
        '''Grouping key used when summing grocery lines; no unit conversion.'''
        return (self.name or "").lower(), (self.unit or "").lower()

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        # Older exports used default_quantity for the amount
        if "amount" not in d and "default_quantity" in d:
            d["amount"] = d["default_quantity"]
        allowed = {"id", "name", "amount", "unit"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        # stored or imported lines may carry null text fields
        filtered["name"] = filtered.get("name") or ""
        filtered["unit"] = filtered.get("unit") or ""
        filtered["amount"] = filtered.get("amount") or 0
        return Ingredient(**filtered)

    def to_dict(self):
        '''Converts the Ingredient object to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
        }
