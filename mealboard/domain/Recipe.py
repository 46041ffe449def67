"""Recipe domain entity: name, ingredients, optional nutrition and display details."""
from typing import Any, Dict, List, Optional
from uuid import uuid4

from mealboard.domain.Ingredient import Ingredient
from mealboard.utilities.constants import MACRO_KEYS, MACRO_SYNONYMS

# camelCase keys sent by the web client -> attribute names
_FIELD_SYNONYMS = {
    "prepTime": "prep_time",
    "calories_per_serving": "calories",
    "caloriesPerServing": "calories",
    "steps": "instructions",
}

EDITABLE_FIELDS = (
    "name", "ingredients", "calories", "macros", "tags", "prep_time",
    "servings", "description", "image", "instructions", "color",
)


def normalize_macros(macros: Optional[Dict[str, Any]]) -> Optional[Dict[str, float]]:
    """Return {protein, carbs, fats} with synonyms folded in, or None when absent."""
    if not isinstance(macros, dict):
        return None
    m = dict(macros)
    for alias, key in MACRO_SYNONYMS.items():
        if alias in m and key not in m:
            m[key] = m[alias]
    return {key: m.get(key) or 0 for key in MACRO_KEYS}


def _coerce_ingredients(items) -> List[Ingredient]:
    return [i if isinstance(i, Ingredient) else Ingredient.from_dict(i) for i in (items or [])]


def _canonical(fields: Dict[str, Any]) -> Dict[str, Any]:
    d = {}
    for k, v in fields.items():
        d[_FIELD_SYNONYMS.get(k, k)] = v
    return d


class Recipe:
    def __init__(self, name: str = "", ingredients: Optional[List[Ingredient]] = None,
                 calories: Optional[float] = None, macros: Optional[Dict[str, float]] = None,
                 tags: Optional[List[str]] = None, prep_time: Optional[str] = None,
                 servings: Optional[int] = None, description: Optional[str] = None,
                 image: Optional[str] = None, instructions: Optional[List[str]] = None,
                 color: Optional[str] = None, id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.name = name
        self.ingredients = _coerce_ingredients(ingredients)
        self.calories = calories
        self.macros = normalize_macros(macros)
        self.tags = tags[:] if tags else []
        self.prep_time = prep_time
        self.servings = servings
        self.description = description
        self.image = image
        self.instructions = instructions[:] if instructions else []
        self.color = color

    def __str__(self) -> str:
        kcal = f"{self.calories} kcal" if self.calories is not None else "No calories"
        return f"{self.name} - {len(self.ingredients)} ingredients - {kcal} - Tags: {', '.join(self.tags)}"

    __repr__ = __str__

    def get_protein(self): return (self.macros or {}).get("protein", 0)
    def get_carbs(self): return (self.macros or {}).get("carbs", 0)
    def get_fats(self): return (self.macros or {}).get("fats", 0)

    def apply_update(self, fields: Dict[str, Any]) -> None:
        '''Merge a partial update into this recipe. The id never changes; unknown keys are ignored.'''
        for key, value in _canonical(fields).items():
            if key not in EDITABLE_FIELDS:
                continue
            if key == "ingredients":
                value = _coerce_ingredients(value)
            elif key == "macros":
                value = normalize_macros(value)
            elif key in ("tags", "instructions"):
                value = list(value or [])
            setattr(self, key, value)

    @staticmethod
    def from_dict(data):
        d = _canonical(dict(data))
        d["name"] = d.get("name") or ""
        allowed = set(EDITABLE_FIELDS) | {"id"}
        return Recipe(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "calories": self.calories,
            "macros": dict(self.macros) if self.macros is not None else None,
            "tags": self.tags,
            "prep_time": self.prep_time,
            "servings": self.servings,
            "description": self.description,
            "image": self.image,
            "instructions": self.instructions,
            "color": self.color,
        }
