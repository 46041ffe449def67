"""
Input validation schemas using Pydantic. Forms and API bodies are checked here;
the stores themselves accept whatever they are given.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Literal

MealTypeField = Literal["breakfast", "lunch", "dinner"]


class IngredientInput(BaseModel):
    """Schema for one ingredient line of a recipe form."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    unit: str = Field("", max_length=20)

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class MacrosInput(BaseModel):
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fats: float = Field(0, ge=0)


class RecipeInput(BaseModel):
    """Schema for creating a recipe."""
    name: str = Field(..., min_length=1, max_length=200)
    ingredients: List[IngredientInput] = Field(default_factory=list)
    calories: Optional[float] = Field(None, ge=0)
    macros: Optional[MacrosInput] = None
    tags: List[str] = Field(default_factory=list)
    prep_time: Optional[str] = None
    servings: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    image: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)
    color: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        """Ensure tags are non-empty strings."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v):
        """Filter out empty steps."""
        return [step.strip() for step in v if step and step.strip()]


class RecipeUpdateInput(RecipeInput):
    """Partial update: every field optional, only the ones sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    ingredients: Optional[List[IngredientInput]] = None
    tags: Optional[List[str]] = None
    instructions: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        # fields left out never reach the validator; an explicit null does
        if v is None or not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return [tag.strip() for tag in v if tag and tag.strip()]

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v):
        if v is None:
            return v
        return [step.strip() for step in v if step and step.strip()]

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class PlanEntryInput(BaseModel):
    """Schema for placing a recipe directly (without a drag gesture)."""
    id: Optional[str] = None
    recipe_id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    meal_type: MealTypeField


class MoveEntryInput(BaseModel):
    date: str = Field(..., min_length=1)
    meal_type: MealTypeField


class DragStartInput(BaseModel):
    """Either a library recipe id or a plan entry id is the drag subject."""
    recipe_id: Optional[str] = None
    entry_id: Optional[str] = None

    @field_validator('entry_id')
    @classmethod
    def one_subject(cls, v, info):
        if v and info.data.get('recipe_id'):
            raise ValueError('Send either recipe_id or entry_id, not both')
        return v


class DropCandidate(BaseModel):
    id: Optional[str] = None
    date: Optional[str] = None
    meal_type: Optional[str] = None


class DragTargetInput(BaseModel):
    """Everything the pointer is over; an empty list means no target."""
    targets: List[DropCandidate] = Field(default_factory=list)
