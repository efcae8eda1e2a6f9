from pydantic import Field
from app.schemas.base import CamelModel
from typing import Optional, List
from enum import Enum

class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"

class MealBase(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    cuisine: Optional[str] = None
    ingredients: List[str] = []
    instructions: Optional[str] = None
    meal_type: MealType
    servings: Optional[int] = 4
    prep_time_minutes: Optional[int] = None

class MealCreate(MealBase):
    pass

class Meal(MealBase):
    id: str
    created_by: Optional[str] = None

    class Config:
        from_attributes = True

class MealSuggestionRequest(CamelModel):
    cuisines: List[str] = []
    dietary: List[str] = []
    meal_type: MealType = MealType.dinner
