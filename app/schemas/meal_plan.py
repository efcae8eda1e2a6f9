from typing import Optional
from app.schemas.base import CamelModel
from app.schemas.meal import MealType, Meal

class MealPlanBase(CamelModel):
    meal_id: str
    planned_date: str  # YYYY-MM-DD
    meal_type: MealType
    completed: bool = False

class MealPlanCreate(MealPlanBase):
    # Defaults to the requesting user when omitted
    user_id: Optional[str] = None

class MealPlanUpdate(CamelModel):
    meal_id: Optional[str] = None
    planned_date: Optional[str] = None
    meal_type: Optional[MealType] = None
    completed: Optional[bool] = None

class MealPlan(MealPlanBase):
    id: str
    user_id: str

    class Config:
        from_attributes = True

# Meal plan enriched with the planned meal for calendar display
class MealPlanWithMeal(MealPlan):
    meal: Optional[Meal] = None

    class Config:
        from_attributes = True
