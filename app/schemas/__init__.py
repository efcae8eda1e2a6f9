from .user import User, UserSummary, UserCreate, UserUpdate, LoginRequest, RegisterRequest
from .meal import Meal, MealCreate, MealType, MealSuggestionRequest
from .meal_plan import MealPlan, MealPlanCreate, MealPlanUpdate, MealPlanWithMeal
from .activity import Activity, ActivityCreate, ActivityUpdate, ActivityWithUsers
from .shopping import (
    ShoppingList, ShoppingListCreate, ShoppingListUpdate,
    ShoppingItem, ShoppingItemCreate, ShoppingItemUpdate,
    GenerateFromDateRange, GenerateFromMeals
)

__all__ = [
    "User", "UserSummary", "UserCreate", "UserUpdate", "LoginRequest", "RegisterRequest",
    "Meal", "MealCreate", "MealType", "MealSuggestionRequest",
    "MealPlan", "MealPlanCreate", "MealPlanUpdate", "MealPlanWithMeal",
    "Activity", "ActivityCreate", "ActivityUpdate", "ActivityWithUsers",
    "ShoppingList", "ShoppingListCreate", "ShoppingListUpdate",
    "ShoppingItem", "ShoppingItemCreate", "ShoppingItemUpdate",
    "GenerateFromDateRange", "GenerateFromMeals"
]
