from app.core.database import Base
from .user import User, UserRole
from .session import UserSession
from .meal import Meal
from .meal_plan import MealPlan
from .activity import Activity
from .shopping import ShoppingList, ShoppingItem

__all__ = [
    "Base", "User", "UserRole", "UserSession", "Meal", "MealPlan",
    "Activity", "ShoppingList", "ShoppingItem"
]
