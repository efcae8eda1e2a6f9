from sqlalchemy.orm import Session
from typing import List, Optional
from app.models.meal import Meal
from app.schemas.meal import MealCreate

class MealService:
    def __init__(self, db: Session):
        self.db = db

    def get_all_meals(self) -> List[Meal]:
        return self.db.query(Meal).order_by(Meal.name).all()

    def get_meal(self, meal_id: str) -> Optional[Meal]:
        return self.db.query(Meal).filter(Meal.id == meal_id).first()

    def get_meals_by_creator(self, user_id: str) -> List[Meal]:
        return self.db.query(Meal).filter(Meal.created_by == user_id).all()

    def create_meal(self, meal_data: MealCreate, created_by: str) -> Meal:
        meal_dict = meal_data.dict()
        meal_dict["meal_type"] = meal_data.meal_type.value
        meal = Meal(**meal_dict, created_by=created_by)

        self.db.add(meal)
        self.db.commit()
        self.db.refresh(meal)
        return meal
