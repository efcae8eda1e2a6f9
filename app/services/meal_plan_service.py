from sqlalchemy.orm import Session, joinedload
from datetime import date, timedelta
from typing import List, Optional
from app.core.exceptions import NotFoundError
from app.models.meal import Meal
from app.models.meal_plan import MealPlan
from app.models.user import User
from app.schemas.meal_plan import MealPlanCreate, MealPlanUpdate

def current_week_dates(today: date = None) -> List[str]:
    """Monday through Sunday of the week containing today, as YYYY-MM-DD strings."""
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    return [(monday + timedelta(days=offset)).isoformat() for offset in range(7)]

class MealPlanService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(MealPlan).options(joinedload(MealPlan.meal))

    def get_meal_plan(self, meal_plan_id: str) -> Optional[MealPlan]:
        return self._query().filter(MealPlan.id == meal_plan_id).first()

    def get_meal_plans_by_user(self, user_id: str) -> List[MealPlan]:
        return self._query().filter(MealPlan.user_id == user_id).order_by(MealPlan.planned_date).all()

    def get_meal_plans_by_date(self, planned_date: str) -> List[MealPlan]:
        return self._query().filter(MealPlan.planned_date == planned_date).all()

    def get_meal_plans_for_dates(self, planned_dates: List[str]) -> List[MealPlan]:
        return self._query().filter(
            MealPlan.planned_date.in_(planned_dates)
        ).order_by(MealPlan.planned_date).all()

    def get_current_week_meal_plans(self) -> List[MealPlan]:
        return self.get_meal_plans_for_dates(current_week_dates())

    def _check_references(self, meal_id: Optional[str] = None, user_id: Optional[str] = None):
        if meal_id is not None and not self.db.query(Meal).filter(Meal.id == meal_id).first():
            raise NotFoundError("Meal not found")
        if user_id is not None and not self.db.query(User).filter(User.id == user_id).first():
            raise NotFoundError("User not found")

    def create_meal_plan(self, meal_plan_data: MealPlanCreate, user_id: str) -> MealPlan:
        meal_plan_dict = meal_plan_data.dict()
        meal_plan_dict["user_id"] = meal_plan_data.user_id or user_id
        meal_plan_dict["meal_type"] = meal_plan_data.meal_type.value
        self._check_references(meal_id=meal_plan_dict["meal_id"], user_id=meal_plan_dict["user_id"])

        meal_plan = MealPlan(**meal_plan_dict)
        self.db.add(meal_plan)
        self.db.commit()
        self.db.refresh(meal_plan)
        return meal_plan

    def update_meal_plan(self, meal_plan_id: str, meal_plan_update: MealPlanUpdate) -> Optional[MealPlan]:
        meal_plan = self.get_meal_plan(meal_plan_id)
        if not meal_plan:
            return None

        update_data = meal_plan_update.dict(exclude_unset=True, exclude_none=True)
        if "meal_type" in update_data:
            update_data["meal_type"] = meal_plan_update.meal_type.value
        if "meal_id" in update_data:
            self._check_references(meal_id=update_data["meal_id"])

        for field, value in update_data.items():
            setattr(meal_plan, field, value)

        self.db.commit()
        self.db.refresh(meal_plan)
        return meal_plan

    def delete_meal_plan(self, meal_plan_id: str) -> bool:
        meal_plan = self.get_meal_plan(meal_plan_id)
        if not meal_plan:
            return False

        self.db.delete(meal_plan)
        self.db.commit()
        return True
