from sqlalchemy import Column, String, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.utils.id_utils import generate_id

class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    meal_id = Column(String, ForeignKey('meals.id'), nullable=False, index=True)
    planned_date = Column(String, nullable=False, index=True)  # YYYY-MM-DD
    meal_type = Column(String, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    meal = relationship("Meal")
    user = relationship("User")
