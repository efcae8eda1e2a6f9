from sqlalchemy import Column, String, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.types import JSONType
from app.utils.id_utils import generate_id

class Meal(Base):
    __tablename__ = "meals"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    description = Column(Text)
    cuisine = Column(String)
    ingredients = Column(JSONType, nullable=False, default=list)  # ordered list of strings
    instructions = Column(Text)
    meal_type = Column(String, nullable=False)  # breakfast, lunch, dinner, snack
    servings = Column(Integer, default=4)
    prep_time_minutes = Column(Integer)
    created_by = Column(String, ForeignKey('users.id'), index=True)

    creator = relationship("User")

    def __repr__(self):
        return f"<Meal(id={self.id}, name={self.name})>"
