from sqlalchemy import Column, String, Integer, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.utils.id_utils import generate_id

class ShoppingList(Base):
    __tablename__ = "shopping_lists"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    created_by = Column(String, ForeignKey('users.id'), index=True)
    completed = Column(Boolean, default=False, nullable=False)

    # Items are owned by the list and go away with it
    items = relationship(
        "ShoppingItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingItem.position"
    )

    def __repr__(self):
        return f"<ShoppingList(id={self.id}, name={self.name})>"

class ShoppingItem(Base):
    __tablename__ = "shopping_items"

    id = Column(String, primary_key=True, default=generate_id)
    list_id = Column(String, ForeignKey('shopping_lists.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String, nullable=False)
    quantity = Column(String)
    category = Column(String)
    completed = Column(Boolean, default=False, nullable=False)
    added_by = Column(String, ForeignKey('users.id'))
    related_meal = Column(String)
    position = Column(Integer, nullable=False, default=0)

    shopping_list = relationship("ShoppingList", back_populates="items")
