from pydantic import Field
from app.schemas.base import CamelModel
from typing import Optional, List
from datetime import date

class ShoppingItemBase(CamelModel):
    name: str = Field(..., min_length=1)
    quantity: Optional[str] = None
    category: Optional[str] = None
    completed: bool = False
    related_meal: Optional[str] = None

class ShoppingItemCreate(ShoppingItemBase):
    list_id: str

class ShoppingItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[str] = None
    category: Optional[str] = None
    completed: Optional[bool] = None
    related_meal: Optional[str] = None

class ShoppingItem(ShoppingItemBase):
    id: str
    list_id: str
    added_by: Optional[str] = None

    class Config:
        from_attributes = True

class ShoppingListBase(CamelModel):
    name: str = Field(..., min_length=1)
    completed: bool = False

class ShoppingListCreate(ShoppingListBase):
    pass

class ShoppingListUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    completed: Optional[bool] = None

class ShoppingList(ShoppingListBase):
    id: str
    created_by: Optional[str] = None
    items: List[ShoppingItem] = []

    class Config:
        from_attributes = True

class GenerateFromDateRange(CamelModel):
    start_date: date
    end_date: date

class GenerateFromMeals(CamelModel):
    meal_ids: List[str] = Field(..., min_length=1)
