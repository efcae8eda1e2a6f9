"""
Response shapes expected back from the text-generation model.

Anything the model returns is validated against these before it is used;
extra keys are ignored, missing or mistyped ones are rejected.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List

class MealSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    cuisine: Optional[str] = None
    ingredients: List[str] = []
    instructions: Optional[str] = None
    prep_time_minutes: Optional[int] = Field(None, alias="prepTimeMinutes")
    servings: int = 4

class MealSuggestionsResponse(BaseModel):
    meals: List[MealSuggestion]

class SuggestedShoppingItem(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: Optional[str] = None
    category: Optional[str] = None

class ShoppingSuggestionsResponse(BaseModel):
    items: List[SuggestedShoppingItem]
