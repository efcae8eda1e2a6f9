import json
import logging
from typing import Any, List, Optional, Sequence, Type, TypeVar

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError as SchemaValidationError

from app.core.config import settings
from app.core.exceptions import UpstreamError
from app.models.meal import Meal
from app.schemas.ai import (
    MealSuggestion,
    MealSuggestionsResponse,
    SuggestedShoppingItem,
    ShoppingSuggestionsResponse,
)

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)

MEAL_SUGGESTIONS_PROMPT = """Generate 5 {meal_type} meal suggestions with the following preferences:
- Cuisines: {cuisines}
- Dietary restrictions: {dietary}

For each meal, provide:
- name: string
- description: string (brief)
- cuisine: string
- ingredients: array of strings
- instructions: string (brief cooking instructions)
- prepTimeMinutes: number
- servings: number (default 4)

Return ONLY valid JSON in this exact format:
{{
  "meals": [
    {{
      "name": "Meal Name",
      "description": "Brief description",
      "cuisine": "Cuisine Type",
      "ingredients": ["ingredient1", "ingredient2"],
      "instructions": "Brief cooking instructions",
      "prepTimeMinutes": 30,
      "servings": 4
    }}
  ]
}}"""

SHOPPING_LIST_PROMPT = """Generate a comprehensive shopping list for these meals:
{meal_details}

Please provide:
1. All ingredients needed with appropriate quantities for {meal_count} meals
2. Group similar items together
3. Include basic pantry items that might be needed
4. Consider standard serving sizes

Return ONLY valid JSON in this format, with every value a string:
{{
  "items": [
    {{
      "name": "item name",
      "quantity": "amount needed",
      "category": "produce/dairy/meat/pantry/etc"
    }}
  ]
}}"""


def extract_json_object(text: str) -> Any:
    """
    Parse the JSON object embedded in free-form model output.

    Takes the span from the first '{' to the last '}' and decodes it.

    Raises:
        UpstreamError: If there is no such span or it is not valid JSON
    """
    if not text:
        raise UpstreamError("AI service returned an empty response")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise UpstreamError("No valid JSON found in AI response")

    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise UpstreamError(f"AI response contained malformed JSON: {e.msg}")


def build_meal_details(meals: Sequence[Meal]) -> str:
    lines = []
    for meal in meals:
        ingredients = ", ".join(meal.ingredients or []) or "No ingredients listed"
        lines.append(f"{meal.name}: {ingredients}")
    return "\n".join(lines)


class AISuggestionService:
    """Meal and shopping suggestions from an OpenAI text model."""

    def __init__(self, client: Optional[OpenAI] = None, model: str = None):
        self._client = client
        self.model = model or settings.OPENAI_MODEL

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                logger.warning("OPENAI_API_KEY not set, cannot call AI service")
                raise UpstreamError("AI service is not configured")
            self._client = OpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
                max_retries=0
            )
        return self._client

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.responses.create(model=self.model, input=prompt)
        except OpenAIError as e:
            logger.error(f"AI service request failed: {str(e)}")
            raise UpstreamError("AI service request failed")

        return (response.output_text or "").strip()

    def _request(self, prompt: str, response_model: Type[ResponseModel]) -> ResponseModel:
        text = self._complete(prompt)
        payload = extract_json_object(text)

        try:
            return response_model.model_validate(payload)
        except SchemaValidationError as e:
            logger.warning(f"AI response did not match {response_model.__name__}: {e.error_count()} errors")
            raise UpstreamError("AI response did not match the expected format")

    def suggest_meals(
        self,
        cuisines: Sequence[str] = (),
        dietary: Sequence[str] = (),
        meal_type: str = "dinner"
    ) -> List[MealSuggestion]:
        prompt = MEAL_SUGGESTIONS_PROMPT.format(
            meal_type=meal_type,
            cuisines=", ".join(cuisines) or "any",
            dietary=", ".join(dietary) or "none"
        )
        return self._request(prompt, MealSuggestionsResponse).meals

    def shopping_items_for_meals(self, meals: Sequence[Meal]) -> List[SuggestedShoppingItem]:
        prompt = SHOPPING_LIST_PROMPT.format(
            meal_details=build_meal_details(meals),
            meal_count=len(meals)
        )
        return self._request(prompt, ShoppingSuggestionsResponse).items


def get_ai_service() -> AISuggestionService:
    """FastAPI dependency; tests override it with a fake client."""
    return AISuggestionService()
