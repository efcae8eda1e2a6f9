import pytest

from app.core.exceptions import UpstreamError
from app.services.ai_service import AISuggestionService, extract_json_object

from .conftest import FakeOpenAI

MEALS_RESPONSE = """```json
{
  "meals": [
    {
      "name": "Veggie Tacos",
      "description": "Quick weeknight tacos",
      "cuisine": "Mexican",
      "ingredients": ["tortillas", "black beans"],
      "instructions": "Warm and fill.",
      "prepTimeMinutes": 20,
      "servings": 4
    }
  ]
}
```"""


def test_extract_json_object_ignores_surrounding_prose():
    assert extract_json_object('Sure! {"a": {"b": 1}} Hope that helps') == {"a": {"b": 1}}


@pytest.mark.parametrize("text", ["", "no json here", "} backwards {", '{"a": 1,}'])
def test_extract_json_object_rejects_unusable_text(text):
    with pytest.raises(UpstreamError):
        extract_json_object(text)


def test_suggest_meals_parses_response():
    fake = FakeOpenAI(MEALS_RESPONSE)
    service = AISuggestionService(client=fake, model="test-model")

    meals = service.suggest_meals(["Mexican"], ["vegetarian"], "lunch")

    assert len(meals) == 1
    assert meals[0].name == "Veggie Tacos"
    assert meals[0].prep_time_minutes == 20
    assert "5 lunch meal suggestions" in fake.prompts[0]
    assert "Cuisines: Mexican" in fake.prompts[0]
    assert "Dietary restrictions: vegetarian" in fake.prompts[0]


def test_suggest_meals_defaults_in_prompt():
    fake = FakeOpenAI('{"meals": []}')
    assert AISuggestionService(client=fake).suggest_meals() == []
    assert "Cuisines: any" in fake.prompts[0]
    assert "Dietary restrictions: none" in fake.prompts[0]


def test_schema_mismatch_is_upstream_error():
    service = AISuggestionService(client=FakeOpenAI('{"dishes": []}'))
    with pytest.raises(UpstreamError):
        service.suggest_meals()


def test_missing_api_key_is_upstream_error():
    with pytest.raises(UpstreamError):
        AISuggestionService().suggest_meals()


def test_suggestions_endpoint(login_as, fake_ai):
    cook = login_as("cook")
    fake_ai.output_text = MEALS_RESPONSE

    resp = cook.post("/api/meals/suggestions", json={"cuisines": ["Mexican"], "mealType": "lunch"})

    assert resp.status_code == 200
    assert resp.json()[0]["name"] == "Veggie Tacos"
    assert "lunch" in fake_ai.prompts[0]


def test_suggestions_endpoint_without_ai_configured(login_as):
    cook = login_as("cook")
    resp = cook.post("/api/meals/suggestions", json={})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "AI service is not configured"}
