from datetime import date
import json

import pytest
from openai import OpenAIError
from sqlalchemy.exc import IntegrityError

from app.models.meal import Meal
from app.models.meal_plan import MealPlan
from app.models.shopping import ShoppingList, ShoppingItem
from app.services.auth_service import AuthService
from app.services.shopping_list_service import ShoppingListService, collect_ingredients, dates_in_range


def _meal(member, name, ingredients):
    resp = member.post("/api/meals/", json={
        "name": name, "ingredients": ingredients, "mealType": "dinner"
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def _plan(member, meal_id, planned_date):
    resp = member.post("/api/meal-plans/", json={
        "mealId": meal_id, "plannedDate": planned_date, "mealType": "dinner"
    })
    assert resp.status_code == 201, resp.text


def test_dates_in_range_is_inclusive():
    assert dates_in_range(date(2024, 1, 30), date(2024, 2, 1)) == ["2024-01-30", "2024-01-31", "2024-02-01"]
    assert dates_in_range(date(2024, 1, 2), date(2024, 1, 1)) == []


def test_collect_ingredients_is_exact_match_union():
    meals = [
        Meal(name="A", ingredients=["egg", "milk"]),
        Meal(name="B", ingredients=["milk", "Milk", "flour"]),
        Meal(name="C", ingredients=None),
    ]
    assert collect_ingredients(meals) == ["egg", "milk", "Milk", "flour"]


def test_generate_from_date_range(login_as):
    cook = login_as("cook")
    omelette = _meal(cook, "Omelette", ["egg", "milk"])
    _plan(cook, omelette["id"], "2024-01-03")

    resp = cook.post("/api/shopping-lists/generate", json={
        "startDate": "2024-01-01", "endDate": "2024-01-07"
    })

    assert resp.status_code == 201
    shopping_list = resp.json()
    assert shopping_list["name"] == "Shopping List 2024-01-01 to 2024-01-07"
    assert shopping_list["createdBy"] == cook.user["id"]
    assert [item["name"] for item in shopping_list["items"]] == ["egg", "milk"]
    assert all(item["category"] == "ingredient" for item in shopping_list["items"])
    assert all(item["completed"] is False for item in shopping_list["items"])


def test_generate_from_date_range_deduplicates(login_as):
    cook = login_as("cook")
    omelette = _meal(cook, "Omelette", ["egg", "milk"])
    pancakes = _meal(cook, "Pancakes", ["flour", "egg", "milk"])
    _plan(cook, omelette["id"], "2024-01-02")
    _plan(cook, pancakes["id"], "2024-01-05")
    _plan(cook, omelette["id"], "2024-01-06")
    _plan(cook, pancakes["id"], "2024-01-20")

    resp = cook.post("/api/shopping-lists/generate", json={
        "startDate": "2024-01-01", "endDate": "2024-01-07"
    })

    names = [item["name"] for item in resp.json()["items"]]
    assert sorted(names) == ["egg", "flour", "milk"]


def test_generate_from_empty_range_creates_empty_list(login_as):
    cook = login_as("cook")

    resp = cook.post("/api/shopping-lists/generate", json={
        "startDate": "2024-03-01", "endDate": "2024-03-07"
    })

    assert resp.status_code == 201
    assert resp.json()["items"] == []
    assert len(cook.get("/api/shopping-lists/").json()) == 1


def test_generate_rejects_bad_dates(login_as):
    cook = login_as("cook")
    resp = cook.post("/api/shopping-lists/generate", json={"startDate": "soon", "endDate": "2024-03-07"})
    assert resp.status_code == 400


def test_generate_from_meals_with_ai(login_as, fake_ai):
    cook = login_as("cook")
    curry = _meal(cook, "Curry", ["rice", "chicken"])
    salad = _meal(cook, "Salad", [])
    fake_ai.output_text = "Here you go:\n" + json.dumps({"items": [
        {"name": "Rice", "quantity": "500g", "category": "pantry"},
        {"name": "Lettuce", "quantity": "1 head"},
    ]}) + "\nEnjoy!"

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={
        "mealIds": [curry["id"], salad["id"], curry["id"]]
    })

    assert resp.status_code == 201, resp.text
    shopping_list = resp.json()
    assert shopping_list["name"] == "Shopping List for: Curry, Salad"
    items = shopping_list["items"]
    assert [item["name"] for item in items] == ["Rice", "Lettuce"]
    assert items[0]["category"] == "pantry"
    assert items[1]["category"] == "general"
    assert all(item["relatedMeal"] == "Curry, Salad" for item in items)
    assert all(item["addedBy"] == cook.user["id"] for item in items)

    prompt = fake_ai.prompts[0]
    assert "Curry: rice, chicken" in prompt
    assert "Salad: No ingredients listed" in prompt


def test_generate_from_meals_skips_unknown_ids(login_as, fake_ai):
    cook = login_as("cook")
    curry = _meal(cook, "Curry", ["rice"])
    fake_ai.output_text = '{"items": [{"name": "Rice", "quantity": "1kg", "category": "pantry"}]}'

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": ["missing", curry["id"]]})

    assert resp.status_code == 201
    assert resp.json()["name"] == "Shopping List for: Curry"


def test_generate_from_meals_requires_ids(login_as, fake_ai):
    cook = login_as("cook")

    assert cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": []}).status_code == 400
    assert cook.post("/api/shopping-lists/generate-from-meals", json={}).status_code == 400
    assert fake_ai.prompts == []


def test_generate_from_unknown_meals_creates_nothing(login_as, fake_ai):
    cook = login_as("cook")

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": ["nope", "also-nope"]})

    assert resp.status_code == 404
    assert resp.json() == {"detail": "No meals found"}
    assert fake_ai.prompts == []
    assert cook.get("/api/shopping-lists/").json() == []


def test_unparseable_ai_output_creates_nothing(login_as, fake_ai):
    cook = login_as("cook")
    curry = _meal(cook, "Curry", ["rice"])
    fake_ai.output_text = "Sorry, I can't help with that."

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": [curry["id"]]})

    assert resp.status_code == 500
    assert cook.get("/api/shopping-lists/").json() == []


def test_mistyped_ai_output_creates_nothing(login_as, fake_ai):
    cook = login_as("cook")
    curry = _meal(cook, "Curry", ["rice"])
    fake_ai.output_text = '{"items": [{"name": "Rice", "quantity": 2}]}'

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": [curry["id"]]})

    assert resp.status_code == 500
    assert cook.get("/api/shopping-lists/").json() == []


def test_ai_transport_failure_is_server_error(login_as, fake_ai):
    cook = login_as("cook")
    curry = _meal(cook, "Curry", ["rice"])
    fake_ai.error = OpenAIError("connection reset")

    resp = cook.post("/api/shopping-lists/generate-from-meals", json={"mealIds": [curry["id"]]})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "AI service request failed"}
    assert cook.get("/api/shopping-lists/").json() == []


def test_child_cannot_generate(login_as, fake_ai):
    child = login_as("child")
    resp = child.post("/api/shopping-lists/generate-from-meals", json={"mealIds": ["x"]})
    assert resp.status_code == 403


def test_failed_item_write_leaves_no_list(db):
    user = AuthService(db).register("cook@family.com", "secret1", "Cook", "cook")
    # A null ingredient cannot be stored as an item name
    meal = Meal(name="Broken", ingredients=["egg", None], meal_type="dinner", created_by=user.id)
    db.add(meal)
    db.flush()
    db.add(MealPlan(user_id=user.id, meal_id=meal.id, planned_date="2024-01-03", meal_type="dinner"))
    db.commit()

    with pytest.raises(IntegrityError):
        ShoppingListService(db).generate_from_date_range(date(2024, 1, 1), date(2024, 1, 7), user.id)

    assert db.query(ShoppingList).count() == 0
    assert db.query(ShoppingItem).count() == 0


def test_generated_list_uses_camel_case_fields(login_as):
    cook = login_as("cook")
    omelette = _meal(cook, "Omelette", ["egg"])
    _plan(cook, omelette["id"], "2024-01-03")

    resp = cook.post("/api/shopping-lists/generate", json={"startDate": "2024-01-01", "endDate": "2024-01-07"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["createdBy"] == cook.user["id"]
    assert "created_by" not in body
    assert set(body["items"][0]) >= {"listId", "addedBy", "relatedMeal"}
