from sqlalchemy.orm import Session, selectinload
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence
import logging

from app.core.exceptions import NotFoundError, ValidationError
from app.models.meal import Meal
from app.models.shopping import ShoppingList, ShoppingItem
from app.schemas.shopping import (
    ShoppingListCreate,
    ShoppingListUpdate,
    ShoppingItemCreate,
    ShoppingItemUpdate,
)
from app.services.ai_service import AISuggestionService
from app.services.meal_plan_service import MealPlanService

logger = logging.getLogger(__name__)

GENERATED_ITEM_CATEGORY = "ingredient"
DEFAULT_AI_ITEM_CATEGORY = "general"


def dates_in_range(start_date: date, end_date: date) -> List[str]:
    """Every calendar date from start to end inclusive, as YYYY-MM-DD strings."""
    days = (end_date - start_date).days
    return [(start_date + timedelta(days=offset)).isoformat() for offset in range(days + 1)]


def collect_ingredients(meals: Sequence[Meal]) -> List[str]:
    """Exact-match union of ingredient strings, in first-seen order."""
    unique: Dict[str, None] = {}
    for meal in meals:
        for ingredient in meal.ingredients or []:
            unique.setdefault(ingredient, None)
    return list(unique)


class ShoppingListService:
    def __init__(self, db: Session):
        self.db = db

    # Lists

    def get_all_lists(self) -> List[ShoppingList]:
        return self.db.query(ShoppingList).options(
            selectinload(ShoppingList.items)
        ).all()

    def get_list(self, list_id: str) -> Optional[ShoppingList]:
        return self.db.query(ShoppingList).options(
            selectinload(ShoppingList.items)
        ).filter(ShoppingList.id == list_id).first()

    def create_list(self, list_data: ShoppingListCreate, created_by: str) -> ShoppingList:
        shopping_list = ShoppingList(**list_data.dict(), created_by=created_by)
        self.db.add(shopping_list)
        self.db.commit()
        self.db.refresh(shopping_list)
        return shopping_list

    def update_list(self, list_id: str, list_update: ShoppingListUpdate) -> Optional[ShoppingList]:
        shopping_list = self.get_list(list_id)
        if not shopping_list:
            return None

        update_data = list_update.dict(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(shopping_list, field, value)

        self.db.commit()
        self.db.refresh(shopping_list)
        return shopping_list

    def delete_list(self, list_id: str) -> bool:
        """Delete a list together with all of its items."""
        shopping_list = self.get_list(list_id)
        if not shopping_list:
            return False

        self.db.delete(shopping_list)
        self.db.commit()
        return True

    # Items

    def get_item(self, item_id: str) -> Optional[ShoppingItem]:
        return self.db.query(ShoppingItem).filter(ShoppingItem.id == item_id).first()

    def create_item(self, item_data: ShoppingItemCreate, added_by: str) -> ShoppingItem:
        shopping_list = self.get_list(item_data.list_id)
        if not shopping_list:
            raise NotFoundError("Shopping list not found")

        item = ShoppingItem(
            **item_data.dict(),
            added_by=added_by,
            position=len(shopping_list.items)
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_item(self, item_id: str, item_update: ShoppingItemUpdate) -> Optional[ShoppingItem]:
        item = self.get_item(item_id)
        if not item:
            return None

        update_data = item_update.dict(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(item, field, value)

        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item_id: str) -> bool:
        item = self.get_item(item_id)
        if not item:
            return False

        self.db.delete(item)
        self.db.commit()
        return True

    # Generation

    def _save_generated_list(self, name: str, created_by: str, items: List[dict]) -> ShoppingList:
        """Write a list and its items in a single transaction."""
        try:
            shopping_list = ShoppingList(name=name, created_by=created_by)
            self.db.add(shopping_list)
            self.db.flush()

            for position, item_data in enumerate(items):
                self.db.add(ShoppingItem(
                    **item_data,
                    list_id=shopping_list.id,
                    added_by=created_by,
                    completed=False,
                    position=position
                ))

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(shopping_list)
        return shopping_list

    def generate_from_date_range(self, start_date: date, end_date: date, created_by: str) -> ShoppingList:
        """
        Build a shopping list from every meal planned between two dates.

        Ingredients are deduplicated by exact string match. A range with no
        planned meals (or an empty range) still produces a list, with no items.
        """
        planned_dates = dates_in_range(start_date, end_date)

        meal_plans = []
        if planned_dates:
            meal_plans = MealPlanService(self.db).get_meal_plans_for_dates(planned_dates)

        # Each planned meal once, in date order
        meals = list({plan.meal.id: plan.meal for plan in meal_plans if plan.meal}.values())

        ingredients = collect_ingredients(meals)
        logger.info(
            f"Generating shopping list for {start_date}..{end_date}: "
            f"{len(meal_plans)} meal plans, {len(ingredients)} unique ingredients"
        )

        return self._save_generated_list(
            name=f"Shopping List {start_date.isoformat()} to {end_date.isoformat()}",
            created_by=created_by,
            items=[
                {"name": ingredient, "category": GENERATED_ITEM_CATEGORY}
                for ingredient in ingredients
            ]
        )

    def generate_from_meals(
        self,
        meal_ids: Sequence[str],
        created_by: str,
        ai_service: AISuggestionService
    ) -> ShoppingList:
        """
        Build a shopping list for selected meals with quantities and categories
        suggested by the AI service. Unknown meal ids are skipped.

        Raises:
            ValidationError: If no meal ids were given
            NotFoundError: If none of the ids match a meal
            UpstreamError: If the AI call fails or returns an unusable response
        """
        if not meal_ids:
            raise ValidationError("Meal IDs are required")

        found = {
            meal.id: meal
            for meal in self.db.query(Meal).filter(Meal.id.in_(list(meal_ids))).all()
        }
        meals = [found[meal_id] for meal_id in dict.fromkeys(meal_ids) if meal_id in found]
        if not meals:
            raise NotFoundError("No meals found")

        suggested_items = ai_service.shopping_items_for_meals(meals)

        meal_names = ", ".join(meal.name for meal in meals)
        return self._save_generated_list(
            name=f"Shopping List for: {meal_names}",
            created_by=created_by,
            items=[
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "category": item.category or DEFAULT_AI_ITEM_CATEGORY,
                    "related_meal": meal_names,
                }
                for item in suggested_items
            ]
        )
