from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.core.config import settings
from app.api.auth.auth import get_current_user, require_kitchen_access
from app.models.user import User
from app.schemas.shopping import (
    ShoppingList as ShoppingListSchema,
    ShoppingListCreate,
    ShoppingListUpdate,
    GenerateFromDateRange,
    GenerateFromMeals,
)
from app.services.ai_service import AISuggestionService, get_ai_service
from app.services.shopping_list_service import ShoppingListService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/", response_model=List[ShoppingListSchema])
async def get_shopping_lists(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ShoppingListService(db).get_all_lists()

@router.post("/", response_model=ShoppingListSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_shopping_list(
    shopping_list: ShoppingListCreate,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    return ShoppingListService(db).create_list(shopping_list, current_user.id)

@router.post("/generate", response_model=ShoppingListSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def generate_from_meal_plans(
    date_range: GenerateFromDateRange,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    return ShoppingListService(db).generate_from_date_range(
        date_range.start_date,
        date_range.end_date,
        current_user.id
    )

@router.post("/generate-from-meals", response_model=ShoppingListSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AI_RATE_LIMIT)
async def generate_from_meals(
    selection: GenerateFromMeals,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db),
    ai_service: AISuggestionService = Depends(get_ai_service)
):
    return await run_in_threadpool(
        ShoppingListService(db).generate_from_meals,
        selection.meal_ids,
        current_user.id,
        ai_service
    )

@router.get("/{list_id}", response_model=ShoppingListSchema)
async def get_shopping_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    shopping_list = ShoppingListService(db).get_list(list_id)
    if not shopping_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping list not found"
        )
    return shopping_list

@router.put("/{list_id}", response_model=ShoppingListSchema)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_shopping_list(
    list_id: str,
    list_update: ShoppingListUpdate,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    shopping_list = ShoppingListService(db).update_list(list_id, list_update)
    if not shopping_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping list not found"
        )
    return shopping_list

@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_shopping_list(
    list_id: str,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    if not ShoppingListService(db).delete_list(list_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping list not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
