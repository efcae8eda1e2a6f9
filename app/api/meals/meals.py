from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.database import get_db
from app.core.config import settings
from app.api.auth.auth import require_kitchen_access
from app.models.user import User
from app.schemas.ai import MealSuggestion
from app.schemas.meal import Meal as MealSchema, MealCreate, MealSuggestionRequest
from app.services.ai_service import AISuggestionService, get_ai_service
from app.services.meal_service import MealService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/", response_model=List[MealSchema])
async def get_meals(
    created_by: Optional[str] = Query(None, alias="createdBy"),
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    meal_service = MealService(db)
    if created_by:
        return meal_service.get_meals_by_creator(created_by)
    return meal_service.get_all_meals()

@router.post("/", response_model=MealSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_meal(
    meal: MealCreate,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    return MealService(db).create_meal(meal, current_user.id)

@router.post("/suggestions", response_model=List[MealSuggestion])
@limiter.limit(settings.AI_RATE_LIMIT)
async def suggest_meals(
    preferences: MealSuggestionRequest,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    ai_service: AISuggestionService = Depends(get_ai_service)
):
    return await run_in_threadpool(
        ai_service.suggest_meals,
        preferences.cuisines,
        preferences.dietary,
        preferences.meal_type.value
    )

@router.get("/{meal_id}", response_model=MealSchema)
async def get_meal(
    meal_id: str,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    meal = MealService(db).get_meal(meal_id)
    if not meal:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal not found"
        )
    return meal
