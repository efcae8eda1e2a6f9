from fastapi import APIRouter, Depends, HTTPException, status, Query, Request, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.database import get_db
from app.core.config import settings
from app.api.auth.auth import require_kitchen_access
from app.models.user import User
from app.schemas.meal_plan import MealPlan as MealPlanSchema, MealPlanCreate, MealPlanUpdate, MealPlanWithMeal
from app.services.meal_plan_service import MealPlanService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/", response_model=List[MealPlanWithMeal])
async def get_meal_plans(
    user_id: Optional[str] = Query(None, alias="userId"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    if user_id:
        return meal_plan_service.get_meal_plans_by_user(user_id)
    if date:
        return meal_plan_service.get_meal_plans_by_date(date)
    return meal_plan_service.get_current_week_meal_plans()

@router.post("/", response_model=MealPlanSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_meal_plan(
    meal_plan: MealPlanCreate,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    return MealPlanService(db).create_meal_plan(meal_plan, current_user.id)

@router.get("/{meal_plan_id}", response_model=MealPlanWithMeal)
async def get_meal_plan(
    meal_plan_id: str,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    meal_plan = MealPlanService(db).get_meal_plan(meal_plan_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )
    return meal_plan

@router.put("/{meal_plan_id}", response_model=MealPlanSchema)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_meal_plan(
    meal_plan_id: str,
    meal_plan_update: MealPlanUpdate,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    meal_plan = MealPlanService(db).update_meal_plan(meal_plan_id, meal_plan_update)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )
    return meal_plan

@router.delete("/{meal_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_meal_plan(
    meal_plan_id: str,
    request: Request,
    current_user: User = Depends(require_kitchen_access),
    db: Session = Depends(get_db)
):
    if not MealPlanService(db).delete_meal_plan(meal_plan_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
