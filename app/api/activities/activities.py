from fastapi import APIRouter, Depends, HTTPException, status, Query, Request, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.database import get_db
from app.core.config import settings
from app.api.auth.auth import require_parent, require_schedule_access
from app.models.user import User
from app.schemas.activity import Activity as ActivitySchema, ActivityCreate, ActivityUpdate, ActivityWithUsers
from app.services.activity_service import ActivityService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/", response_model=List[ActivityWithUsers])
async def get_activities(
    user_id: Optional[str] = Query(None, alias="userId"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    current_user: User = Depends(require_schedule_access),
    db: Session = Depends(get_db)
):
    activity_service = ActivityService(db)
    if user_id:
        return activity_service.get_activities_by_user(user_id)
    if date:
        return activity_service.get_activities_by_date(date)
    return activity_service.get_all_activities()

@router.post("/", response_model=ActivitySchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_activity(
    activity: ActivityCreate,
    request: Request,
    current_user: User = Depends(require_parent),
    db: Session = Depends(get_db)
):
    return ActivityService(db).create_activity(activity, current_user.id)

@router.put("/{activity_id}", response_model=ActivitySchema)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_activity(
    activity_id: str,
    activity_update: ActivityUpdate,
    request: Request,
    current_user: User = Depends(require_parent),
    db: Session = Depends(get_db)
):
    activity = ActivityService(db).update_activity(activity_id, activity_update)
    if not activity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Activity not found"
        )
    return activity

@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_activity(
    activity_id: str,
    request: Request,
    current_user: User = Depends(require_parent),
    db: Session = Depends(get_db)
):
    if not ActivityService(db).delete_activity(activity_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Activity not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
