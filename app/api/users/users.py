from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.core.config import settings
from app.core.exceptions import PermissionDeniedError
from app.api.auth.auth import get_current_user, require_parent
from app.models.user import User, UserRole
from app.schemas.user import User as UserSchema, UserCreate, UserUpdate
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/", response_model=List[UserSchema])
async def get_users(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return UserService(db).get_all_users()

@router.post("/", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.USER_RATE_LIMIT)
async def create_family_member(
    member: UserCreate,
    request: Request,
    current_user: User = Depends(require_parent),
    db: Session = Depends(get_db)
):
    # Children are linked to the parent who creates them
    parent_id = current_user.id if member.role == UserRole.CHILD else None
    return AuthService(db).register(
        email=member.email,
        password=member.password,
        name=member.name,
        role=member.role,
        avatar=member.avatar,
        date_of_birth=member.date_of_birth,
        parent_id=parent_id
    )

@router.get("/{user_id}", response_model=UserSchema)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = UserService(db).get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user

@router.patch("/{user_id}", response_model=UserSchema)
@limiter.limit(settings.USER_RATE_LIMIT)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service = UserService(db)
    if not user_service.get_user_by_id(user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    # Users edit their own profile; parents may edit anyone in the family
    if current_user.id != user_id and current_user.role != UserRole.PARENT:
        raise PermissionDeniedError("Permission denied")

    return user_service.update_user(user_id, user_update)
