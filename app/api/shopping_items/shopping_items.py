from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.config import settings
from app.api.auth.auth import get_current_user
from app.models.user import User
from app.schemas.shopping import ShoppingItem as ShoppingItemSchema, ShoppingItemCreate, ShoppingItemUpdate
from app.services.shopping_list_service import ShoppingListService
from app.middleware.rate_limit import limiter

router = APIRouter()

@router.post("/", response_model=ShoppingItemSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_shopping_item(
    item: ShoppingItemCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ShoppingListService(db).create_item(item, current_user.id)

@router.put("/{item_id}", response_model=ShoppingItemSchema)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_shopping_item(
    item_id: str,
    item_update: ShoppingItemUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = ShoppingListService(db).update_item(item_id, item_update)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping item not found"
        )
    return item

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_shopping_item(
    item_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not ShoppingListService(db).delete_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping item not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
