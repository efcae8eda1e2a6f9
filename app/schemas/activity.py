from pydantic import Field
from app.schemas.base import CamelModel
from typing import Optional
from datetime import datetime
from app.schemas.user import UserSummary

class ActivityBase(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    activity_type: str = Field(..., min_length=1)  # sports, music, appointment, transport
    recurring: bool = False
    completed: bool = False

class ActivityCreate(ActivityBase):
    pass

class ActivityUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    activity_type: Optional[str] = None
    recurring: Optional[bool] = None
    completed: Optional[bool] = None

class Activity(ActivityBase):
    id: str
    created_by: Optional[str] = None

    class Config:
        from_attributes = True

class ActivityWithUsers(Activity):
    assigned_user: Optional[UserSummary] = None
    created_by_user: Optional[UserSummary] = None

    class Config:
        from_attributes = True
