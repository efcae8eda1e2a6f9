from sqlalchemy.orm import Session, joinedload
from datetime import datetime, timedelta
from typing import List, Optional
from app.core.exceptions import ValidationError
from app.models.activity import Activity
from app.schemas.activity import ActivityCreate, ActivityUpdate

class ActivityService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Activity).options(
            joinedload(Activity.assigned_user),
            joinedload(Activity.created_by_user)
        ).order_by(Activity.start_time)

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        return self._query().filter(Activity.id == activity_id).first()

    def get_all_activities(self) -> List[Activity]:
        return self._query().all()

    def get_activities_by_user(self, user_id: str) -> List[Activity]:
        return self._query().filter(Activity.assigned_to == user_id).all()

    def get_activities_by_date(self, day: str) -> List[Activity]:
        """Activities starting on the given YYYY-MM-DD day."""
        try:
            start_of_day = datetime.strptime(day, "%Y-%m-%d")
        except ValueError:
            raise ValidationError("Date must use the YYYY-MM-DD format")

        end_of_day = start_of_day + timedelta(days=1)
        return self._query().filter(
            Activity.start_time >= start_of_day,
            Activity.start_time < end_of_day
        ).all()

    def create_activity(self, activity_data: ActivityCreate, created_by: str) -> Activity:
        activity = Activity(**activity_data.dict(), created_by=created_by)
        self.db.add(activity)
        self.db.commit()
        self.db.refresh(activity)
        return activity

    def update_activity(self, activity_id: str, activity_update: ActivityUpdate) -> Optional[Activity]:
        activity = self.get_activity(activity_id)
        if not activity:
            return None

        update_data = activity_update.dict(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(activity, field, value)

        self.db.commit()
        self.db.refresh(activity)
        return activity

    def delete_activity(self, activity_id: str) -> bool:
        activity = self.get_activity(activity_id)
        if not activity:
            return False

        self.db.delete(activity)
        self.db.commit()
        return True
