from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.utils.id_utils import generate_id

class Activity(Base):
    __tablename__ = "activities"

    id = Column(String, primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    description = Column(Text)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime)
    location = Column(String)
    assigned_to = Column(String, ForeignKey('users.id'), index=True)
    created_by = Column(String, ForeignKey('users.id'))
    activity_type = Column(String, nullable=False)  # sports, music, appointment, transport
    recurring = Column(Boolean, default=False, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    assigned_user = relationship("User", foreign_keys=[assigned_to])
    created_by_user = relationship("User", foreign_keys=[created_by])
