from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.models.types import JSONType
from app.utils.id_utils import generate_id
import enum

class UserRole(str, enum.Enum):
    PARENT = "parent"
    COOK = "cook"
    CHILD = "child"
    ADMIN = "admin"

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_id)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role_enum"), nullable=False, default=UserRole.PARENT)
    name = Column(String, nullable=False)
    avatar = Column(String)
    date_of_birth = Column(String)  # For children profiles
    parent_id = Column(String, ForeignKey('users.id'), nullable=True, index=True)
    preferences = Column(JSONType, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    parent = relationship("User", remote_side=[id], back_populates="children")
    children = relationship("User", back_populates="parent")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
