from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from pydantic import ValidationError as SchemaValidationError
from typing import Optional
import logging

from app.core.exceptions import ValidationError, ConflictError
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: str = "parent",
        **profile
    ) -> User:
        """
        Create a new user account.

        Raises:
            ValidationError: If the email, password, name or role are malformed,
                or parent_id does not reference an existing user
            ConflictError: If a user with this email already exists
        """
        try:
            data = RegisterRequest(email=email, password=password, name=name, role=role, **profile)
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid user data: {e.errors()[0].get('msg', 'invalid value')}")

        if self.get_user_by_email(data.email):
            raise ConflictError("User already exists")

        if data.parent_id and not self.db.query(User).filter(User.id == data.parent_id).first():
            raise ValidationError("Parent user does not exist")

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            role=data.role,
            avatar=data.avatar,
            date_of_birth=data.date_of_birth,
            parent_id=data.parent_id,
            preferences={}
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists")
        self.db.refresh(user)
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the matching active user, or None. Never raises for bad credentials."""
        try:
            credentials = LoginRequest(email=email, password=password)
        except SchemaValidationError:
            return None

        user = self.get_user_by_email(credentials.email)
        if not user or not user.is_active:
            return None

        if not verify_password(credentials.password, user.password_hash):
            return None

        return user
