from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.config import settings
from app.core.exceptions import AuthError, PermissionDeniedError
from app.models.user import User, UserRole
from app.schemas.user import UserSummary, LoginForm, RegisterForm
from app.services.auth_service import AuthService
from app.services.session_service import SessionService
from app.services.user_service import UserService
from app.middleware.rate_limit import limiter
from app.utils.security_logger import security_logger
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

def _client_ip(request: Request):
    return request.client.host if request.client else None

def _start_session(response: Response, user: User, db: Session) -> None:
    sid = SessionService(db).create(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sid,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax"
    )

async def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the session cookie to an active user or fail with 401."""
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not session_id:
        raise AuthError("Authentication required")

    user_id = SessionService(db).resolve(session_id)
    user = UserService(db).get_user_by_id(user_id) if user_id else None
    if not user or not user.is_active:
        security_logger.log_invalid_session(request.url.path)
        raise AuthError("Authentication required")

    request.state.session_id = session_id
    return user

def require_role(*roles: UserRole):
    """Dependency factory: authenticated user whose role is one of `roles`, else 403."""
    allowed_roles = [UserRole(role) for role in roles]

    async def role_checker(request: Request, current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            security_logger.log_permission_denied(
                user_id=current_user.id,
                role=current_user.role.value,
                endpoint=f"{request.method} {request.url.path}",
                allowed_roles=[role.value for role in allowed_roles]
            )
            raise PermissionDeniedError("Insufficient permissions")
        return current_user

    return role_checker

# Role gates shared by the routers
require_parent = require_role(UserRole.PARENT)
require_kitchen_access = require_role(UserRole.PARENT, UserRole.COOK)
require_schedule_access = require_role(UserRole.PARENT, UserRole.CHILD)

@router.post("/login", response_model=UserSummary)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    credentials: LoginForm,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    user = AuthService(db).authenticate(credentials.email, credentials.password)
    if not user:
        security_logger.log_login_failure(credentials.email, _client_ip(request))
        raise AuthError("Invalid credentials")

    _start_session(response, user, db)
    security_logger.log_login_success(user.id, _client_ip(request))
    return user

@router.post("/register", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    form: RegisterForm,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    user = AuthService(db).register(
        email=form.email,
        password=form.password,
        name=form.name,
        role=form.role,
        avatar=form.avatar,
        date_of_birth=form.date_of_birth
    )

    _start_session(response, user, db)
    security_logger.log_registration(user.id, user.role.value)
    return user

@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    SessionService(db).destroy(request.state.session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    security_logger.log_logout(current_user.id)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=UserSummary)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user
