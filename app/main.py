import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from app.core.config import settings
from app.core.database import engine
from app.core.startup import run_startup_checks
from app.models import Base
from app.api.auth import auth_router
from app.api.users import users_router
from app.api.meals import meals_router
from app.api.meal_plans import meal_plans_router
from app.api.activities import activities_router
from app.api.shopping_lists import shopping_lists_router
from app.api.shopping_items import shopping_items_router
from app.middleware.error_handlers import register_error_handlers
from app.middleware.security import SecurityHeadersMiddleware
from app.middleware.rate_limit import limiter, rate_limit_exceeded_handler, create_rate_limit_middleware
from app.middleware.request_limits import create_request_limit_middleware

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

Base.metadata.create_all(bind=engine)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration and clear stale sessions on startup."""
    run_startup_checks()
    yield

app = FastAPI(
    title="Family Hub API",
    description="Backend API for household meal planning, activities and shopping lists",
    version="1.0.0",
    lifespan=lifespan
)

register_error_handlers(app)

# Configure rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add security headers middleware (should be added before CORS)
app.add_middleware(SecurityHeadersMiddleware)

# Add request size limiting middleware
app.add_middleware(create_request_limit_middleware())

# Add rate limiting middleware if enabled
rate_limit_middleware = create_rate_limit_middleware()
if rate_limit_middleware:
    app.add_middleware(rate_limit_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With"],
)

app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(meals_router, prefix="/api/meals", tags=["meals"])
app.include_router(meal_plans_router, prefix="/api/meal-plans", tags=["meal-plans"])
app.include_router(activities_router, prefix="/api/activities", tags=["activities"])
app.include_router(shopping_lists_router, prefix="/api/shopping-lists", tags=["shopping-lists"])
app.include_router(shopping_items_router, prefix="/api/shopping-items", tags=["shopping-items"])

@app.get("/")
async def root():
    return {"message": "Family Hub API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
