"""
Startup validation and checks for the Family Hub backend
"""

import logging
import sys
from typing import List, Tuple
from app.core.config import settings
from app.core.database import SessionLocal
from app.services.session_service import SessionService

logger = logging.getLogger(__name__)

class StartupValidationError(Exception):
    """Raised when startup validation fails"""
    pass

def validate_database_url() -> Tuple[bool, List[str]]:
    """
    Validate the DATABASE_URL configuration

    Returns:
        Tuple of (is_valid, list_of_issues)
    """
    issues = []

    if not settings.DATABASE_URL:
        issues.append("DATABASE_URL is not set")
        return False, issues

    if settings.DATABASE_URL.startswith("sqlite"):
        logger.warning("DATABASE_URL points at SQLite; use PostgreSQL for production deployments")

    return len(issues) == 0, issues

def validate_cors_origins() -> Tuple[bool, List[str]]:
    """
    Validate CORS origins configuration

    Returns:
        Tuple of (is_valid, list_of_issues)
    """
    if not settings.ALLOWED_ORIGINS:
        # Same-origin deployments don't need CORS
        logger.warning("ALLOWED_ORIGINS is not set; cross-origin browser requests will be rejected")
        return True, []

    if "*" in settings.ALLOWED_ORIGINS:
        return False, ["ALLOWED_ORIGINS cannot contain '*' when session cookies are used"]

    return True, []

def validate_session_settings() -> Tuple[bool, List[str]]:
    issues = []

    if settings.SESSION_MAX_AGE_SECONDS <= 0:
        issues.append("SESSION_MAX_AGE_SECONDS must be positive")

    if not 4 <= settings.BCRYPT_ROUNDS <= 31:
        issues.append("BCRYPT_ROUNDS must be between 4 and 31")
    elif settings.BCRYPT_ROUNDS < 12:
        logger.warning("BCRYPT_ROUNDS is below 12; only use low cost factors in tests")

    if not settings.SESSION_COOKIE_SECURE:
        logger.warning("SESSION_COOKIE_SECURE is disabled; enable it when serving over HTTPS")

    return len(issues) == 0, issues

def validate_ai_service() -> Tuple[bool, List[str]]:
    # AI endpoints fail with a 500 when unconfigured, the rest of the app still works
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; AI suggestions will be unavailable")
    return True, []

def perform_startup_validation(strict: bool = False) -> bool:
    """
    Perform all startup validations

    Args:
        strict: If True, failures raise instead of being logged

    Returns:
        True if all validations pass, False otherwise

    Raises:
        StartupValidationError: If critical validations fail in strict mode
    """
    logger.info("Starting application validation...")

    all_issues = []

    validations = [
        ("Database URL", validate_database_url),
        ("CORS Origins", validate_cors_origins),
        ("Sessions", validate_session_settings),
        ("AI Service", validate_ai_service),
    ]

    for name, validator in validations:
        is_valid, issues = validator()
        if not is_valid:
            logger.error(f"{name} validation failed: {'; '.join(issues)}")
            all_issues.extend([f"{name}: {issue}" for issue in issues])
        else:
            logger.info(f"{name} validation passed")

    if all_issues:
        error_summary = "\n".join([f"  - {issue}" for issue in all_issues])
        logger.error(f"Startup validation failed with {len(all_issues)} issues:\n{error_summary}")

        if strict:
            raise StartupValidationError(f"Startup validation failed: {'; '.join(all_issues)}")
        return False

    logger.info("All startup validations passed successfully")
    return True

def purge_expired_sessions() -> int:
    db = SessionLocal()
    try:
        return SessionService(db).purge_expired()
    finally:
        db.close()

def run_startup_checks():
    """Run from the application lifespan"""
    perform_startup_validation(strict=False)  # Don't be strict on startup
    purge_expired_sessions()
    logger.info("Application startup completed")

if __name__ == "__main__":
    # Command line validation
    logging.basicConfig(level=logging.INFO)
    try:
        success = perform_startup_validation(strict=True)
        if success:
            print("All startup validations passed")
            sys.exit(0)
        else:
            print("Startup validation failed")
            sys.exit(1)
    except StartupValidationError as e:
        print(f"Critical validation error: {str(e)}")
        sys.exit(1)
