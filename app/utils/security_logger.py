"""
Security event logging for the Family Hub API.
Provides structured logging for authentication and access-control events.
"""

import logging
import json
from typing import Dict, Any, Optional
from datetime import datetime
from pathlib import Path
from app.core.config import settings

class SecurityLogger:
    """Structured security event logging"""

    def __init__(self, log_dir: str = None):
        """Initialize security logger"""
        self.log_dir = Path(log_dir or settings.LOG_DIR)

        self.security_logger = logging.getLogger('security')
        self.security_logger.setLevel(getattr(logging, settings.SECURITY_LOG_LEVEL))

        # Configure handler lazily so disabled logging never touches the filesystem
        if settings.LOG_SECURITY_EVENTS and not self.security_logger.handlers:
            self._configure_security_handler()

    def _configure_security_handler(self):
        """Configure security event file handler"""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        security_log_file = self.log_dir / "security_events.log"
        handler = logging.FileHandler(security_log_file)

        # JSON formatter for structured logs
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "message": %(message)s}',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        self.security_logger.addHandler(handler)

    def log_security_event(self, event_type: str, user_id: Optional[str], details: Dict[str, Any], severity: str = "INFO"):
        """
        Log security events with structured data

        Args:
            event_type: Type of security event (e.g., 'login_failed', 'permission_denied')
            user_id: ID of user involved in event
            details: Additional event details
            severity: Log severity level
        """
        if not settings.LOG_SECURITY_EVENTS:
            return

        event_data = {
            "event_type": event_type,
            "user_id": user_id,
            "timestamp": datetime.utcnow().isoformat(),
            "severity": severity,
            "details": details,
            "source": "family_hub"
        }

        log_message = json.dumps(event_data)

        if severity == "CRITICAL":
            self.security_logger.critical(log_message)
        elif severity == "ERROR":
            self.security_logger.error(log_message)
        elif severity == "WARNING":
            self.security_logger.warning(log_message)
        else:
            self.security_logger.info(log_message)

    def log_login_success(self, user_id: str, client_ip: Optional[str]):
        self.log_security_event(
            event_type="login_success",
            user_id=user_id,
            details={"client_ip": client_ip}
        )

    def log_login_failure(self, email: Optional[str], client_ip: Optional[str]):
        """Log failed login attempts; only the email domain is recorded"""
        domain = email.rsplit("@", 1)[-1] if isinstance(email, str) and "@" in email else None
        self.log_security_event(
            event_type="login_failed",
            user_id=None,
            details={"email_domain": domain, "client_ip": client_ip},
            severity="WARNING"
        )

    def log_registration(self, user_id: str, role: str):
        self.log_security_event(
            event_type="user_registered",
            user_id=user_id,
            details={"role": role}
        )

    def log_logout(self, user_id: str):
        self.log_security_event(event_type="logout", user_id=user_id, details={})

    def log_permission_denied(self, user_id: str, role: str, endpoint: str, allowed_roles: list):
        """Log role-gate rejections"""
        self.log_security_event(
            event_type="permission_denied",
            user_id=user_id,
            details={
                "role": role,
                "endpoint": endpoint,
                "allowed_roles": allowed_roles,
                "action": "request_blocked"
            },
            severity="WARNING"
        )

    def log_invalid_session(self, endpoint: str):
        self.log_security_event(
            event_type="invalid_session",
            user_id=None,
            details={"endpoint": endpoint, "action": "request_blocked"}
        )

# Global security logger instance
security_logger = SecurityLogger()
