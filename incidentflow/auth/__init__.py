"""
Authentication models for IncidentFlow.
"""

from incidentflow.auth.models import (
    DEFAULT_SESSION_DURATION,
    SESSION_SECRET_BYTES,
    AuthContext,
    Session,
    generate_session_secret,
)

__all__ = [
    "AuthContext",
    "Session",
    "generate_session_secret",
    "DEFAULT_SESSION_DURATION",
    "SESSION_SECRET_BYTES",
]
