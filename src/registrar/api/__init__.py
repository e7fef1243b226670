"""REST API for Registrar."""

from registrar.api.app import create_app
from registrar.api.models import (
    APIResponse,
    EnrollmentResponse,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "APIResponse",
    "EnrollmentResponse",
    "RegisterRequest",
    "UserResponse",
    "create_app",
]
