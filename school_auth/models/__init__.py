"""
Request and response models
"""

from .schemas import (
    UserRole, BulkSignupUser, BulkSignupRequest,
    BulkSignupResult, BulkSignupResponse, format_validation_errors
)
