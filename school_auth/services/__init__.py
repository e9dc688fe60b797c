"""
Signup, login and rate limiting services
"""

from .signup_service import SignupService
from .login_service import LoginService
from .bulk_signup_service import BulkSignupService
from .rate_limiter import BulkSignupRateLimiter, RateLimitDecision

__all__ = [
    "SignupService",
    "LoginService",
    "BulkSignupService",
    "BulkSignupRateLimiter",
    "RateLimitDecision",
]
