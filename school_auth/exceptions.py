"""
Error types raised by the auth functions
"""

from typing import List, Optional


class ConfigurationError(Exception):
    """Required environment configuration is missing"""

    status_code = 500

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.missing = missing or []


class FunctionError(Exception):
    """Request-level failure rendered as {success: false, error, errors?}"""

    def __init__(self, status_code: int, error: str, errors: Optional[List[str]] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.errors = errors


class SignupStepError(Exception):
    """One step of a signup workflow failed; the message is user-facing"""

    def __init__(self, message: str, step: str):
        super().__init__(message)
        self.message = message
        self.step = step
