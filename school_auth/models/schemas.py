"""
Request and response schemas for the auth functions
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from school_auth import messages
from school_auth.config import settings


class UserRole(str, Enum):
    """Roles stored in public.user_roles"""
    ADMIN = "admin"
    TEACHER = "teacher"
    PARENT = "parent"


class BulkSignupUser(BaseModel):
    """One account row of a bulk signup request"""
    email: str
    full_name: str
    password: str
    temp_student_name: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def validate_email_address(cls, v):
        if not isinstance(v, str):
            raise PydanticCustomError('email_type', messages.INVALID_EMAIL)
        v = v.strip()
        if len(v) > 255:
            raise PydanticCustomError('email_length', messages.EMAIL_TOO_LONG)
        try:
            # syntax only; internal domains such as .local or .test are accepted
            address = validate_email(v, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            raise PydanticCustomError('email_format', messages.INVALID_EMAIL)
        if '.' not in address.ascii_domain:
            raise PydanticCustomError('email_format', messages.INVALID_EMAIL)
        return v

    @field_validator('full_name', mode='before')
    @classmethod
    def validate_full_name(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError('full_name_required', messages.FULL_NAME_REQUIRED)
        v = v.strip()
        if len(v) > 100:
            raise PydanticCustomError('full_name_length', messages.FULL_NAME_TOO_LONG)
        return v

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, v):
        if not isinstance(v, str) or len(v) < 8:
            raise PydanticCustomError('password_short', messages.PASSWORD_TOO_SHORT)
        if len(v) > 128:
            raise PydanticCustomError('password_long', messages.PASSWORD_TOO_LONG)
        return v


class BulkSignupRequest(BaseModel):
    """Body of POST /bulk-signup"""
    model_config = ConfigDict(populate_by_name=True)

    users: List[BulkSignupUser]
    user_type: UserRole = Field(..., alias='userType')

    @field_validator('users', mode='before')
    @classmethod
    def validate_user_count(cls, v):
        if isinstance(v, list):
            if len(v) < 1:
                raise PydanticCustomError('users_empty', messages.USERS_EMPTY)
            limit = settings.bulk_signup_max_users
            if len(v) > limit:
                raise PydanticCustomError(
                    'users_too_many', messages.USERS_TOO_MANY.format(limit=limit)
                )
        return v

    @field_validator('user_type', mode='before')
    @classmethod
    def validate_user_type(cls, v):
        if not isinstance(v, str) or v not in {role.value for role in UserRole}:
            raise PydanticCustomError('user_type', messages.INVALID_USER_TYPE)
        return v


class BulkSignupResult(BaseModel):
    """Account created by a bulk signup"""
    email: str
    id: str
    temp_student_name: Optional[str] = None


class BulkSignupResponse(BaseModel):
    """Aggregate outcome of a bulk signup"""
    success: bool
    successCount: int
    errors: List[str]
    results: List[BulkSignupResult]

    def to_payload(self) -> Dict[str, Any]:
        """JSON body; temp_student_name is omitted when it was not sent"""
        payload = self.model_dump()
        payload['results'] = [
            result.model_dump(exclude_none=True) for result in self.results
        ]
        return payload


def format_validation_errors(exc: ValidationError) -> List[str]:
    """
    Flatten a pydantic ValidationError into "<dotted.path>: <message>" lines

    Args:
        exc: Validation error raised by model_validate

    Returns:
        list: One message per violated field, in pydantic's order
    """
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
