"""
Signup Routes
Single teacher registration
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from school_auth import messages
from school_auth.exceptions import FunctionError
from school_auth.routes.helpers import has_values, read_json_object
from school_auth.services.signup_service import SignupService
from school_auth.utils.dependencies import AdminGateway

router = APIRouter()


@router.post("/create-teacher", status_code=status.HTTP_201_CREATED)
async def create_teacher(request: Request, gateway: AdminGateway):
    """
    Register a teacher

    Body: {email, password, full_name}. Only presence is checked; format and
    password strength are left to Supabase Auth.
    """
    body = await read_json_object(request)
    if not has_values(body, "email", "password", "full_name"):
        raise FunctionError(status.HTTP_400_BAD_REQUEST, messages.SIGNUP_FIELDS_REQUIRED)

    result = await SignupService(gateway).create_teacher(
        body["email"], body["password"], body["full_name"]
    )

    if not result["success"]:
        raise FunctionError(status.HTTP_500_INTERNAL_SERVER_ERROR, result["error"])

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"success": True, "userId": result["user_id"]},
    )
