"""
Login Routes
Username/password login
"""

from fastapi import APIRouter, Request, status

from school_auth import messages
from school_auth.exceptions import FunctionError
from school_auth.routes.helpers import has_values, read_json_object
from school_auth.services.login_service import LoginService
from school_auth.utils.dependencies import AdminGateway, PublicGateway

router = APIRouter()


@router.post("/login-with-username")
async def login_with_username(
    request: Request,
    admin_gateway: AdminGateway,
    public_gateway: PublicGateway,
):
    """
    Sign in with a username

    Body: {username, password}. Returns the full Supabase session payload.
    """
    body = await read_json_object(request)
    if not has_values(body, "username", "password"):
        raise FunctionError(status.HTTP_400_BAD_REQUEST, messages.LOGIN_FIELDS_REQUIRED)

    result = await LoginService(admin_gateway, public_gateway).login(
        body["username"], body["password"]
    )

    if not result["success"]:
        raise FunctionError(status.HTTP_400_BAD_REQUEST, result["error"])

    return result
