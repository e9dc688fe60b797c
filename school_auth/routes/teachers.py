"""
Teacher Routes
Read-only listing backed by the get_teacher_profiles() SQL function
"""

from fastapi import APIRouter

from school_auth.utils.dependencies import AdminGateway, CurrentAdmin

router = APIRouter()


@router.get("/teachers")
async def list_teachers(admin: CurrentAdmin, gateway: AdminGateway):
    """Profiles of every user holding the teacher role"""
    teachers = await gateway.list_teacher_profiles()
    return {"success": True, "teachers": teachers}
