from fastapi import APIRouter

from student_registry.schemas.student_schemas import COURSES
from student_registry.utils.responses import ResponseBuilder

courses_router = APIRouter()


@courses_router.get("", summary="List the course catalog")
async def list_courses():
    """
    Course names offered on the registration form.

    Informational only: student writes accept any non-empty course.
    """
    return ResponseBuilder.success(data=list(COURSES))
