from fastapi import APIRouter

from student_registry.config.settings import settings
from student_registry.utils.responses import ResponseBuilder

health_router = APIRouter()


@health_router.get("")
async def health_check():
    """
    Basic health check endpoint

    Returns application status and basic service information
    """
    return ResponseBuilder.success(
        data={"status": "healthy", "service": settings.NAME, "version": settings.VERSION},
    )
