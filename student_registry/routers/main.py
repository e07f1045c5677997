from fastapi import APIRouter

from student_registry.routers.students import students_router
from student_registry.routers.courses import courses_router
from student_registry.routers.health import health_router

main_router = APIRouter()

main_router.include_router(students_router, prefix="/students", tags=["Students"])
main_router.include_router(courses_router, prefix="/courses", tags=["Courses"])
main_router.include_router(health_router, prefix="/health", tags=["Health Checks"])
