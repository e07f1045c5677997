from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, status

from student_registry.services.student_service import (
    StudentService,
    get_student_service,
)
from student_registry.models.student_models import Student
from student_registry.schemas.student_schemas import StudentValidationError
from student_registry.utils.errors import BusinessLogicError, NotFoundError, ServiceError
from student_registry.utils.logging import get_logger
from student_registry.utils.responses import ResponseBuilder

logger = get_logger()

students_router = APIRouter()

# Errors the API already knows how to translate
EXPECTED_ERRORS = (NotFoundError, BusinessLogicError, StudentValidationError)

StudentId = Annotated[str, Path(description="Student record ID")]


def _serialize(student: Student) -> dict:
    return student.model_dump(by_alias=True)


@students_router.get(
    "",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="List all students",
)
async def list_students(
    student_service: StudentService = Depends(get_student_service),
):
    try:
        students = await student_service.list_students()
        return ResponseBuilder.success(data=[_serialize(s) for s in students])

    except Exception:
        logger.exception("Error fetching students")
        raise ServiceError("Failed to fetch students", error_code="STUDENTS_RETRIEVAL_FAILED")


@students_router.get(
    "/{student_id}",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Get a student by ID",
)
async def get_student(
    student_id: StudentId,
    student_service: StudentService = Depends(get_student_service),
):
    try:
        student = await student_service.get_student(student_id)
        return ResponseBuilder.success(data=_serialize(student))

    except EXPECTED_ERRORS:
        raise
    except Exception:
        logger.exception("Error fetching student")
        raise ServiceError("Failed to fetch student", error_code="STUDENT_RETRIEVAL_FAILED")


@students_router.post(
    "",
    response_model=None,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new student",
    description="Validate the payload, reject a duplicate email (ignoring case) and store the student with a generated display ID.",
)
async def create_student(
    payload: Annotated[Any, Body()],
    student_service: StudentService = Depends(get_student_service),
):
    try:
        student = await student_service.create_student(payload)
        return ResponseBuilder.success(
            data=_serialize(student), status_code=status.HTTP_201_CREATED
        )

    except EXPECTED_ERRORS:
        raise
    except Exception:
        logger.exception("Error creating student")
        raise ServiceError("Failed to create student", error_code="STUDENT_CREATION_FAILED")


@students_router.put(
    "/{student_id}",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Update a student",
    description="Apply a partial update. Fields left out of the payload keep their current values.",
)
async def update_student(
    student_id: StudentId,
    payload: Annotated[Any, Body()],
    student_service: StudentService = Depends(get_student_service),
):
    try:
        student = await student_service.update_student(student_id, payload)
        return ResponseBuilder.success(data=_serialize(student))

    except EXPECTED_ERRORS:
        raise
    except Exception:
        logger.exception("Error updating student")
        raise ServiceError("Failed to update student", error_code="STUDENT_UPDATE_FAILED")


@students_router.delete(
    "/{student_id}",
    response_model=None,
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a student",
)
async def delete_student(
    student_id: StudentId,
    student_service: StudentService = Depends(get_student_service),
):
    try:
        await student_service.delete_student(student_id)
        return ResponseBuilder.no_content()

    except EXPECTED_ERRORS:
        raise
    except Exception:
        logger.exception("Error deleting student")
        raise ServiceError("Failed to delete student", error_code="STUDENT_DELETION_FAILED")
