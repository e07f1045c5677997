from typing import Any, List

from fastapi import Depends

from student_registry.db.memory_store import MemoryStore, get_memory_store
from student_registry.models.student_models import Student
from student_registry.schemas.student_schemas import (
    validate_create_payload,
    validate_update_payload,
)
from student_registry.utils.errors import BusinessLogicError, NotFoundError
from student_registry.utils.logging import get_logger

logger = get_logger()

STUDENT_NOT_FOUND = "Student not found"
DUPLICATE_EMAIL = "A student with this email already exists"


class StudentService:
    """Service provider for student registration rules on top of the record store"""

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_students(self) -> List[Student]:
        return self.store.list()

    async def get_student(self, student_id: str) -> Student:
        """Get a student by ID or raise NotFoundError"""
        student = self.store.get(student_id)
        if student is None:
            raise NotFoundError(STUDENT_NOT_FOUND, error_code="STUDENT_NOT_FOUND")
        return student

    async def create_student(self, payload: Any) -> Student:
        """Validate a full payload and insert it, rejecting a taken email"""
        fields = validate_create_payload(payload)

        with self.store.transaction():
            if self.store.get_by_email(fields["email"]) is not None:
                raise BusinessLogicError(DUPLICATE_EMAIL, error_code="EMAIL_EXISTS")
            return self.store.create(fields)

    async def update_student(self, student_id: str, payload: Any) -> Student:
        """
        Apply a partial update to an existing student.

        Runs entirely inside the store transaction without awaiting. The id is
        resolved before the payload is validated, so an unknown id
        always yields NotFoundError. A new email must not belong to any other
        student; changing the letter case of the student's own email is allowed.
        """
        with self.store.transaction():
            existing = self.store.get(student_id)
            if existing is None:
                raise NotFoundError(STUDENT_NOT_FOUND, error_code="STUDENT_NOT_FOUND")
            changes = validate_update_payload(payload)

            new_email = changes.get("email")
            if new_email is not None and new_email != existing.email:
                owner = self.store.get_by_email(new_email)
                if owner is not None and owner.id != student_id:
                    raise BusinessLogicError(
                        DUPLICATE_EMAIL, error_code="EMAIL_EXISTS"
                    )

            updated = self.store.update(student_id, changes)
            if updated is None:
                raise NotFoundError(STUDENT_NOT_FOUND, error_code="STUDENT_NOT_FOUND")
            return updated

    async def delete_student(self, student_id: str) -> None:
        """Delete a student or raise NotFoundError"""
        if not self.store.delete(student_id):
            raise NotFoundError(STUDENT_NOT_FOUND, error_code="STUDENT_NOT_FOUND")


# Dependency injection for service provider
def get_student_service(
    store: MemoryStore = Depends(get_memory_store),
) -> StudentService:
    """Dependency to provide StudentService instance"""
    return StudentService(store)
