import random
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from student_registry.config.settings import settings
from student_registry.models.student_models import Student
from student_registry.models.user_models import User
from student_registry.utils.logging import get_logger

logger = get_logger()

IMMUTABLE_STUDENT_FIELDS = ("id", "displayId", "display_id")


def generate_display_id(prefix: Optional[str] = None) -> str:
    """
    Build a display identifier such as STU202412345.

    The five digits are random, so two students can draw the same code
    (birthday odds reach about 1% near 45 students a year).
    """
    prefix = settings.DISPLAY_ID_PREFIX if prefix is None else prefix
    year = datetime.now().year
    return f"{prefix}{year}{random.randint(10000, 99999)}"


class MemoryStore:
    """
    In-memory record store for students and users.

    All state lives in two dicts keyed by the generated record id and is lost
    when the process exits. Every operation holds a re-entrant lock;
    `transaction()` exposes the same lock so that a caller can run a
    check-then-write sequence without another writer slipping in between.
    """

    def __init__(
        self,
        display_id_factory: Callable[[], str] = generate_display_id,
        max_display_id_attempts: Optional[int] = None,
    ):
        self._lock = threading.RLock()
        self._students: Dict[str, Student] = {}
        self._users: Dict[str, User] = {}
        self._display_id_factory = display_id_factory
        self._max_display_id_attempts = (
            max_display_id_attempts
            if max_display_id_attempts is not None
            else settings.DISPLAY_ID_MAX_ATTEMPTS
        )

    @contextmanager
    def transaction(self) -> Iterator["MemoryStore"]:
        """Hold the store lock for the duration of the block."""
        with self._lock:
            yield self

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
            return None

    def create_user(self, fields: Mapping[str, str]) -> User:
        """Insert a user. Raises ValueError("USERNAME_EXISTS") on a taken username."""
        with self._lock:
            if self.get_user_by_username(fields["username"]) is not None:
                raise ValueError("USERNAME_EXISTS")

            user = User(
                id=str(uuid.uuid4()),
                username=fields["username"],
                password=fields["password"],
            )
            self._users[user.id] = user

        logger.warning(
            f"Stored password for user '{user.username}' in plain text; "
            "user records are not safe for authentication"
        )
        return user

    # Students
    def list(self) -> List[Student]:
        with self._lock:
            return list(self._students.values())

    def count(self) -> int:
        with self._lock:
            return len(self._students)

    def get(self, student_id: str) -> Optional[Student]:
        with self._lock:
            return self._students.get(student_id)

    def get_by_email(self, email: str) -> Optional[Student]:
        needle = email.lower()
        with self._lock:
            for student in self._students.values():
                if student.email.lower() == needle:
                    return student
            return None

    def create(self, fields: Mapping[str, str]) -> Student:
        """Insert an already validated student payload and return the new record."""
        with self._lock:
            data = {
                key: value
                for key, value in fields.items()
                if key not in IMMUTABLE_STUDENT_FIELDS
            }
            student = Student(
                id=str(uuid.uuid4()),
                display_id=self._next_display_id(),
                **data,
            )
            self._students[student.id] = student

        logger.info(f"Created student {student.display_id} ({student.id})")
        return student

    def update(self, student_id: str, changes: Mapping[str, str]) -> Optional[Student]:
        """Merge `changes` onto an existing record; None if the id is unknown."""
        with self._lock:
            current = self._students.get(student_id)
            if current is None:
                return None

            merged = current.model_dump(by_alias=True)
            merged.update(
                {
                    key: value
                    for key, value in changes.items()
                    if key not in IMMUTABLE_STUDENT_FIELDS
                }
            )
            updated = Student.model_validate(merged)
            self._students[student_id] = updated

        logger.info(f"Updated student {updated.display_id} ({student_id})")
        return updated

    def delete(self, student_id: str) -> bool:
        with self._lock:
            removed = self._students.pop(student_id, None)

        if removed is None:
            return False
        logger.info(f"Deleted student {removed.display_id} ({student_id})")
        return True

    def clear(self) -> None:
        with self._lock:
            self._students.clear()
            self._users.clear()

    def _next_display_id(self) -> str:
        """Draw display ids until one is free among live records."""
        taken = {student.display_id for student in self._students.values()}
        candidate = self._display_id_factory()
        attempts = 1
        while candidate in taken and attempts < self._max_display_id_attempts:
            candidate = self._display_id_factory()
            attempts += 1

        if candidate in taken:
            logger.warning(
                f"Display id {candidate} still collides after {attempts} attempts; keeping it"
            )
        return candidate


# Process-wide store instance
store = MemoryStore()


def get_memory_store() -> MemoryStore:
    """Dependency to provide the shared MemoryStore"""
    return store
