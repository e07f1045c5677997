import pytest
from typing import Dict, Generator

from fastapi.testclient import TestClient

from student_registry.db.memory_store import MemoryStore, get_memory_store
from student_registry.main import app
from student_registry.services.student_service import StudentService


@pytest.fixture
def memory_store() -> MemoryStore:
    """Create an empty store for each test."""
    return MemoryStore()


@pytest.fixture
def student_service(memory_store: MemoryStore) -> StudentService:
    """Student service bound to the per-test store."""
    return StudentService(memory_store)


@pytest.fixture
def client(memory_store: MemoryStore) -> Generator[TestClient, None, None]:
    """Test client whose requests hit the per-test store."""
    app.dependency_overrides[get_memory_store] = lambda: memory_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Test data factories
@pytest.fixture
def ada_payload() -> Dict[str, str]:
    """A valid create payload in wire (camelCase) form."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "555-123-4567",
        "course": "Computer Science",
        "enrollmentDate": "2024-09-01",
    }


@pytest.fixture
def grace_payload() -> Dict[str, str]:
    """A second valid create payload with a different email."""
    return {
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@example.com",
        "phone": "+1 (555) 987 6543",
        "course": "Software Engineering",
        "enrollmentDate": "2023-01-15",
    }
