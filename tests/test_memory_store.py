import re
import threading
from datetime import datetime

import pytest

from student_registry.db.memory_store import MemoryStore, generate_display_id


DISPLAY_ID_PATTERN = re.compile(r"^STU\d{9}$")


class TestDisplayIdGeneration:
    """Test display identifier generation."""

    def test_display_id_format(self):
        """Test display id is prefix, current year and five digits."""
        display_id = generate_display_id()
        assert DISPLAY_ID_PATTERN.match(display_id)
        assert display_id[3:7] == str(datetime.now().year)

    def test_display_id_custom_prefix(self):
        """Test a custom prefix replaces STU."""
        display_id = generate_display_id(prefix="ABC")
        assert re.match(r"^ABC\d{9}$", display_id)

    def test_store_retries_on_collision(self):
        """Test the store draws again when a display id is already live."""
        draws = iter(["STU202400001", "STU202400001", "STU202400002"])
        store = MemoryStore(display_id_factory=lambda: next(draws))

        first = store.create({"firstName": "Ada", "email": "a@example.com"} | _rest())
        second = store.create({"firstName": "Bob", "email": "b@example.com"} | _rest())

        assert first.display_id == "STU202400001"
        assert second.display_id == "STU202400002"

    def test_store_keeps_colliding_id_after_max_attempts(self):
        """Test the store gives up after the configured number of attempts."""
        store = MemoryStore(
            display_id_factory=lambda: "STU202400001", max_display_id_attempts=3
        )

        first = store.create({"firstName": "Ada", "email": "a@example.com"} | _rest())
        second = store.create({"firstName": "Bob", "email": "b@example.com"} | _rest())

        assert first.display_id == second.display_id
        assert first.id != second.id
        assert store.count() == 2


def _rest():
    return {
        "lastName": "Tester",
        "phone": "5551234567",
        "course": "Data Science",
        "enrollmentDate": "2024-09-01",
    }


class TestStudentCrud:
    """Test student record operations."""

    def test_create_assigns_identity(self, memory_store: MemoryStore, ada_payload):
        """Test create fills id and display id and keeps the input fields."""
        student = memory_store.create(ada_payload)

        assert student.id
        assert DISPLAY_ID_PATTERN.match(student.display_id)
        dumped = student.model_dump(by_alias=True)
        for key, value in ada_payload.items():
            assert dumped[key] == value

    def test_create_ignores_supplied_identity(self, memory_store: MemoryStore, ada_payload):
        """Test client-supplied id and displayId never reach the record."""
        student = memory_store.create(
            {**ada_payload, "id": "fixed", "displayId": "STU000000000"}
        )

        assert student.id != "fixed"
        assert student.display_id != "STU000000000"

    def test_ids_are_unique(self, memory_store: MemoryStore, ada_payload, grace_payload):
        """Test every record gets its own id."""
        first = memory_store.create(ada_payload)
        second = memory_store.create(grace_payload)
        assert first.id != second.id

    def test_list_returns_all(self, memory_store: MemoryStore, ada_payload, grace_payload):
        """Test list returns every live record."""
        assert memory_store.list() == []
        memory_store.create(ada_payload)
        memory_store.create(grace_payload)

        emails = {student.email for student in memory_store.list()}
        assert emails == {"ada@example.com", "grace@example.com"}

    def test_get_unknown_returns_none(self, memory_store: MemoryStore):
        """Test get signals not found with None."""
        assert memory_store.get("missing") is None

    def test_get_by_email_ignores_case(self, memory_store: MemoryStore, ada_payload):
        """Test any case variant of an email finds the record."""
        student = memory_store.create(ada_payload)

        for variant in ("ada@example.com", "ADA@EXAMPLE.COM", "Ada@Example.Com"):
            found = memory_store.get_by_email(variant)
            assert found is not None
            assert found.id == student.id

        assert memory_store.get_by_email("nobody@example.com") is None

    def test_update_merges_partial_fields(self, memory_store: MemoryStore, ada_payload):
        """Test update only touches the fields provided."""
        student = memory_store.create(ada_payload)

        updated = memory_store.update(student.id, {"course": "Data Science"})

        assert updated is not None
        assert updated.course == "Data Science"
        before = student.model_dump()
        after = updated.model_dump()
        for key in before:
            if key != "course":
                assert after[key] == before[key]
        assert memory_store.get(student.id) == updated

    def test_update_never_changes_identity(self, memory_store: MemoryStore, ada_payload):
        """Test id and displayId survive an update that names them."""
        student = memory_store.create(ada_payload)

        updated = memory_store.update(
            student.id, {"id": "other", "displayId": "STU000000000", "firstName": "Augusta"}
        )

        assert updated.id == student.id
        assert updated.display_id == student.display_id
        assert updated.first_name == "Augusta"

    def test_update_unknown_returns_none(self, memory_store: MemoryStore):
        """Test update on a missing id signals not found."""
        assert memory_store.update("missing", {"course": "Data Science"}) is None

    def test_delete_existing(self, memory_store: MemoryStore, ada_payload):
        """Test delete removes the record and reports True."""
        student = memory_store.create(ada_payload)

        assert memory_store.delete(student.id) is True
        assert memory_store.get(student.id) is None
        assert memory_store.count() == 0

    def test_delete_unknown_leaves_store_unchanged(
        self, memory_store: MemoryStore, ada_payload
    ):
        """Test deleting a missing id reports False without raising."""
        memory_store.create(ada_payload)

        assert memory_store.delete("missing") is False
        assert memory_store.count() == 1

    def test_clear(self, memory_store: MemoryStore, ada_payload):
        """Test clear empties the store."""
        memory_store.create(ada_payload)
        memory_store.clear()
        assert memory_store.count() == 0


class TestTransaction:
    """Test the store lock used for check-then-write sequences."""

    def test_transaction_is_reentrant(self, memory_store: MemoryStore, ada_payload):
        """Test store operations work while a transaction holds the lock."""
        with memory_store.transaction() as store:
            assert store.get_by_email(ada_payload["email"]) is None
            store.create(ada_payload)

        assert memory_store.count() == 1

    def test_transaction_blocks_other_threads(self, memory_store: MemoryStore, ada_payload):
        """Test another thread cannot write while a transaction is open."""
        finished = threading.Event()

        def writer():
            memory_store.create(ada_payload)
            finished.set()

        with memory_store.transaction():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not finished.wait(timeout=0.2)
            assert memory_store.count() == 0

        thread.join(timeout=2)
        assert finished.is_set()
        assert memory_store.count() == 1


class TestUsers:
    """Test the user record scaffold."""

    def test_create_and_lookup_user(self, memory_store: MemoryStore):
        """Test users can be fetched by id and by username."""
        user = memory_store.create_user({"username": "admin", "password": "secret"})

        assert user.id
        assert memory_store.get_user(user.id) == user
        assert memory_store.get_user_by_username("admin") == user
        assert memory_store.get_user_by_username("nobody") is None
        assert memory_store.get_user("missing") is None

    def test_password_is_stored_as_given(self, memory_store: MemoryStore):
        """Test the known plain-text password weakness is still present."""
        user = memory_store.create_user({"username": "admin", "password": "secret"})
        assert user.password == "secret"

    def test_duplicate_username_rejected(self, memory_store: MemoryStore):
        """Test usernames are unique."""
        memory_store.create_user({"username": "admin", "password": "one"})

        with pytest.raises(ValueError, match="USERNAME_EXISTS"):
            memory_store.create_user({"username": "admin", "password": "two"})
