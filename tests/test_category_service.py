"""Tests for CategoryService: validation, identity, conflicts and failures."""

import pytest

from shop.core.exceptions import (
    ConcurrencyConflict,
    NotFound,
    PersistenceError,
    PersistenceFailed,
    ValidationFailed,
)
from shop.services.category_service import CategoryService


@pytest.fixture
def service(conn):
    return CategoryService(conn)


class TestCategoryReads:

    def test_list_empty(self, service):
        assert service.list_categories() == []

    def test_created_id_is_stable_across_reads(self, service):
        created = service.create_category({"title": "Books"})

        assert created.id is not None
        assert service.get_category(created.id).id == created.id
        assert service.get_category(created.id).id == created.id
        assert [c.id for c in service.list_categories()] == [created.id]

    def test_get_missing_raises_not_found(self, service):
        with pytest.raises(NotFound) as exc_info:
            service.get_category(1)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Category not found"


class TestCategoryCreate:

    def test_invalid_payload_is_rejected_before_insert(self, service):
        with pytest.raises(ValidationFailed) as exc_info:
            service.create_category({"title": "ab"})

        assert set(exc_info.value.errors) == {"title"}
        assert service.list_categories() == []

    def test_client_supplied_id_is_ignored(self, service):
        created = service.create_category({"id": 42, "title": "Books"})

        assert created.id != 42

    def test_store_failure_becomes_persistence_failed(self, service, monkeypatch):
        def broken_insert(values):
            raise PersistenceError("disk I/O error")

        monkeypatch.setattr(service._repo, "insert", broken_insert)

        with pytest.raises(PersistenceFailed) as exc_info:
            service.create_category({"title": "Books"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Could not create category"


class TestCategoryUpdate:

    def test_update_replaces_title(self, service):
        created = service.create_category({"title": "Books"})

        updated = service.update_category(created.id, {"id": created.id, "title": "Novels"})

        assert updated.title == "Novels"
        assert updated.version == created.version + 1

    @pytest.mark.parametrize("body_id", [None, 2, "1", True])
    def test_id_mismatch_is_not_found(self, service, body_id):
        created = service.create_category({"title": "Books"})
        data = {"title": "Novels"}
        if body_id is not None:
            data["id"] = body_id

        with pytest.raises(NotFound):
            service.update_category(created.id, data)

        assert service.get_category(created.id).title == "Books"

    def test_id_mismatch_wins_over_validation(self, service):
        """Identity is checked before the fields, even when they are invalid."""
        with pytest.raises(NotFound):
            service.update_category(1, {"id": 2, "title": "x"})

    def test_invalid_fields_on_update(self, service):
        created = service.create_category({"title": "Books"})

        with pytest.raises(ValidationFailed) as exc_info:
            service.update_category(created.id, {"id": created.id, "title": ""})

        assert set(exc_info.value.errors) == {"title"}

    def test_stale_version_conflicts(self, service):
        created = service.create_category({"title": "Books"})
        service.update_category(created.id, {"id": created.id, "title": "Novels"})

        with pytest.raises(ConcurrencyConflict) as exc_info:
            service.update_category(
                created.id,
                {"id": created.id, "title": "Comics", "version": created.version},
            )

        assert exc_info.value.message == "This record has already been updated"
        assert exc_info.value.status_code == 400

    def test_concurrent_updates_one_wins(self, conn, other_conn):
        """Two callers that read the same version: exactly one update lands."""
        first = CategoryService(conn)
        second = CategoryService(other_conn)
        created = first.create_category({"title": "Books"})
        seen_by_first = first.get_category(created.id).version
        seen_by_second = second.get_category(created.id).version

        first.update_category(
            created.id, {"id": created.id, "title": "Novels", "version": seen_by_first}
        )
        with pytest.raises(ConcurrencyConflict):
            second.update_category(
                created.id, {"id": created.id, "title": "Comics", "version": seen_by_second}
            )

        assert first.get_category(created.id).title == "Novels"

    def test_update_of_missing_record_conflicts(self, service):
        """A matching id for a record that no longer exists is a conflict."""
        with pytest.raises(ConcurrencyConflict):
            service.update_category(5, {"id": 5, "title": "Books"})

    def test_store_failure_on_update(self, service, monkeypatch):
        created = service.create_category({"title": "Books"})

        def broken_replace(record_id, values, expected_version):
            raise PersistenceError("database is locked")

        monkeypatch.setattr(service._repo, "replace", broken_replace)

        with pytest.raises(PersistenceFailed) as exc_info:
            service.update_category(created.id, {"id": created.id, "title": "Novels"})

        assert exc_info.value.message == "Could not update category"


class TestCategoryDelete:

    def test_delete_then_get_is_not_found(self, service):
        created = service.create_category({"title": "Books"})

        service.delete_category(created.id)

        with pytest.raises(NotFound):
            service.get_category(created.id)

    def test_delete_missing_is_not_found(self, service):
        with pytest.raises(NotFound):
            service.delete_category(99)

    def test_store_failure_on_delete(self, service, monkeypatch):
        created = service.create_category({"title": "Books"})

        def broken_delete(record_id):
            raise PersistenceError("database is locked")

        monkeypatch.setattr(service._repo, "delete", broken_delete)

        with pytest.raises(PersistenceFailed) as exc_info:
            service.delete_category(created.id)

        assert exc_info.value.message == "Could not remove category"
