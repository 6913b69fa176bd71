"""Tests for the write pipeline and the error bus."""

import logging

import pytest
from google.api_core.exceptions import DeadlineExceeded, RetryError
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from app.store.errors import Operation, StorePermissionError
from app.store.events import PERMISSION_ERROR, ErrorBus
from app.store.policy import ANONYMOUS
from app.store.writes import WritePipeline
from app.utils.exceptions import WriteFailedError


def test_anonymous_admin_grant_is_rejected_once(writes, captured, db):
    result = writes.set("admins/u1", {"addedOn": SERVER_TIMESTAMP}, ANONYMOUS, operation=Operation.CREATE)

    assert result.ok is False
    assert len(captured) == 1
    error = captured[0]
    assert error.path == "admins/u1"
    assert error.operation == Operation.CREATE
    assert error.request_resource_data == {"addedOn": "SERVER_TIMESTAMP"}
    assert error.auth is None
    assert not db.document("admins/u1").get().exists


def test_rejected_create_reports_collection_path(writes, captured):
    result = writes.create("conditions", {"name": "Neck Pain"}, ANONYMOUS)
    assert result.ok is False
    assert result.doc_id is None
    assert captured[0].path == "conditions"
    assert captured[0].operation == Operation.CREATE


def test_public_create_succeeds_without_errors(writes, captured, db):
    result = writes.create("contactFormSubmissions", {"name": "Sam", "submittedAt": SERVER_TIMESTAMP})
    assert result.ok is True
    assert captured == []
    assert db.document(f"contactFormSubmissions/{result.doc_id}").get().exists


def test_admin_merge_and_delete(writes, admin, db):
    writes.set("subscriptionPlans/p1", {"name": "Basic", "price": 10}, admin)
    merged = writes.set("subscriptionPlans/p1", {"price": 15}, admin, merge=True)
    assert merged.operation == Operation.UPDATE
    assert db.document("subscriptionPlans/p1").get().to_dict() == {"name": "Basic", "price": 15}

    deleted = writes.delete("subscriptionPlans/p1", admin)
    assert deleted.ok
    assert deleted.operation == Operation.DELETE
    assert not db.document("subscriptionPlans/p1").get().exists


def test_update_of_missing_document_is_reported(writes, admin, captured):
    result = writes.update("products/missing", {"price": 3}, admin)
    assert result.ok is False
    assert captured[0].operation == Operation.UPDATE
    assert "NotFound" in captured[0].cause


def test_raise_for_error_is_generic(writes):
    result = writes.delete("products/p1", ANONYMOUS)
    with pytest.raises(WriteFailedError) as exc_info:
        result.raise_for_error()
    assert exc_info.value.message == "Your request could not be completed."
    assert exc_info.value.status_code == 403


def test_permission_error_request_shape(patient):
    error = StorePermissionError(
        path="/feedback/f1",
        operation=Operation.UPDATE,
        request_resource_data={"rating": 5},
        auth=patient.to_dict(),
    )
    assert error.request == {
        "auth": {"uid": patient.uid, "email": patient.email, "isAdmin": False},
        "method": "update",
        "path": "/databases/(default)/documents/feedback/f1",
        "resource": {"data": {"rating": 5}},
    }
    assert error.message.startswith("Missing or insufficient permissions")
    assert error.to_dict()["requestResourceData"] == {"rating": 5}


def test_bus_isolates_failing_listener():
    bus = ErrorBus()
    received = []

    def broken(payload):
        raise RuntimeError("listener bug")

    bus.on(PERMISSION_ERROR, broken)
    bus.on(PERMISSION_ERROR, received.append)
    assert bus.emit(PERMISSION_ERROR, "payload") == 2
    assert received == ["payload"]


def test_bus_unsubscribe():
    bus = ErrorBus()
    received = []
    unsubscribe = bus.on(PERMISSION_ERROR, received.append)
    unsubscribe()
    assert bus.emit(PERMISSION_ERROR, "payload") == 0
    assert bus.listener_count(PERMISSION_ERROR) == 0
    assert received == []


def test_diagnostics_keeps_newest_first(writes, diagnostics):
    writes.delete("products/a", ANONYMOUS)
    writes.delete("products/b", ANONYMOUS)
    records = diagnostics.records()
    assert [record["path"] for record in records] == ["products/b", "products/a"]
    diagnostics.clear()
    assert diagnostics.records() == []


class _BrokenDocument:
    def __init__(self, error):
        self._error = error

    def set(self, data, merge=False):
        raise self._error

    def update(self, data):
        raise self._error

    def delete(self):
        raise self._error


class _BrokenStore:
    def __init__(self, error):
        self._error = error

    def document(self, path):
        return _BrokenDocument(self._error)

    def collection(self, path):
        raise self._error


@pytest.mark.parametrize(
    "error",
    [RetryError("Deadline of 60.0s exceeded", DeadlineExceeded("timeout")), ValueError("Cannot convert to a Firestore Value")],
)
def test_store_failures_are_reported_not_raised(bus, captured, policy, admin, error):
    writes = WritePipeline(_BrokenStore(error), bus, policy)

    result = writes.set("products/p1", {"name": "Foam Roller", "price": 25}, admin)

    assert not result.ok
    assert len(captured) == 1
    assert captured[0].path == "products/p1"
    assert captured[0].cause == repr(error)


def test_failed_create_on_broken_store_is_reported(bus, captured, policy):
    writes = WritePipeline(_BrokenStore(RuntimeError("credentials expired")), bus, policy)

    result = writes.create("feedback", {"message": "Great session"})

    assert not result.ok
    assert [error.path for error in captured] == ["feedback"]


def test_diagnostics_logs_structured_warning(writes, diagnostics, caplog):
    with caplog.at_level(logging.WARNING, logger="physiocare"):
        writes.delete("products/a", ANONYMOUS)

    records = [record for record in caplog.records if record.name == "physiocare.app.store.events"]
    assert len(records) == 1
    assert records[0].getMessage() == "Permission denied: delete products/a"
    assert records[0].extra_data["permission_error"]["path"] == "products/a"
