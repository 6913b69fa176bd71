"""Tests for live collection and document subscriptions."""

from app.store.errors import Operation
from app.store.queries import DocumentDescriptor, QueryDescriptor
from app.store.subscriptions import ID_FIELD, CollectionSubscription, DocumentSubscription


def test_collection_subscription_includes_ids(db, bus, policy):
    db.document("conditions/neck-pain").set({"name": "Neck Pain", "slug": "neck-pain"})
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("conditions"))

    assert sub.loading is False
    assert sub.error is None
    assert sub.data == [{"name": "Neck Pain", "slug": "neck-pain", ID_FIELD: "neck-pain"}]


def test_collection_subscription_sees_later_writes(db, bus, policy):
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("products"))
    assert sub.data == []

    db.collection("products").add({"name": "Band"})
    assert [item["name"] for item in sub.data] == ["Band"]


def test_none_target_clears_state_synchronously(db, bus, policy):
    db.collection("products").add({"name": "Band"})
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("products"))
    assert sub.data

    sub.watch(None)
    assert sub.data is None
    assert sub.loading is False
    assert not sub.active

    db.collection("products").add({"name": "Roller"})
    assert sub.data is None


def test_equal_target_does_not_resubscribe(db, bus, policy):
    states = []
    sub = CollectionSubscription(db, bus, policy, on_change=lambda s: states.append(s.loading))
    sub.watch(QueryDescriptor.collection("products"))
    count = len(states)

    sub.watch(QueryDescriptor.collection("products"))
    assert len(states) == count


def test_new_target_replaces_old_watch(db, bus, policy):
    db.document("therapists/t1/availability/2024-06-01").set({"timeSlots": ["09:00"]})
    db.document("therapists/t2/availability/2024-06-01").set({"timeSlots": ["10:00"]})
    sub = DocumentSubscription(db, bus, policy)

    sub.watch(DocumentDescriptor("therapists/t1/availability/2024-06-01"))
    assert sub.data["timeSlots"] == ["09:00"]

    sub.watch(DocumentDescriptor("therapists/t2/availability/2024-06-01"))
    assert sub.data["timeSlots"] == ["10:00"]

    # The first watch is gone.
    db.document("therapists/t1/availability/2024-06-01").set({"timeSlots": ["11:00"]})
    assert sub.data["timeSlots"] == ["10:00"]


def test_document_subscription_missing_is_none(db, bus, policy):
    sub = DocumentSubscription(db, bus, policy)
    sub.watch(DocumentDescriptor("contactInformation/main"))
    assert sub.data is None
    assert sub.loading is False

    db.document("contactInformation/main").set({"phone": "555"})
    assert sub.data == {"phone": "555", ID_FIELD: "main"}


def test_denied_collection_emits_error_with_exact_path(db, bus, policy, captured):
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("contactFormSubmissions"))

    assert sub.data is None
    assert sub.loading is False
    assert sub.error is not None
    assert len(captured) == 1
    assert captured[0].path == "contactFormSubmissions"
    assert captured[0].operation == Operation.LIST


def test_denied_document_reports_get(db, bus, policy, captured, patient):
    sub = DocumentSubscription(db, bus, policy, auth=patient)
    sub.watch(DocumentDescriptor("users/someone-else/subscriptions/s1"))

    assert captured[0].operation == Operation.GET
    assert captured[0].path == "users/someone-else/subscriptions/s1"
    assert captured[0].auth["uid"] == patient.uid


def test_collection_group_requires_admin(db, bus, policy, captured, patient, admin):
    db.collection("users/u1/subscriptions").add({"planName": "Basic"})

    denied = CollectionSubscription(db, bus, policy, auth=patient)
    denied.watch(QueryDescriptor.collection_group("subscriptions"))
    assert denied.error is not None
    assert captured[0].path == "subscriptions"

    allowed = CollectionSubscription(db, bus, policy, auth=admin)
    allowed.watch(QueryDescriptor.collection_group("subscriptions"))
    assert [item["planName"] for item in allowed.data] == ["Basic"]


def test_successful_snapshot_clears_previous_error(db, bus, policy):
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("admins"))
    assert sub.error is not None

    sub.watch(QueryDescriptor.collection("products"))
    assert sub.error is None
    assert sub.data == []


def test_close_stops_updates(db, bus, policy):
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("feedback"))
    sub.close()
    db.collection("feedback").add({"rating": 5})
    assert sub.data is None
    assert sub.target is None


def test_snapshot_state_dict(db, bus, policy):
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("admins"))
    state = sub.snapshot()
    assert state["data"] is None
    assert state["loading"] is False
    assert state["error"]["operation"] == "list"


def test_written_document_arrives_in_next_snapshot(db, bus, policy, writes, admin):
    payload = {"name": "Resistance Band", "description": "Light resistance band", "price": 12.5, "imageUrl": ""}
    sub = CollectionSubscription(db, bus, policy)
    sub.watch(QueryDescriptor.collection("products"))

    result = writes.create("products", payload, admin)
    assert sub.data == [{**payload, ID_FIELD: result.doc_id}]
