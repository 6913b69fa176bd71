"""Tests for the in-memory store."""

import pytest
from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1 import DELETE_FIELD, SERVER_TIMESTAMP


def test_add_assigns_id_and_roundtrips(db):
    _, ref = db.collection("conditions").add({"name": "Neck Pain"})
    snapshot = db.document(f"conditions/{ref.id}").get()
    assert snapshot.exists
    assert snapshot.to_dict() == {"name": "Neck Pain"}


def test_missing_document(db):
    snapshot = db.document("conditions/nope").get()
    assert not snapshot.exists
    assert snapshot.to_dict() is None


def test_server_timestamp_is_resolved(db):
    db.document("feedback/f1").set({"rating": 5, "submittedAt": SERVER_TIMESTAMP})
    assert db.document("feedback/f1").get().get("submittedAt").tzinfo is not None


def test_set_merge_keeps_other_fields(db):
    ref = db.document("subscriptionPlans/p1")
    ref.set({"name": "Basic", "price": 10})
    ref.set({"price": 12}, merge=True)
    assert ref.get().to_dict() == {"name": "Basic", "price": 12}


def test_set_without_merge_overwrites(db):
    ref = db.document("products/p1")
    ref.set({"name": "Band", "imageUrl": "x"})
    ref.set({"name": "Band"})
    assert ref.get().to_dict() == {"name": "Band"}


def test_delete_field_in_merge(db):
    ref = db.document("products/p1")
    ref.set({"name": "Band", "imageUrl": "x"})
    ref.set({"imageUrl": DELETE_FIELD}, merge=True)
    assert ref.get().to_dict() == {"name": "Band"}


def test_update_missing_document_raises_not_found(db):
    with pytest.raises(NotFound):
        db.document("products/missing").update({"price": 1})


def test_collection_group_spans_parents(db):
    db.collection("users/u1/subscriptions").add({"planName": "A"})
    db.collection("users/u2/subscriptions").add({"planName": "B"})
    db.collection("subscriptionPlans").add({"name": "C"})
    names = sorted(doc.get("planName") for doc in db.collection_group("subscriptions").get())
    assert names == ["A", "B"]


def test_order_by_excludes_documents_missing_the_field(db):
    db.document("feedback/a").set({"rating": 3})
    db.document("feedback/b").set({"rating": 4, "submittedAt": 2})
    db.document("feedback/c").set({"rating": 5, "submittedAt": 1})
    ids = [doc.id for doc in db.collection("feedback").order_by("submittedAt").get()]
    assert ids == ["c", "b"]


def test_query_listener_fires_on_subscribe_and_on_write(db):
    seen = []
    watch = db.collection("products").on_snapshot(lambda docs, changes, read_time: seen.append(len(docs)))
    db.collection("products").add({"name": "Band"})
    db.collection("conditions").add({"name": "Other collection"})
    watch.unsubscribe()
    db.collection("products").add({"name": "Roller"})
    assert seen == [0, 1]


def test_document_listener_sees_deletion(db):
    ref = db.document("contactInformation/main")
    ref.set({"phone": "123"})
    seen = []
    ref.on_snapshot(lambda docs, changes, read_time: seen.append(docs[0].exists))
    ref.delete()
    assert seen == [True, False]


def test_snapshot_data_is_a_copy(db):
    ref = db.document("products/p1")
    ref.set({"tags": ["a"]})
    data = ref.get().to_dict()
    data["tags"].append("b")
    assert ref.get().to_dict() == {"tags": ["a"]}
