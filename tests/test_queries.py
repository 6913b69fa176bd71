"""Tests for query and document descriptors."""

import pytest

from app.store.queries import DESCENDING, DocumentDescriptor, QueryDescriptor, split_path


def test_split_path_ignores_outer_slashes():
    assert split_path("/therapists/t1/appointments/") == ("therapists", "t1", "appointments")


def test_equal_descriptors_compare_equal():
    a = QueryDescriptor.collection("feedback").order_by("submittedAt", DESCENDING)
    b = QueryDescriptor.collection("/feedback").order_by("submittedAt", DESCENDING)
    assert a == b
    assert hash(a) == hash(b)


def test_different_filters_are_different_targets():
    base = QueryDescriptor.collection("treatmentGuides")
    assert base.where("slug", "in", ["a"]) != base.where("slug", "in", ["b"])
    assert base != base.limited(5)


def test_list_filter_values_are_frozen():
    descriptor = QueryDescriptor.collection("treatmentGuides").where("slug", "in", ["a", "b"])
    assert descriptor.filters[0].value == ("a", "b")
    assert descriptor.filters[0].to_field_filter().value == ["a", "b"]


def test_collection_rejects_document_path():
    with pytest.raises(ValueError):
        QueryDescriptor.collection("therapists/t1")


def test_collection_group_is_flagged():
    descriptor = QueryDescriptor.collection_group("subscriptions")
    assert descriptor.group is True
    assert descriptor.collection_id == "subscriptions"


def test_invalid_order_direction():
    with pytest.raises(ValueError):
        QueryDescriptor.collection("products").order_by("price", "sideways")


def test_document_descriptor_parts():
    target = DocumentDescriptor.of("users", "u1", "subscriptions", "s1")
    assert target.path == "users/u1/subscriptions/s1"
    assert target.document_id == "s1"
    assert target.collection_path == "users/u1/subscriptions"
    assert target == DocumentDescriptor("/users/u1/subscriptions/s1")


def test_document_descriptor_rejects_collection_path():
    with pytest.raises(ValueError):
        DocumentDescriptor("users/u1/subscriptions")


def test_build_against_local_store(db):
    db.collection("products").add({"name": "Band", "price": 10})
    db.collection("products").add({"name": "Roller", "price": 25})
    db.collection("products").add({"name": "Mat", "price": 40})

    query = QueryDescriptor.collection("products").where("price", ">", 15).order_by("price", DESCENDING)
    names = [doc.get("name") for doc in query.build(db).get()]
    assert names == ["Mat", "Roller"]
