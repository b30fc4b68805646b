import re

import pytest

from taste.services.provisioning import ensure_bucket, ensure_collection, resolve_resource_name


def test_configured_name_wins():
    assert resolve_resource_name("mine", ["get-me-a-date-1"], "get-me-a-date-") == "mine"


def test_existing_prefixed_name_is_reused():
    assert resolve_resource_name(None, ["other", "get-me-a-date-1-2"], "get-me-a-date-") == "get-me-a-date-1-2"


def test_new_name_is_minted():
    name = resolve_resource_name(None, ["other"], "get-me-a-date-")
    assert re.fullmatch(r"get-me-a-date-\d{13}-\d", name)


def test_existing_resources_are_not_created(ctx, object_store, faces):
    assert ensure_bucket(ctx) == "get-me-a-date-test"
    assert ensure_collection(ctx) == "get-me-a-date-test"

    assert not [c for c in object_store.calls if c[0] == "create_bucket"]
    assert not [c for c in faces.calls if c[0] == "create_collection"]


def test_missing_resources_are_created(ctx, object_store, faces):
    ctx.bucket = None
    ctx.collection = None
    object_store.buckets = ["unrelated"]
    faces.collections = []

    bucket = ensure_bucket(ctx)
    collection = ensure_collection(ctx)

    assert bucket.startswith("get-me-a-date-")
    assert ctx.bucket == bucket
    assert ("create_bucket", bucket) in object_store.calls
    assert ("create_collection", collection) in faces.calls


def test_create_failure_propagates(ctx, faces):
    ctx.collection = "configured"

    def boom(collection_id):
        raise RuntimeError("denied")
    faces.create_collection = boom

    with pytest.raises(RuntimeError):
        ensure_collection(ctx)
