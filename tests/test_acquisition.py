from taste.services.acquisition import acquire_taste, training_keys

S3_URL = "https://s3-eu-west-1.amazonaws.com/get-me-a-date-test/photos/channel123/abc.jpg"


def test_training_keys_substitute_photos_prefix(ctx):
    assert training_keys(ctx, S3_URL) == ("photos/channel123/abc.jpg", "train/channel123/abc.jpg")


def test_training_keys_reject_foreign_urls(ctx):
    assert training_keys(ctx, "https://images.example.com/cache/images/abc.jpg") is None
    assert training_keys(ctx, "https://s3.amazonaws.com/other-bucket/photos/c/abc.jpg") is None
    assert training_keys(ctx, None) is None


def test_acquire_copies_then_indexes(ctx, object_store, faces):
    object_store.objects["photos/channel123/abc.jpg"] = b"img"

    indexed = acquire_taste(ctx, [{"url": S3_URL}, {"url": "https://elsewhere/x.jpg"}])

    assert indexed == 1
    copies = [c for c in object_store.calls if c[0] == "copy_object"]
    assert copies == [("copy_object", "get-me-a-date-test", "photos/channel123/abc.jpg", "train/channel123/abc.jpg")]
    assert [f["ExternalImageId"] for f in faces.faces] == ["train/channel123/abc.jpg"]


def test_acquire_purges_group_photos(ctx, object_store, faces):
    object_store.objects["photos/channel123/abc.jpg"] = b"img"
    faces.faces_per_image["train/channel123/abc.jpg"] = 2

    assert acquire_taste(ctx, [{"url": S3_URL}]) == 0
    assert "train/channel123/abc.jpg" not in object_store.objects
    assert "photos/channel123/abc.jpg" in object_store.objects


def test_acquire_nothing(ctx, faces):
    assert acquire_taste(ctx, []) == 0
    assert faces.calls == []
