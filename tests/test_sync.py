from taste.services.clients import FaceErrorKind
from taste.services.sync import plan_sync, sync_bucket_and_collection


def _train(object_store, *keys):
    for key in keys:
        object_store.objects[key] = b"img"


def test_plan_sync_only_deletes_images_that_have_faces():
    faces = [
        {"FaceId": "f1", "ExternalImageId": "train/a.jpg"},
        {"FaceId": "f2", "ExternalImageId": "train/gone.jpg"},
        {"FaceId": "f3", "ExternalImageId": "train/gone.jpg"},
    ]
    faces_to_delete, images_to_index = plan_sync(faces, ["train/a.jpg", "train/new.jpg"])

    assert sorted(faces_to_delete) == ["f2", "f3"]
    assert images_to_index == ["train/new.jpg"]


def test_sync_indexes_new_images_and_deletes_removed_ones(ctx, object_store, faces):
    _train(object_store, "train/c1/a.jpg", "train/c1/b.jpg")
    faces.add_face("train/c1/a.jpg")
    faces.add_face("train/c1/removed.jpg")

    report = sync_bucket_and_collection(ctx)

    assert report.deleted == 1
    assert report.indexed == 1
    assert report.total == 2
    assert {f["ExternalImageId"] for f in faces.faces} == {"train/c1/a.jpg", "train/c1/b.jpg"}


def test_sync_is_idempotent(ctx, object_store, faces):
    _train(object_store, "train/c1/a.jpg", "train/c1/b.jpg", "train/c1/group.jpg")
    faces.faces_per_image["train/c1/group.jpg"] = 3
    faces.add_face("train/c1/old.jpg")

    first = sync_bucket_and_collection(ctx)
    assert first.deleted == 1
    assert first.indexed == 2

    faces.calls.clear()
    second = sync_bucket_and_collection(ctx)

    assert second.deleted == 0
    assert second.indexed == 0
    assert second.total == 2
    assert not [c for c in faces.calls if c[0] in ("delete_faces", "index_faces")]


def test_sync_leaves_exactly_one_face_per_indexed_image(ctx, object_store, faces):
    _train(object_store, "train/c1/a.jpg", "train/c1/pair.jpg", "train/c1/empty.jpg")
    faces.faces_per_image["train/c1/pair.jpg"] = 2
    faces.faces_per_image["train/c1/empty.jpg"] = 0

    sync_bucket_and_collection(ctx)

    image_ids = [f["ExternalImageId"] for f in faces.faces]
    assert image_ids == ["train/c1/a.jpg"]
    assert sorted(object_store.objects) == ["train/c1/a.jpg"]


def test_sync_swallows_delete_failures(ctx, object_store, faces):
    faces.add_face("train/c1/removed.jpg")
    faces.delete_error = FaceErrorKind.THROTTLED

    report = sync_bucket_and_collection(ctx)

    assert report.deleted == 0
    assert report.total == 1
