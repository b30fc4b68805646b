"""In-memory stand-ins for the S3 and Rekognition wrappers and the HTTP session."""

import itertools

from taste.services.clients import FaceRecognitionError


class FakeObjectStore:
    def __init__(self, buckets=None):
        self.buckets = list(buckets or [])
        self.objects = {}
        self.calls = []

    def list_buckets(self):
        self.calls.append(("list_buckets",))
        return list(self.buckets)

    def create_bucket(self, bucket):
        self.calls.append(("create_bucket", bucket))
        self.buckets.append(bucket)

    def list_objects(self, bucket, prefix):
        self.calls.append(("list_objects", bucket, prefix))
        return sorted(k for k in self.objects if k.startswith(prefix))

    def put_object(self, bucket, key, body, content_type="image/jpeg"):
        self.calls.append(("put_object", bucket, key))
        self.objects[key] = body

    def delete_object(self, bucket, key):
        self.calls.append(("delete_object", bucket, key))
        self.objects.pop(key, None)

    def copy_object(self, bucket, src_key, dst_key):
        self.calls.append(("copy_object", bucket, src_key, dst_key))
        self.objects[dst_key] = self.objects.get(src_key, b"")


class FakeFaceRecognition:
    """
    Rekognition en memoria. `faces_per_image` dice cuántas caras detecta cada key
    (1 por defecto); `errors` fuerza un FaceErrorKind para index/search de una key.
    """

    def __init__(self, collections=None):
        self.collections = list(collections or [])
        self.faces = []
        self.faces_per_image = {}
        self.errors = {}
        self.similarities = {}
        self.delete_error = None
        self.calls = []
        self._ids = itertools.count(1)

    def add_face(self, key):
        face_id = f"face-{next(self._ids)}"
        self.faces.append({"FaceId": face_id, "ExternalImageId": key})
        return face_id

    def _raise_for(self, key):
        kind = self.errors.get(key)
        if kind:
            raise FaceRecognitionError(kind, kind.value, f"{kind.value} for {key}")

    def list_collections(self):
        self.calls.append(("list_collections",))
        return list(self.collections)

    def create_collection(self, collection_id):
        self.calls.append(("create_collection", collection_id))
        self.collections.append(collection_id)

    def list_faces(self, collection_id):
        self.calls.append(("list_faces", collection_id))
        return [dict(f) for f in self.faces]

    def index_faces(self, collection_id, bucket, key):
        self.calls.append(("index_faces", collection_id, bucket, key))
        self._raise_for(key)
        return [self.add_face(key) for _ in range(self.faces_per_image.get(key, 1))]

    def delete_faces(self, collection_id, face_ids):
        self.calls.append(("delete_faces", collection_id, list(face_ids)))
        if self.delete_error:
            raise FaceRecognitionError(self.delete_error, self.delete_error.value, "delete failed")
        ids = set(face_ids)
        self.faces = [f for f in self.faces if f["FaceId"] not in ids]
        return len(ids)

    def search_faces_by_image(self, collection_id, bucket, key):
        self.calls.append(("search_faces_by_image", collection_id, bucket, key))
        self._raise_for(key)
        return list(self.similarities.get(key, []))


class FakeResponse:
    def __init__(self, status_code=200, content=b"", reason="OK"):
        self.status_code = status_code
        self.content = content
        self.reason = reason


class FakeHttp:
    def __init__(self, default=None):
        self.responses = {}
        self.default = default or FakeResponse(content=b"jpeg-bytes")
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        return self.responses.get(url, self.default)


