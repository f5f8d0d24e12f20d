"""
conftest.py

Firestore / Storage 를 메모리에서 흉내 내는 가짜 객체와 Flask 테스트 클라이언트 픽스처.
"""
import copy
import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from firebase_admin import firestore
from flask_jwt_extended import create_access_token
from google.api_core.exceptions import AlreadyExists, NotFound

from magazine import create_app
from magazine.core.session import Identity


# ────────────────────────── Firestore ──────────────────────────
class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, db, path):
        self._db = db
        self.path = path
        self.id = path.split('/')[-1]

    def collection(self, name):
        return FakeCollectionReference(self._db, f"{self.path}/{name}")

    def get(self, **kwargs):
        self._db.check(self.path)
        return FakeSnapshot(self.id, self._db.docs.get(self.path))

    def set(self, data, merge=False):
        self._db.check(self.path)
        self._db.docs[self.path] = self._db.resolve(data)

    def create(self, data):
        self._db.check(self.path)
        if self.path in self._db.docs:
            raise AlreadyExists(f"Document already exists: {self.path}")
        self._db.docs[self.path] = self._db.resolve(data)

    def update(self, data):
        self._db.check(self.path)
        if self.path not in self._db.docs:
            raise NotFound(f"No document to update: {self.path}")
        self._db.docs[self.path].update(self._db.resolve(data))


class FakeQuery:
    def __init__(self, collection, orders=None, limit_count=None):
        self._collection = collection
        self._orders = orders or []
        self._limit = limit_count

    def order_by(self, field, direction='ASCENDING'):
        return FakeQuery(self._collection, self._orders + [(field, direction)], self._limit)

    def limit(self, count):
        return FakeQuery(self._collection, self._orders, count)

    def stream(self):
        snapshots = self._collection._snapshots()
        for field, direction in reversed(self._orders):
            snapshots.sort(key=lambda snap: snap.to_dict().get(field), reverse=(direction == firestore.Query.DESCENDING))
        if self._limit is not None:
            snapshots = snapshots[:self._limit]
        return iter(snapshots)


class FakeCollectionReference(FakeQuery):
    def __init__(self, db, path):
        super().__init__(self)
        self._db = db
        self.path = path

    def document(self, doc_id=None):
        return FakeDocumentReference(self._db, f"{self.path}/{doc_id or uuid.uuid4().hex[:20]}")

    def add(self, data):
        doc_ref = self.document()
        doc_ref.set(data)
        return datetime.now(timezone.utc), doc_ref

    def _snapshots(self):
        self._db.check(self.path)
        depth = self.path.count('/') + 1
        return [
            FakeSnapshot(path.split('/')[-1], data)
            for path, data in self._db.docs.items()
            if path.startswith(self.path + '/') and path.count('/') == depth
        ]


class FakeWriteBatch:
    def __init__(self, db):
        self._db = db
        self._writes = []

    def set(self, doc_ref, data, merge=False):
        self._writes.append((doc_ref, data))

    def commit(self):
        self._db.commits += 1
        for doc_ref, data in self._writes:
            doc_ref.set(data)
        self._writes = []


class FakeFirestore:
    """SERVER_TIMESTAMP는 기록할 때마다 2024-01-01 UTC부터 1초씩 증가하는 시각으로 바뀝니다."""

    def __init__(self):
        self.docs = {}
        self.commits = 0
        self.failing_prefixes = set()
        self._clock = itertools.count(1)
        self._base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def collection(self, name):
        return FakeCollectionReference(self, name)

    def batch(self):
        return FakeWriteBatch(self)

    def fail_on(self, prefix):
        self.failing_prefixes.add(prefix)

    def check(self, path):
        for prefix in self.failing_prefixes:
            if path.startswith(prefix):
                raise RuntimeError(f"firestore unavailable: {path}")

    def resolve(self, data):
        now = self._base + timedelta(seconds=next(self._clock))
        return {
            key: (now if value is firestore.SERVER_TIMESTAMP else copy.deepcopy(value))
            for key, value in data.items()
        }


# ────────────────────────── Storage ──────────────────────────
class FakeBlob:
    def __init__(self, bucket, name):
        self.bucket = bucket
        self.name = name
        self.metadata = None
        self.data = None
        self.content_type = None
        self.patched = False

    def upload_from_string(self, data, content_type=None):
        if self.bucket.fail_uploads_after is not None and len(self.bucket.blobs) >= self.bucket.fail_uploads_after:
            raise RuntimeError("storage quota exceeded")
        self.data = data
        self.content_type = content_type
        self.bucket.blobs[self.name] = self
        self.bucket.upload_order.append(self.name)

    def patch(self):
        self.patched = True


class FakeBucket:
    def __init__(self, name='magazine-test.appspot.com'):
        self.name = name
        self.blobs = {}
        self.upload_order = []
        self.fail_uploads_after = None

    def blob(self, name):
        return self.blobs.get(name) or FakeBlob(self, name)

    def get_blob(self, name):
        return self.blobs.get(name)


class FakeFirebaseClient:
    def __init__(self):
        self.db = FakeFirestore()
        self.bucket = FakeBucket()
        self.app = None
        self.is_initialized = True
        self.shutdown_called = False

    def initialize(self):
        return self

    def shutdown(self):
        self.shutdown_called = True


# ────────────────────────── fixtures ──────────────────────────
@pytest.fixture
def firebase_client():
    return FakeFirebaseClient()


@pytest.fixture
def app(firebase_client):
    app = create_app('testing', client=firebase_client)
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def identity():
    return Identity(uid='user-1', email='reader@example.com', display_name='독자', photo_url='https://example.com/p.png')


@pytest.fixture
def make_profile(firebase_client):
    """users/{uid} 문서를 직접 만들어 둡니다."""
    def _make(uid, is_admin=False, **fields):
        firebase_client.db.docs[f"users/{uid}"] = {
            'email': fields.get('email', f"{uid}@example.com"),
            'displayName': fields.get('displayName', uid),
            'photoURL': None,
            'isAdmin': is_admin,
            'createdAt': datetime(2024, 1, 1, tzinfo=timezone.utc),
            'lastLogin': datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
    return _make


@pytest.fixture
def make_post(firebase_client):
    """posts/{id} 문서를 직접 만들어 둡니다. created_at 초 단위 값이 클수록 최신입니다."""
    def _make(post_id, title, hashtags=(), images=None, created_at=0, category='보드게임'):
        firebase_client.db.docs[f"posts/{post_id}"] = {
            'title': title,
            'description': '',
            'category': category,
            'hashtags': list(hashtags),
            'images': images if images is not None else [{'url': f"https://img/{post_id}", 'link': '', 'order': 0}],
            'createdBy': 'admin-1',
            'views': 0,
            'createdAt': datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=created_at),
            'updatedAt': datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=created_at),
        }
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(uid='user-1'):
        with app.app_context():
            token = create_access_token(identity=uid)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def activity_logs(firebase_client):
    """activity/{uid}/logs 아래의 기록을 돌려줍니다."""
    def _logs(uid='user-1'):
        prefix = f"activity/{uid}/logs/"
        return [data for path, data in firebase_client.db.docs.items() if path.startswith(prefix)]
    return _logs


@pytest.fixture
def services(firebase_client):
    """Flask 앱 없이 뷰 모델을 구동하기 위한 서비스 묶음."""
    from types import SimpleNamespace
    from magazine.api.activity.services import ActivityLogger
    from magazine.api.posts.services import PostRepository
    from magazine.api.users.services import UserProfileService
    from magazine.services.google_auth_service import AuthClient, GoogleAuthService
    from magazine.services.storage_service import StorageService

    storage = StorageService()
    storage.init_app(None, firebase_client)
    google_auth = GoogleAuthService(firebase_client)
    return SimpleNamespace(
        storage=storage,
        google_auth=google_auth,
        auth_client=AuthClient(google_auth),
        users=UserProfileService(firebase_client),
        posts=PostRepository(firebase_client, storage),
        activity=ActivityLogger(firebase_client),
    )


@pytest.fixture
def fake_firebase_auth(monkeypatch):
    """firebase_admin.auth 호출을 메모리 대역으로 바꿉니다. tokens에 등록된 ID 토큰만 유효합니다."""
    from firebase_admin import auth as firebase_auth

    state = {'tokens': {}, 'revoked': []}

    def verify_id_token(id_token, app=None, check_revoked=False):
        if id_token not in state['tokens']:
            raise ValueError("Invalid ID token")
        return state['tokens'][id_token]

    def revoke_refresh_tokens(uid, app=None):
        state['revoked'].append(uid)

    monkeypatch.setattr(firebase_auth, 'verify_id_token', verify_id_token)
    monkeypatch.setattr(firebase_auth, 'revoke_refresh_tokens', revoke_refresh_tokens)
    return state
