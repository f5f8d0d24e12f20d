# magazine/core/firebase.py
import os
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore, storage


class FirebaseClient:
    """
    Firebase Admin 앱, Firestore 클라이언트, Storage 버킷을 한데 묶은 클라이언트 객체.
    모듈 전역 싱글턴 대신 create_app에서 명시적으로 생성되어 각 서비스에 주입됩니다.
    """

    def __init__(self, credentials_path: Optional[str], storage_bucket: Optional[str],
                 project_id: Optional[str] = None, name: str = 'magazine'):
        self.credentials_path = credentials_path
        self.storage_bucket = storage_bucket
        self.project_id = project_id
        self.name = name
        self._app = None
        self._db = None
        self._bucket = None

    @classmethod
    def from_config(cls, config) -> 'FirebaseClient':
        return cls(
            credentials_path=config.get('FIREBASE_CREDENTIALS_PATH'),
            storage_bucket=config.get('FIREBASE_STORAGE_BUCKET'),
            project_id=config.get('FIREBASE_PROJECT_ID'),
        )

    @property
    def is_initialized(self) -> bool:
        return self._app is not None

    def initialize(self) -> 'FirebaseClient':
        """Firebase 앱을 초기화합니다. 이미 초기화된 경우 아무 일도 하지 않습니다."""
        if self.is_initialized:
            return self

        if not self.credentials_path or not os.path.exists(self.credentials_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {self.credentials_path}")
        if not self.storage_bucket:
            raise ValueError("FIREBASE_STORAGE_BUCKET 설정이 .env 또는 설정 파일에 필요합니다.")

        options = {'storageBucket': self.storage_bucket}
        if self.project_id:
            options['projectId'] = self.project_id

        cred = credentials.Certificate(self.credentials_path)
        self._app = firebase_admin.initialize_app(cred, options, name=self.name)
        self._db = firestore.client(app=self._app)
        self._bucket = storage.bucket(self.storage_bucket, app=self._app)
        logging.info(f"FirebaseClient: '{self.name}' 앱이 초기화되었습니다. (bucket: {self.storage_bucket})")
        return self

    def shutdown(self):
        """Firebase 앱을 해제합니다. 테스트나 프로세스 종료 시 호출합니다."""
        if not self.is_initialized:
            return
        firebase_admin.delete_app(self._app)
        self._app = None
        self._db = None
        self._bucket = None
        logging.info(f"FirebaseClient: '{self.name}' 앱이 해제되었습니다.")

    @property
    def app(self):
        self._ensure_initialized()
        return self._app

    @property
    def db(self):
        self._ensure_initialized()
        return self._db

    @property
    def bucket(self):
        self._ensure_initialized()
        return self._bucket

    def _ensure_initialized(self):
        if not self.is_initialized:
            raise RuntimeError("FirebaseClient가 초기화되지 않았습니다. initialize()를 먼저 호출해주세요.")
