# magazine/services/storage_service.py
import time
import uuid
import logging
from urllib.parse import quote
from flask import Flask

from magazine.core.firebase import FirebaseClient

# Firebase 웹 SDK의 getDownloadURL과 같은 형식의 URL을 만들기 위한 메타데이터 키
DOWNLOAD_TOKEN_KEY = 'firebaseStorageDownloadTokens'
DOWNLOAD_URL_TEMPLATE = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"


class StorageService:
    """
    Firebase Storage 관련 로직을 담당하는 서비스 클래스입니다.
    게시물 이미지 업로드와 다운로드 URL 조회 기능을 제공합니다.
    """

    def __init__(self, client: FirebaseClient = None):
        """
        실제 버킷 객체는 init_app 메서드를 통해 주입됩니다.
        """
        self.client = client
        self.bucket = None

    def init_app(self, app: Flask, client: FirebaseClient = None):
        """
        Flask 앱 초기화 과정에서 호출되어 Storage 버킷을 설정합니다.

        :param app: Flask 애플리케이션 객체
        :param client: 초기화가 끝난 FirebaseClient
        """
        client = client or self.client
        if client is None:
            raise ValueError("StorageService에는 FirebaseClient가 필요합니다.")
        self.client = client
        self.bucket = client.bucket
        logging.info("StorageService: Firebase Storage 서비스가 성공적으로 초기화되었습니다.")

    @staticmethod
    def build_post_image_path(index: int, filename: str, timestamp_ms: int = None) -> str:
        """`posts/{현재시각ms}_{순번}_{원본파일명}` 형식의 저장 경로를 만듭니다."""
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"posts/{timestamp_ms}_{index}_{filename}"

    def upload_bytes(self, path: str, data: bytes, content_type: str) -> str:
        """
        바이트 데이터를 지정한 경로에 업로드합니다.
        다운로드 URL 발급을 위해 토큰을 메타데이터에 함께 기록합니다.

        :return: 업로드된 파일 경로
        """
        self._ensure_bucket()
        blob = self.bucket.blob(path)
        blob.metadata = {DOWNLOAD_TOKEN_KEY: str(uuid.uuid4())}
        blob.upload_from_string(data, content_type=content_type)
        logging.info(f"Storage 업로드 완료: {path} ({len(data)} bytes)")
        return path

    def get_download_url(self, path: str) -> str:
        """
        업로드된 파일의 공개 다운로드 URL을 반환합니다.

        :param path: 버킷 내 파일 경로
        """
        self._ensure_bucket()
        blob = self.bucket.get_blob(path)
        if blob is None:
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {path}")

        token = (blob.metadata or {}).get(DOWNLOAD_TOKEN_KEY)
        if not token:
            # 토큰 없이 올라간 파일은 새 토큰을 발급해 저장합니다.
            token = str(uuid.uuid4())
            blob.metadata = {**(blob.metadata or {}), DOWNLOAD_TOKEN_KEY: token}
            blob.patch()

        # 토큰이 여러 개면 첫 번째를 사용합니다.
        token = token.split(',')[0]
        return DOWNLOAD_URL_TEMPLATE.format(
            bucket=self.bucket.name, path=quote(path, safe=''), token=token
        )

    def _ensure_bucket(self):
        if not self.bucket:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")
