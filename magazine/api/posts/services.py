# magazine/api/posts/services.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from firebase_admin import firestore
from typing import Optional, Dict, Any, List

from magazine.core.firebase import FirebaseClient
from magazine.utils.datetime_utils import snapshot_to_dict
from magazine.models.post import Post, ImageRef, StagedImage
from magazine.services.storage_service import StorageService

class PostRepository:
    """
    게시물('posts' 컬렉션) 생성과 조회를 담당하는 서비스 클래스.
    게시물은 생성 이후 수정/삭제하지 않습니다.
    """
    def __init__(self, client: FirebaseClient, storage_service: StorageService, upload_concurrency: int = 1):
        self.db = client.db
        self.posts_ref = self.db.collection('posts')
        self.storage_service = storage_service
        # 1이면 순차 업로드. 업로드 순서와 order 값이 항상 일치합니다.
        self.upload_concurrency = max(1, upload_concurrency)

    def upload_images(self, images: List[StagedImage]) -> List[ImageRef]:
        """
        스테이징된 이미지를 Storage에 올리고 {url, link, order} 목록을 원래 순서대로 반환합니다.
        중간에 실패하면 예외가 전파되며, 이미 올라간 파일은 정리하지 않습니다.
        """
        timestamp_ms = int(time.time() * 1000)

        def _upload(index: int) -> ImageRef:
            image = images[index]
            path = StorageService.build_post_image_path(index, image.filename, timestamp_ms)
            self.storage_service.upload_bytes(path, image.data, image.content_type)
            url = self.storage_service.get_download_url(path)
            return ImageRef(url=url, link=image.link or '', order=index)

        if self.upload_concurrency == 1:
            return [_upload(i) for i in range(len(images))]

        with ThreadPoolExecutor(max_workers=self.upload_concurrency) as executor:
            # map은 입력 순서대로 결과를 돌려주므로 order가 배열 위치와 일치합니다.
            return list(executor.map(_upload, range(len(images))))

    def create_post(self, post: Post, images: List[StagedImage]) -> str:
        """이미지를 업로드한 뒤 게시물 문서를 하나의 batch로 기록하고 문서 ID를 반환합니다."""
        try:
            post.images = self.upload_images(images)

            batch = self.db.batch()
            new_post_ref = self.posts_ref.document()
            batch.set(new_post_ref, {
                **post.to_document(),
                'createdAt': firestore.SERVER_TIMESTAMP,
                'updatedAt': firestore.SERVER_TIMESTAMP,
            })
            batch.commit()

            logging.info(f"게시물 생성 완료 (post_id: {new_post_ref.id}, images: {len(post.images)})")
            return new_post_ref.id
        except Exception as e:
            logging.error(f"게시물 생성 실패 (created_by: {post.created_by}): {e}", exc_info=True)
            raise

    def list_posts(self, limit: int = 20) -> List[Dict[str, Any]]:
        """최신순(createdAt 내림차순)으로 게시물 목록을 조회합니다."""
        try:
            query = self.posts_ref.order_by('createdAt', direction=firestore.Query.DESCENDING).limit(limit)
            return [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logging.error(f"게시물 목록 조회 실패: {e}", exc_info=True)
            raise

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.posts_ref.document(post_id).get()
        except Exception as e:
            logging.error(f"게시물 조회 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise
        if not doc.exists:
            return None
        return snapshot_to_dict(doc)
