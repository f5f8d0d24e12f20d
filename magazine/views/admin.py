# magazine/views/admin.py
import base64
import logging
from typing import Callable, List, Optional, Sequence

from magazine.core.errors import PostValidationError
from magazine.core.session import Identity
from magazine.models.post import (
    Post, StagedImage, POST_CATEGORIES, MIN_POST_IMAGES, MAX_POST_IMAGES
)


def validate_submission(title: str, image_count: int, category: str,
                        categories: Sequence[str] = POST_CATEGORIES,
                        min_images: int = MIN_POST_IMAGES, max_images: int = MAX_POST_IMAGES):
    """
    게시물 등록 전 검증. 실패하면 사용자에게 보여줄 메시지와 함께 PostValidationError를 발생시킵니다.
    """
    if not (title or '').strip():
        raise PostValidationError('제목을 입력해주세요.')
    if image_count == 0:
        raise PostValidationError(f'최소 {min_images}장의 이미지를 선택해주세요.')
    if image_count < min_images or image_count > max_images:
        raise PostValidationError(f'{min_images}~{max_images}장의 이미지를 선택해주세요.')
    if category not in categories:
        raise PostValidationError('올바른 카테고리를 선택해주세요.')


def to_data_url(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


class AdminAuthoringView:
    """
    관리자 게시물 작성 화면의 폼 상태와 제출 과정을 관리합니다.
    """

    def __init__(self, identity: Identity, post_repository, alert: Callable[[str], None],
                 on_back: Callable[[], None] = None, categories: Sequence[str] = POST_CATEGORIES,
                 min_images: int = MIN_POST_IMAGES, max_images: int = MAX_POST_IMAGES):
        self.identity = identity
        self.post_repository = post_repository
        self.alert = alert
        self.on_back = on_back
        self.categories = list(categories)
        self.min_images = min_images
        self.max_images = max_images
        self.loading = False
        self.reset()

    def reset(self):
        """폼을 초기 상태로 되돌립니다."""
        self.title = ''
        self.description = ''
        self.category = self.categories[0]
        self.hashtags: List[str] = []
        self.hashtag_input = ''
        self.images: List[StagedImage] = []

    # --- 해시태그 ---
    def add_hashtag(self) -> bool:
        """입력창에서 Enter를 누른 경우. 비어 있지 않고 중복이 아니면 추가하고 입력창을 비웁니다."""
        tag = self.hashtag_input.strip()
        if not tag:
            return False
        added = tag not in self.hashtags
        if added:
            self.hashtags.append(tag)
        self.hashtag_input = ''
        return added

    def remove_hashtag(self, index: int):
        self.hashtags = [tag for i, tag in enumerate(self.hashtags) if i != index]

    # --- 이미지 ---
    def stage_image(self, filename: str, data: bytes, content_type: str = 'image/jpeg',
                    link: str = '') -> StagedImage:
        image = StagedImage(
            filename=filename,
            data=data,
            content_type=content_type,
            preview=to_data_url(data, content_type),
            link=link,
        )
        self.images.append(image)
        return image

    def update_image_link(self, index: int, link: str):
        self.images[index].link = link

    def remove_image(self, index: int):
        self.images = [image for i, image in enumerate(self.images) if i != index]

    # --- 제출 ---
    def validate(self):
        validate_submission(
            self.title, len(self.images), self.category,
            categories=self.categories, min_images=self.min_images, max_images=self.max_images
        )

    def build_post(self) -> Post:
        return Post(
            title=self.title,
            description=self.description,
            category=self.category,
            hashtags=list(self.hashtags),
            created_by=self.identity.uid,
            views=0,
        )

    def submit(self) -> Optional[str]:
        """검증 후 게시물을 등록합니다. 성공하면 게시물 ID를, 실패하면 None을 반환합니다."""
        try:
            self.validate()
        except PostValidationError as e:
            self.alert(e.message)
            return None

        self.loading = True
        try:
            post_id = self.post_repository.create_post(self.build_post(), list(self.images))
        except Exception as e:
            logging.error(f"게시물 등록 실패: {e}", exc_info=True)
            self.alert(f'게시물 등록에 실패했습니다: {e}')
            return None
        finally:
            self.loading = False

        self.alert('게시물이 성공적으로 등록되었습니다!')
        self.reset()
        return post_id

    def back(self):
        if self.on_back:
            self.on_back()
