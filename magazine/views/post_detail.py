# magazine/views/post_detail.py
from typing import Any, Callable, Dict

from magazine.core.session import Identity
from magazine.models.activity import ActivityAction


class PostDetailView:
    """게시물 상세 화면. 링크가 있는 이미지를 누르면 기록을 남기고 새 탭으로 엽니다."""

    def __init__(self, identity: Identity, post: Dict[str, Any], activity_logger,
                 open_url: Callable[[str], None], on_back: Callable[[], None]):
        self.identity = identity
        self.post = post
        self.activity_logger = activity_logger
        self.open_url = open_url
        self.on_back = on_back

    @property
    def images(self):
        return sorted(self.post.get('images') or [], key=lambda image: image.get('order', 0))

    def click_image(self, image: Dict[str, Any]) -> bool:
        """링크가 있을 때만 동작하며, 이동했는지 여부를 반환합니다."""
        link = image.get('link')
        if not link:
            return False

        _ = self.activity_logger.log(
            self.identity.uid, ActivityAction.CLICK_IMAGE_LINK,
            postId=self.post.get('id'), link=link
        )
        self.open_url(link)
        return True

    def back(self):
        self.on_back()
