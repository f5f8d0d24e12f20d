# magazine/views/feed.py
import logging
from typing import Any, Callable, Dict, List, Optional

from magazine.core.session import Identity
from magazine.models.activity import ActivityAction

SEARCH_LOG_MIN_LENGTH = 2


def filter_posts(posts: List[Dict[str, Any]], search_query: str = '',
                 active_tag: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    이미 불러온 게시물 목록을 메모리에서 거릅니다.
    1. active_tag가 있으면 hashtags에 그 태그가 정확히 포함된 게시물만 남깁니다.
    2. 앞뒤 공백을 뺀 검색어가 있으면 제목이나 해시태그 중 하나에 (대소문자 무시) 포함된 게시물만 남깁니다.
    두 조건은 AND로 결합됩니다.
    """
    result = list(posts)

    if active_tag:
        result = [post for post in result if active_tag in (post.get('hashtags') or [])]

    query = (search_query or '').strip().lower()
    if query:
        result = [
            post for post in result
            if query in (post.get('title') or '').lower()
            or any(query in tag.lower() for tag in (post.get('hashtags') or []))
        ]

    return result


def should_log_search(query: str, min_length: int = SEARCH_LOG_MIN_LENGTH) -> bool:
    """검색어 길이가 min_length를 초과할 때만 검색 기록을 남깁니다."""
    return len(query or '') > min_length


class FeedView:
    """
    홈 피드 화면의 상태(게시물 목록, 검색어, 선택된 해시태그)를 관리합니다.
    """

    def __init__(self, identity: Identity, post_repository, profile_service, activity_logger,
                 on_sign_out: Callable[[], None], page_size: int = 20):
        self.identity = identity
        self.post_repository = post_repository
        self.profile_service = profile_service
        self.activity_logger = activity_logger
        self.on_sign_out = on_sign_out
        self.page_size = page_size

        self.posts: List[Dict[str, Any]] = []
        self.search_query = ''
        self.active_tag: Optional[str] = None
        self.is_admin = False
        self.loading = True

    def load(self):
        """관리자 여부와 게시물 목록을 불러옵니다. 조회 실패 시 빈 목록으로 표시합니다."""
        try:
            self.is_admin = self.profile_service.is_admin(self.identity.uid)
            self.posts = self.post_repository.list_posts(limit=self.page_size)
        except Exception as e:
            logging.error(f"피드 데이터 조회 실패 (uid: {self.identity.uid}): {e}", exc_info=True)
        finally:
            self.loading = False

    @property
    def filtered_posts(self) -> List[Dict[str, Any]]:
        return filter_posts(self.posts, self.search_query, self.active_tag)

    @property
    def has_filter(self) -> bool:
        return bool(self.search_query or self.active_tag)

    @property
    def empty_message(self) -> Optional[str]:
        if self.loading or self.filtered_posts:
            return None
        if self.has_filter:
            return '검색 결과가 없습니다. 다른 단어로 검색해보세요!'
        return '아직 게시물이 없습니다.'

    def set_search(self, query: str):
        self.search_query = query
        if should_log_search(query):
            # 검색 기록 실패는 화면 흐름에 영향을 주지 않습니다.
            _ = self.activity_logger.log(self.identity.uid, ActivityAction.SEARCH, query=query)

    def click_tag(self, tag: str):
        """같은 태그를 다시 누르면 해제하고, 새 태그를 선택하면 검색어를 비웁니다."""
        if self.active_tag == tag:
            self.active_tag = None
        else:
            self.active_tag = tag
            self.search_query = ''

    def clear_filters(self):
        self.search_query = ''
        self.active_tag = None

    def select_post(self, post: Dict[str, Any]) -> Dict[str, Any]:
        _ = self.activity_logger.log(
            self.identity.uid, ActivityAction.VIEW_POST,
            postId=post.get('id'), postTitle=post.get('title')
        )
        return post

    def sign_out(self):
        try:
            self.on_sign_out()
        except Exception as e:
            logging.error(f"로그아웃 실패: {e}", exc_info=True)
