# magazine/views/__init__.py
"""
화면 단위 상태 모델 패키지

브라우저 없이도 로그인 -> 홈 -> 상세/관리자 화면 흐름을 그대로 구동할 수 있도록
각 화면의 상태와 동작을 담고 있습니다.
"""

from .controller import RootController, View
from .feed import FeedView, filter_posts, should_log_search
from .post_detail import PostDetailView
from .admin import AdminAuthoringView, validate_submission
from .login import LoginView

__all__ = [
    'RootController', 'View',
    'FeedView', 'filter_posts', 'should_log_search',
    'PostDetailView',
    'AdminAuthoringView', 'validate_submission',
    'LoginView'
]
