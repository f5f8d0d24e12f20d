# magazine/views/controller.py
import logging
import webbrowser
from enum import Enum
from typing import Callable, Optional

from magazine.core.errors import PermissionDeniedError
from magazine.core.session import AuthSession, Identity
from magazine.models.post import POST_CATEGORIES, MIN_POST_IMAGES, MAX_POST_IMAGES
from magazine.views.admin import AdminAuthoringView
from magazine.views.feed import FeedView
from magazine.views.login import LoginView
from magazine.views.post_detail import PostDetailView


class View(Enum):
    LOGGED_OUT = "login"
    HOME = "home"
    POST_DETAIL = "post_detail"
    ADMIN = "admin"


def _log_alert(message: str):
    logging.warning(f"[alert] {message}")


def _open_in_new_tab(url: str):
    webbrowser.open_new_tab(url)


class RootController:
    """
    현재 로그인 사용자와 활성 화면을 관리하는 최상위 컨트롤러.

    화면 전이:
    - LOGGED_OUT -> HOME: 로그인 성공
    - HOME -> POST_DETAIL: 게시물 선택, POST_DETAIL -> HOME: 뒤로가기
    - HOME -> ADMIN: 관리자 아이콘 (isAdmin일 때만), ADMIN -> HOME: 뒤로가기
    - 어떤 화면이든 -> LOGGED_OUT: 로그아웃 이벤트
    화면을 떠나면 해당 화면의 상태는 버려집니다.
    """

    def __init__(self, auth_client, profile_service, post_repository, activity_logger,
                 alert: Callable[[str], None] = _log_alert,
                 open_url: Callable[[str], None] = _open_in_new_tab,
                 config: Optional[dict] = None):
        self.auth_client = auth_client
        self.profile_service = profile_service
        self.post_repository = post_repository
        self.activity_logger = activity_logger
        self.alert = alert
        self.open_url = open_url
        self.config = config or {}

        self.identity: Optional[Identity] = None
        self.loading = True
        self._page = View.HOME
        self._unsubscribe = None

        self.login: Optional[LoginView] = None
        self.feed: Optional[FeedView] = None
        self.detail: Optional[PostDetailView] = None
        self.admin: Optional[AdminAuthoringView] = None

    # --- 생명주기 ---
    def start(self):
        if self._unsubscribe is None:
            self._unsubscribe = self.auth_client.on_auth_state_changed(self._handle_auth_state)

    def stop(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def current_view(self) -> View:
        if self.identity is None:
            return View.LOGGED_OUT
        return self._page

    def _handle_auth_state(self, session: AuthSession):
        if session.is_signed_in:
            self.identity = session.identity
            # 저장된 세션이 복원된 경우에도 프로필이 있어야 홈으로 들어갑니다.
            self._ensure_profile(session.identity)
            self._enter_home()
        else:
            self.identity = None
            self._page = View.HOME
            self.feed = self.detail = self.admin = None
            self.login = LoginView(
                self.auth_client, self.profile_service,
                on_login_success=lambda identity: None, alert=self.alert
            )
        self.loading = False

    def _ensure_profile(self, identity: Identity):
        try:
            self.profile_service.ensure_profile(identity)
        except Exception as e:
            logging.error(f"프로필 확인 실패 (uid: {identity.uid}): {e}", exc_info=True)

    # --- 화면 전이 ---
    def _enter_home(self):
        self._page = View.HOME
        self.detail = None
        self.admin = None
        self.login = None
        self.feed = FeedView(
            self.identity, self.post_repository, self.profile_service, self.activity_logger,
            on_sign_out=self.auth_client.sign_out,
            page_size=self.config.get('POSTS_PAGE_SIZE', 20)
        )
        self.feed.load()

    def open_post(self, post: dict) -> PostDetailView:
        self._require_view(View.HOME)
        self.feed.select_post(post)
        self.detail = PostDetailView(
            self.identity, post, self.activity_logger,
            open_url=self.open_url, on_back=self.back
        )
        self._page = View.POST_DETAIL
        return self.detail

    def open_admin(self) -> AdminAuthoringView:
        self._require_view(View.HOME)
        if not self.feed.is_admin:
            raise PermissionDeniedError("관리자만 접근할 수 있습니다.")
        self.admin = AdminAuthoringView(
            self.identity, self.post_repository, alert=self.alert, on_back=self.back,
            categories=self.config.get('POST_CATEGORIES', POST_CATEGORIES),
            min_images=self.config.get('MIN_POST_IMAGES', MIN_POST_IMAGES),
            max_images=self.config.get('MAX_POST_IMAGES', MAX_POST_IMAGES)
        )
        self._page = View.ADMIN
        return self.admin

    def back(self):
        """상세 화면에서는 기존 피드 상태로, 관리자 화면에서는 새로 불러온 피드로 돌아갑니다."""
        if self.current_view is View.POST_DETAIL:
            self._page = View.HOME
            self.detail = None
        elif self.current_view is View.ADMIN:
            self._enter_home()

    def sign_out(self):
        if self.feed is not None:
            self.feed.sign_out()
        else:
            self.auth_client.sign_out()

    def _require_view(self, view: View):
        if self.current_view is not view:
            raise RuntimeError(f"{view.value} 화면에서만 가능한 동작입니다. (현재: {self.current_view.value})")
