# 파일 경로: magazine/services/google_auth_service.py

import logging
import requests
from typing import Callable, Optional
from firebase_admin import auth as firebase_auth
from google_auth_oauthlib.flow import Flow

from magazine.core.errors import AuthenticationError
from magazine.core.firebase import FirebaseClient
from magazine.core.session import Identity, AuthSession, AuthStateNotifier, AuthCallback

GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
    "openid"
]


class GoogleAuthService:
    """
    Firebase Auth / Google OAuth 2.0 통신을 담당하는 서비스 클래스입니다.
    클라이언트의 Google 팝업 로그인 결과(ID 토큰 또는 인증 코드)를 검증해 Identity로 바꿉니다.
    """
    _user_info_url = "https://www.googleapis.com/oauth2/v3/userinfo"

    def __init__(self, client: FirebaseClient, client_secrets_path: Optional[str] = None,
                 redirect_uri: str = 'postmessage'):
        self.client = client
        self.client_secrets_path = client_secrets_path
        self.redirect_uri = redirect_uri

    def verify_id_token(self, id_token: str) -> Identity:
        """Google 팝업 로그인으로 발급된 Firebase ID 토큰을 검증합니다."""
        try:
            decoded = firebase_auth.verify_id_token(id_token, app=self.client.app)
        except Exception as e:
            logging.error(f"Firebase ID 토큰 검증 실패: {e}", exc_info=True)
            raise AuthenticationError(str(e)) from e

        return Identity(
            uid=decoded['uid'],
            email=decoded.get('email'),
            display_name=decoded.get('name'),
            photo_url=decoded.get('picture'),
        )

    def exchange_code_for_identity(self, auth_code: str) -> Identity:
        """
        인증 코드를 Access Token으로 교환하고, Google 사용자 정보로 Firebase 사용자를 찾거나 만듭니다.
        """
        if not self.client_secrets_path:
            raise AuthenticationError("GOOGLE_CLIENT_SECRETS_PATH is not configured.")

        try:
            flow = Flow.from_client_secrets_file(self.client_secrets_path, scopes=GOOGLE_SCOPES)
            flow.redirect_uri = self.redirect_uri
            flow.fetch_token(code=auth_code)

            response = requests.get(
                GoogleAuthService._user_info_url,
                headers={"Authorization": f"Bearer {flow.credentials.token}"},
                timeout=10
            )
            response.raise_for_status()
            user_info = response.json()
        except Exception as e:
            logging.error(f"Google OAuth failed: {e}", exc_info=True)
            raise AuthenticationError(str(e)) from e

        return self._identity_from_google_user_info(user_info)

    def _identity_from_google_user_info(self, user_info: dict) -> Identity:
        email = user_info.get('email')
        if not email:
            raise AuthenticationError("Google 사용자 정보에 이메일이 없습니다.")

        try:
            user = firebase_auth.get_user_by_email(email, app=self.client.app)
        except firebase_auth.UserNotFoundError:
            user = firebase_auth.create_user(
                email=email,
                display_name=user_info.get('name'),
                photo_url=user_info.get('picture'),
                app=self.client.app
            )
            logging.info(f"Firebase Auth 사용자 생성 (uid: {user.uid})")

        return Identity(
            uid=user.uid,
            email=user.email,
            display_name=user.display_name,
            photo_url=user.photo_url,
        )

    def revoke(self, uid: str):
        """사용자의 Firebase refresh token을 모두 무효화합니다."""
        try:
            firebase_auth.revoke_refresh_tokens(uid, app=self.client.app)
        except firebase_auth.UserNotFoundError:
            logging.warning(f"Firebase Auth에 없는 사용자입니다 (uid: {uid}).")


class AuthClient:
    """
    한 클라이언트(브라우저 탭) 단위의 로그인 상태를 관리합니다.
    로그인/로그아웃 결과를 AuthStateNotifier로 구독자에게 전달합니다.
    """

    def __init__(self, google_auth: GoogleAuthService, notifier: AuthStateNotifier = None):
        self.google_auth = google_auth
        self.notifier = notifier or AuthStateNotifier()

    @property
    def current_session(self) -> AuthSession:
        return self.notifier.current

    def sign_in(self, id_token: str = None, auth_code: str = None) -> Identity:
        """ID 토큰 또는 인증 코드로 로그인합니다. 실패 시 AuthenticationError를 발생시킵니다."""
        if id_token:
            identity = self.google_auth.verify_id_token(id_token)
        elif auth_code:
            identity = self.google_auth.exchange_code_for_identity(auth_code)
        else:
            raise AuthenticationError("id_token 또는 auth_code가 필요합니다.")

        self.notifier.publish(AuthSession.signed_in(identity))
        return identity

    def sign_out(self):
        session = self.notifier.current
        if session.is_signed_in:
            self.google_auth.revoke(session.identity.uid)
        self.notifier.publish(AuthSession.signed_out())

    def restore(self, identity: Optional[Identity]):
        """저장된 세션을 복원하거나 없음을 확정해 첫 인증 상태를 전달합니다."""
        if identity:
            self.notifier.publish(AuthSession.signed_in(identity))
        else:
            self.notifier.publish(AuthSession.signed_out())

    def on_auth_state_changed(self, callback: AuthCallback) -> Callable[[], None]:
        return self.notifier.subscribe(callback)
