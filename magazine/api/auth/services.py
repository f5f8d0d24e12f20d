# magazine/api/auth/services.py
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Tuple

from magazine.core.firebase import FirebaseClient
from magazine.core.session import Identity
from magazine.services.google_auth_service import GoogleAuthService
from magazine.api.users.services import UserProfileService
from magazine.utils.datetime_utils import DateTimeUtils

class AuthService:
    """
    로그인(프로필 보장)과 JWT 무효화 목록(Blocklist)을 담당하는 서비스 클래스.
    """
    def __init__(self, client: FirebaseClient, google_auth: GoogleAuthService, profile_service: UserProfileService):
        self.db = client.db
        self.revoked_tokens_ref = self.db.collection('revoked_tokens')
        self.google_auth = google_auth
        self.profile_service = profile_service

    def sign_in(self, id_token: str = None, auth_code: str = None) -> Tuple[Identity, Dict[str, Any], bool]:
        """
        Google 로그인 자격 증명을 검증하고 프로필이 없으면 생성합니다.

        :return: (identity, 프로필 데이터, 신규 사용자 여부)
        """
        if id_token:
            identity = self.google_auth.verify_id_token(id_token)
        else:
            identity = self.google_auth.exchange_code_for_identity(auth_code)

        profile, is_new_user = self.profile_service.ensure_profile(identity)
        return identity, profile, is_new_user

    # --- Blocklist 관련 로직 ---
    def add_token_to_blocklist(self, jti: str, expires: datetime):
        """전달받은 토큰의 jti를 만료 시간과 함께 Firestore에 저장합니다."""
        try:
            token_data = {
                'revoked_at': DateTimeUtils.now(),
                'expires_at': expires
            }
            token_data = DateTimeUtils.for_firestore(token_data)
            self.revoked_tokens_ref.document(jti).set(token_data)
        except Exception as e:
            logging.error(f"Blocklist 토큰 추가 실패 (jti: {jti}): {e}")

    def is_token_revoked(self, jwt_payload: dict) -> bool:
        """jti를 이용해 해당 토큰이 무효화 목록에 있는지 확인합니다."""
        jti = jwt_payload['jti']
        doc = self.revoked_tokens_ref.document(jti).get()
        return doc.exists

    def logout_user(self, uid: str, access_jti: str, access_exp: int, refresh_jti: str, refresh_exp: int):
        """Access/Refresh 토큰을 모두 Blocklist에 추가하고 Firebase 세션도 끊습니다."""
        access_expires = datetime.fromtimestamp(access_exp, tz=timezone.utc)
        refresh_expires = datetime.fromtimestamp(refresh_exp, tz=timezone.utc)
        self.add_token_to_blocklist(access_jti, access_expires)
        self.add_token_to_blocklist(refresh_jti, refresh_expires)
        if uid:
            self.google_auth.revoke(uid)
        logging.info(f"사용자 로그아웃 처리 완료. JTI: {access_jti[:8]}..., {refresh_jti[:8]}...")
