# magazine/views/login.py
import logging
from typing import Callable, Optional

from magazine.core.session import Identity


class LoginView:
    """Google 로그인 버튼 하나로 이루어진 로그인 화면."""

    def __init__(self, auth_client, profile_service, on_login_success: Callable[[Identity], None],
                 alert: Callable[[str], None]):
        self.auth_client = auth_client
        self.profile_service = profile_service
        self.on_login_success = on_login_success
        self.alert = alert

    def sign_in(self, id_token: str = None, auth_code: str = None) -> Optional[Identity]:
        """
        로그인 후 프로필이 없으면 생성합니다. 실패하면 재시도 없이 알림만 띄웁니다.
        """
        try:
            identity = self.auth_client.sign_in(id_token=id_token, auth_code=auth_code)
            self.profile_service.ensure_profile(identity)
        except Exception as e:
            logging.error(f"Google Sign-In Error: {e}", exc_info=True)
            self.alert(f'로그인에 실패했습니다: {e}')
            return None

        self.on_login_success(identity)
        return identity
