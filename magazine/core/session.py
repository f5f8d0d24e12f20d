# magazine/core/session.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Identity:
    """인증된 사용자. Firebase uid와 Google 프로필 정보를 담습니다."""
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


class AuthState(Enum):
    UNKNOWN = "UNKNOWN"
    SIGNED_OUT = "SIGNED_OUT"
    SIGNED_IN = "SIGNED_IN"


@dataclass(frozen=True)
class AuthSession:
    """
    현재 인증 상태를 나타내는 값 객체.
    - UNKNOWN: 첫 인증 상태 콜백을 기다리는 중
    - SIGNED_OUT: 로그아웃했거나 로그인한 적 없음
    - SIGNED_IN: identity가 반드시 존재
    """
    state: AuthState
    identity: Optional[Identity] = None

    def __post_init__(self):
        if (self.state is AuthState.SIGNED_IN) != (self.identity is not None):
            raise ValueError("SIGNED_IN 상태에서만 identity를 가질 수 있습니다.")

    @classmethod
    def unknown(cls) -> 'AuthSession':
        return cls(AuthState.UNKNOWN)

    @classmethod
    def signed_out(cls) -> 'AuthSession':
        return cls(AuthState.SIGNED_OUT)

    @classmethod
    def signed_in(cls, identity: Identity) -> 'AuthSession':
        return cls(AuthState.SIGNED_IN, identity)

    @property
    def is_signed_in(self) -> bool:
        return self.state is AuthState.SIGNED_IN

    @property
    def is_resolved(self) -> bool:
        return self.state is not AuthState.UNKNOWN


AuthCallback = Callable[[AuthSession], None]


class AuthStateNotifier:
    """
    인증 상태 변경을 구독자에게 전달하는 옵저버.
    subscribe는 구독 해제 함수를 반환하며, 이미 상태가 확정된 경우 현재 상태를 즉시 전달합니다.
    """

    def __init__(self):
        self._subscribers: List[AuthCallback] = []
        self._current = AuthSession.unknown()

    @property
    def current(self) -> AuthSession:
        return self._current

    def subscribe(self, callback: AuthCallback) -> Callable[[], None]:
        self._subscribers.append(callback)
        if self._current.is_resolved:
            self._deliver(callback, self._current)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, session: AuthSession):
        self._current = session
        for callback in list(self._subscribers):
            self._deliver(callback, session)

    def _deliver(self, callback: AuthCallback, session: AuthSession):
        # 한 구독자의 오류가 다른 구독자에게 전달되는 것을 막지 않도록 합니다.
        try:
            callback(session)
        except Exception as e:
            logging.error(f"인증 상태 콜백 실행 실패 ({session.state.value}): {e}", exc_info=True)
