# magazine/models/activity.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

class ActivityAction(Enum):
    """활동 기록 유형을 정의하는 Enum 클래스"""
    SEARCH = "search"
    VIEW_POST = "view_post"
    CLICK_IMAGE_LINK = "click_image_link"

@dataclass
class ActivityLogEntry:
    """
    Firestore 'activity/{uid}/logs' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    context에는 query, postId, postTitle, link 중 해당하는 필드만 담깁니다.
    """
    action: ActivityAction
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: Any = None  # SERVER_TIMESTAMP

    def to_document(self) -> dict:
        return {
            'action': self.action.value,
            **{k: v for k, v in self.context.items() if v is not None},
            'timestamp': self.timestamp,
        }

@dataclass(frozen=True)
class LogResult:
    """
    ActivityLogger.log의 반환값.
    기록 실패는 예외로 전파되지 않고 error에 담기며, 호출하는 쪽에서 명시적으로 버립니다.
    """
    ok: bool
    entry_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, entry_id: str) -> 'LogResult':
        return cls(ok=True, entry_id=entry_id)

    @classmethod
    def failure(cls, error: Exception) -> 'LogResult':
        return cls(ok=False, error=str(error))
