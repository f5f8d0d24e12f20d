# magazine/utils/datetime_utils.py
"""
Firestore 문서와 파이썬 값 사이의 시간 변환 유틸리티

저장할 때와 읽을 때 모두 UTC timezone-aware datetime을 기준으로 합니다.
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class DateTimeUtils:
    """Firestore 시간 필드 변환 모음"""

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def for_firestore(value: Any) -> Any:
        """
        저장 직전 값을 정리합니다.
        date는 그날 0시(UTC)로, naive datetime은 UTC로 간주하며 dict/list는 재귀적으로 처리합니다.
        """
        if isinstance(value, datetime):
            return _as_utc(value)
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, dict):
            return {key: DateTimeUtils.for_firestore(item) for key, item in value.items()}
        if isinstance(value, list):
            return [DateTimeUtils.for_firestore(item) for item in value]
        return value

    @staticmethod
    def from_firestore(value: Any) -> Any:
        """
        읽어온 문서의 DatetimeWithNanoseconds, Timestamp 등을 UTC datetime으로 바꿉니다.
        변환할 수 없는 값은 그대로 둡니다.
        """
        if isinstance(value, datetime):
            return _as_utc(value)
        if isinstance(value, dict):
            return {key: DateTimeUtils.from_firestore(item) for key, item in value.items()}
        if isinstance(value, list):
            return [DateTimeUtils.from_firestore(item) for item in value]
        to_timestamp = getattr(value, 'timestamp', None)
        if callable(to_timestamp):
            try:
                return datetime.fromtimestamp(to_timestamp(), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning(f"Firestore 시간 값 변환 실패: {value!r} - {e}")
        return value

    @staticmethod
    def snapshot_to_dict(snapshot, id_field: str = 'id') -> Dict[str, Any]:
        """문서 스냅샷을 `{id_field: 문서 ID, ...필드}` 형태의 딕셔너리로 바꿉니다."""
        return {id_field: snapshot.id, **DateTimeUtils.from_firestore(snapshot.to_dict() or {})}


def for_firestore(value: Any) -> Any:
    return DateTimeUtils.for_firestore(value)

def from_firestore(value: Any) -> Any:
    return DateTimeUtils.from_firestore(value)

def snapshot_to_dict(snapshot, id_field: str = 'id') -> Dict[str, Any]:
    return DateTimeUtils.snapshot_to_dict(snapshot, id_field)
