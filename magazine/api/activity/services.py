# magazine/api/activity/services.py
import logging
from firebase_admin import firestore
from typing import Dict, Any, List

from magazine.core.firebase import FirebaseClient
from magazine.utils.datetime_utils import snapshot_to_dict
from magazine.models.activity import ActivityAction, ActivityLogEntry, LogResult


class ActivityLogger:
    """
    사용자별 활동 기록('activity/{uid}/logs')을 남기는 서비스 클래스.
    기록은 부가 정보이므로 실패해도 예외를 던지지 않고 LogResult로 알려줍니다.
    """
    def __init__(self, client: FirebaseClient):
        self.db = client.db
        self.activity_ref = self.db.collection('activity')

    def _logs_ref(self, uid: str):
        return self.activity_ref.document(uid).collection('logs')

    def log(self, uid: str, action: ActivityAction, **context) -> LogResult:
        """
        활동 기록을 추가합니다.

        :param uid: 활동한 사용자 ID
        :param action: 활동 유형 (search, view_post, click_image_link)
        :param context: query, postId, postTitle, link 등 부가 필드
        """
        try:
            entry = ActivityLogEntry(action=action, context=context, timestamp=firestore.SERVER_TIMESTAMP)
            _, doc_ref = self._logs_ref(uid).add(entry.to_document())
            return LogResult.success(doc_ref.id)
        except Exception as e:
            logging.error(f"활동 기록 실패 (uid: {uid}, action: {action.value}): {e}")
            return LogResult.failure(e)

    def list_activity(self, uid: str, limit: int = 50) -> List[Dict[str, Any]]:
        """사용자의 활동 기록을 최신순으로 조회합니다."""
        try:
            query = self._logs_ref(uid).order_by('timestamp', direction=firestore.Query.DESCENDING).limit(limit)
            return [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logging.error(f"활동 기록 조회 실패 (uid: {uid}): {e}", exc_info=True)
            raise
