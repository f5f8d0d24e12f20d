# magazine/api/users/services.py
import logging
from typing import Optional, Dict, Any, Tuple
from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from magazine.core.firebase import FirebaseClient
from magazine.utils.datetime_utils import snapshot_to_dict
from magazine.core.session import Identity
from magazine.models.user import UserProfile


class UserProfileService:
    """
    사용자 프로필('users' 컬렉션) 관련 비즈니스 로직을 담당하는 서비스 클래스.
    """
    def __init__(self, client: FirebaseClient):
        self.db = client.db
        self.users_ref = self.db.collection('users')

    def ensure_profile(self, identity: Identity) -> Tuple[Dict[str, Any], bool]:
        """
        로그인한 사용자의 프로필이 없으면 생성합니다.
        DocumentReference.create는 문서가 이미 있으면 실패하므로
        '존재 확인 후 생성' 사이의 경쟁 조건 없이 한 번의 호출로 처리됩니다.

        :return: (프로필 데이터, 신규 생성 여부)
        """
        user_ref = self.users_ref.document(identity.uid)
        profile = UserProfile(
            uid=identity.uid,
            email=identity.email,
            displayName=identity.display_name,
            photoURL=identity.photo_url,
            isAdmin=False,
            createdAt=firestore.SERVER_TIMESTAMP,
            lastLogin=firestore.SERVER_TIMESTAMP,
        )
        try:
            user_ref.create(profile.to_document())
            logging.info(f"신규 사용자 프로필 생성 (uid: {identity.uid})")
            created = True
        except AlreadyExists:
            self.update_last_login(identity.uid)
            created = False
        except Exception as e:
            logging.error(f"사용자 프로필 생성 실패 (uid: {identity.uid}): {e}", exc_info=True)
            raise

        return self.get_profile(identity.uid), created

    def get_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.users_ref.document(uid).get()
        except Exception as e:
            logging.error(f"사용자 프로필 조회 실패 (uid: {uid}): {e}", exc_info=True)
            raise
        if not doc.exists:
            return None
        return snapshot_to_dict(doc, id_field='uid')

    def update_last_login(self, uid: str):
        """마지막 로그인 시각을 갱신합니다. 실패해도 로그인 흐름은 계속됩니다."""
        try:
            self.users_ref.document(uid).update({'lastLogin': firestore.SERVER_TIMESTAMP})
        except Exception as e:
            logging.error(f"마지막 로그인 시각 갱신 실패 (uid: {uid}): {e}")

    def is_admin(self, uid: str) -> bool:
        """isAdmin 플래그가 정확히 True인 경우에만 관리자로 판단합니다."""
        try:
            doc = self.users_ref.document(uid).get()
            return doc.exists and doc.to_dict().get('isAdmin') is True
        except Exception as e:
            logging.error(f"관리자 여부 확인 실패 (uid: {uid}): {e}")
            return False
