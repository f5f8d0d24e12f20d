# magazine/models/user.py
from dataclasses import dataclass
from typing import Optional, Any

@dataclass
class UserProfile:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 키는 Firebase uid이며, isAdmin은 이 앱에서 변경하지 않습니다.
    """
    uid: str
    email: Optional[str] = None
    displayName: Optional[str] = None
    photoURL: Optional[str] = None
    isAdmin: bool = False
    createdAt: Any = None  # SERVER_TIMESTAMP 또는 Firestore timestamp
    lastLogin: Any = None

    def to_document(self) -> dict:
        """uid를 제외한 Firestore 저장용 딕셔너리를 반환합니다."""
        return {
            'email': self.email,
            'displayName': self.displayName,
            'photoURL': self.photoURL,
            'isAdmin': self.isAdmin,
            'createdAt': self.createdAt,
            'lastLogin': self.lastLogin,
        }
