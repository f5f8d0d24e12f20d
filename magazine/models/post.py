# magazine/models/post.py
from dataclasses import dataclass, field, asdict
from typing import Optional, List

# 게시물 카테고리는 이 목록 안에서만 고를 수 있습니다.
POST_CATEGORIES = ['보드게임', '향수', '칵테일', '음악', '영화', '기타']
DEFAULT_POST_CATEGORY = POST_CATEGORIES[0]
MIN_POST_IMAGES = 1
MAX_POST_IMAGES = 5

@dataclass
class ImageRef:
    """Post 문서 내부에 저장될 이미지 정보. 부모 게시물에 종속됩니다."""
    url: str
    link: str = ''
    order: int = 0

@dataclass
class StagedImage:
    """업로드 전 관리자 화면에 올려둔 이미지 (원본 데이터 + 미리보기 + 링크)."""
    filename: str
    data: bytes
    content_type: str = 'application/octet-stream'
    preview: Optional[str] = None  # data URL
    link: str = ''

@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    images는 1~5개이며, 생성 이후 이 앱에서 수정/삭제하지 않습니다.
    """
    title: str
    category: str
    created_by: str
    description: str = ''
    hashtags: List[str] = field(default_factory=list)
    images: List[ImageRef] = field(default_factory=list)
    views: int = 0

    def to_document(self) -> dict:
        """Firestore 필드명(camelCase)으로 변환합니다. 타임스탬프는 저장 시점에 추가됩니다."""
        return {
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'hashtags': list(self.hashtags),
            'images': [asdict(image) for image in self.images],
            'createdBy': self.created_by,
            'views': self.views,
        }
