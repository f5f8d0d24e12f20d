# magazine/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

from magazine.models import post as post_model

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 토큰 서명 키. .env 파일에 정의된 값을 읽어옵니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # Google OAuth 인증 코드 교환에 필요한 클라이언트 시크릿 파일 경로
    GOOGLE_CLIENT_SECRETS_PATH = os.getenv('GOOGLE_CLIENT_SECRETS_PATH')
    GOOGLE_REDIRECT_URI = os.getenv('GOOGLE_REDIRECT_URI', 'postmessage')

    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')
    # 웹 클라이언트(SPA)가 Firebase SDK를 초기화할 때 사용하는 공개 설정값
    FIREBASE_API_KEY = os.getenv('FIREBASE_API_KEY')
    FIREBASE_MESSAGING_SENDER_ID = os.getenv('FIREBASE_MESSAGING_SENDER_ID')
    FIREBASE_APP_ID = os.getenv('FIREBASE_APP_ID')

    # --- 매거진 도메인 상수 ---
    POST_CATEGORIES = post_model.POST_CATEGORIES
    DEFAULT_POST_CATEGORY = post_model.DEFAULT_POST_CATEGORY
    MIN_POST_IMAGES = post_model.MIN_POST_IMAGES
    MAX_POST_IMAGES = post_model.MAX_POST_IMAGES
    # 피드 첫 화면에서 한 번에 가져오는 게시물 수 (추가 페이지네이션 없음)
    POSTS_PAGE_SIZE = 20
    # 검색어 길이가 이 값을 초과할 때만 검색 기록을 남깁니다.
    SEARCH_LOG_MIN_LENGTH = 2
    # 게시물 이미지 동시 업로드 수. 1이면 순차 업로드입니다.
    UPLOAD_CONCURRENCY = int(os.getenv('UPLOAD_CONCURRENCY', 1))

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'testing-secret-key')
    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET', 'magazine-test.appspot.com')

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정을 선택하는 데 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
