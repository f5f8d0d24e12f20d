# magazine/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager

# - 설정
from magazine.core.config import config_by_name
from magazine.core.errors import MagazineError
from magazine.core.firebase import FirebaseClient

# - API 블루프린트
from magazine.api.auth.routes import auth_bp
from magazine.api.users.routes import users_bp
from magazine.api.posts.routes import posts_bp
from magazine.api.activity.routes import activity_bp
from magazine.api.admin.routes import admin_bp

# - 서비스 모듈
from magazine.services.storage_service import StorageService
from magazine.services.google_auth_service import GoogleAuthService
from magazine.api.auth.services import AuthService
from magazine.api.users.services import UserProfileService
from magazine.api.posts.services import PostRepository
from magazine.api.activity.services import ActivityLogger

def create_app(config_name: str = None, client: FirebaseClient = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development', 'testing', 'production' 중 하나. 없으면 FLASK_ENV 사용
    :param client: 미리 만들어 둔 FirebaseClient. 없으면 설정값으로 생성해 초기화합니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. Firebase 클라이언트 초기화
    # =====================================================================================
    if client is None:
        client = FirebaseClient.from_config(app.config)
    client.initialize()
    app.extensions['firebase'] = client

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 공용 서비스 먼저 생성
    try:
        storage_instance = StorageService()
        storage_instance.init_app(app, client)
        app.services['storage'] = storage_instance
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    app.services['google_auth'] = GoogleAuthService(
        client,
        client_secrets_path=app.config.get('GOOGLE_CLIENT_SECRETS_PATH'),
        redirect_uri=app.config.get('GOOGLE_REDIRECT_URI')
    )

    # 5-2. 다른 서비스를 주입받아야 하는 도메인 서비스 생성
    app.services['users'] = UserProfileService(client)
    app.services['auth'] = AuthService(
        client,
        google_auth=app.services['google_auth'],
        profile_service=app.services['users']
    )
    app.services['posts'] = PostRepository(
        client,
        storage_service=app.services['storage'],
        upload_concurrency=app.config['UPLOAD_CONCURRENCY']
    )
    app.services['activity'] = ActivityLogger(client)

    # =====================================================================================
    # 6. JWT 설정 (토큰 Blocklist 콜백 등록)
    # =====================================================================================
    jwt = JWTManager(app)

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        return app.services['auth'].is_token_revoked(jwt_payload)

    # =====================================================================================
    # 7. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(activity_bp, url_prefix='/api/activity')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    # =====================================================================================
    # 8. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        response = {"error_code": err.name.upper().replace(' ', '_'), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(MagazineError)
    def handle_magazine_error(err):
        response = {"error_code": err.error_code, "message": err.message}
        return jsonify(response), err.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 9. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
