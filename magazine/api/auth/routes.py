# magazine/api/auth/routes.py

import logging
import jwt
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity
)
from marshmallow import ValidationError

from magazine.api.auth.schemas import SocialLoginSchema, LogoutRequestSchema, FirebaseWebConfigSchema
from magazine.api.users.schemas import UserProfileResponseSchema
from magazine.core.errors import AuthenticationError

auth_bp = Blueprint('auth_bp', __name__)

@auth_bp.route('/google', methods=['POST'])
def google_login():
    """Google 로그인. 최초 로그인이면 사용자 프로필을 함께 생성합니다."""
    auth_service = current_app.services['auth']
    try:
        validated_data = SocialLoginSchema().load(request.get_json() or {})
        identity, profile, is_new_user = auth_service.sign_in(
            id_token=validated_data.get('id_token'),
            auth_code=validated_data.get('auth_code')
        )

        return jsonify({
            "access_token": create_access_token(identity=identity.uid),
            "refresh_token": create_refresh_token(identity=identity.uid),
            "is_new_user": is_new_user,
            "user": UserProfileResponseSchema().dump(profile)
        }), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthenticationError as e:
        return jsonify({"error_code": e.error_code, "message": f"로그인에 실패했습니다: {e.message}"}), 401
    except Exception as e:
        logging.error(f"Google 로그인 중 예외 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부 오류가 발생했습니다."}), 500


# --- 토큰 재발급 엔드포인트 ---
@auth_bp.route('/token/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh_token():
    """유효한 Refresh Token으로 새로운 Access Token을 발급합니다."""
    current_user_id = get_jwt_identity()
    new_access_token = create_access_token(identity=current_user_id)
    return jsonify(access_token=new_access_token), 200


# --- 로그아웃 엔드포인트 ---
@auth_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 전달받은 Access/Refresh 토큰을 무효화 목록에 추가합니다."""
    auth_service = current_app.services['auth']
    try:
        data = LogoutRequestSchema().load(request.get_json() or {})

        secret_key = current_app.config['JWT_SECRET_KEY']
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')

        # 만료된 토큰도 해독할 수 있도록 'verify_exp=False' 옵션을 사용합니다.
        decoded_access = jwt.decode(data['access_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})
        decoded_refresh = jwt.decode(data['refresh_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})

        auth_service.logout_user(
            decoded_access.get('sub'),
            decoded_access['jti'], decoded_access['exp'],
            decoded_refresh['jti'], decoded_refresh['exp']
        )
        return jsonify({"message": "로그아웃 되었습니다."}), 200

    except ValidationError as e:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except jwt.PyJWTError as e:
        logging.error(f"JWT 해독 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INVALID_TOKEN", "message": "유효하지 않은 토큰입니다."}), 422
    except Exception as e:
        logging.error(f"로그아웃 처리 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "LOGOUT_FAILED", "message": "로그아웃 처리 중 오류가 발생했습니다."}), 500


@auth_bp.route('/firebase-config', methods=['GET'])
def firebase_config():
    """웹 클라이언트용 Firebase 공개 설정을 반환합니다."""
    config = current_app.config
    return jsonify(FirebaseWebConfigSchema().dump({
        "apiKey": config.get('FIREBASE_API_KEY'),
        "projectId": config.get('FIREBASE_PROJECT_ID'),
        "storageBucket": config.get('FIREBASE_STORAGE_BUCKET'),
        "messagingSenderId": config.get('FIREBASE_MESSAGING_SENDER_ID'),
        "appId": config.get('FIREBASE_APP_ID'),
    })), 200
