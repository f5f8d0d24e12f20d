# magazine/core/security.py
from functools import wraps
from flask import jsonify, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity


def admin_required(f):
    """
    유효한 Access Token을 요구하고, 토큰의 사용자가 관리자(isAdmin == True)인지 확인합니다.
    isAdmin 플래그는 이 앱에서 설정할 수 없으며 Firestore에서 직접 관리됩니다.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        uid = get_jwt_identity()

        profile_service = current_app.services['users']
        if not profile_service.is_admin(uid):
            return jsonify({"error_code": "FORBIDDEN", "message": "관리자만 접근할 수 있습니다."}), 403

        return f(*args, **kwargs)

    return decorated_function
