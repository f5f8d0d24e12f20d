# magazine/api/activity/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from magazine.api.activity.schemas import ActivityLogResponseSchema

activity_bp = Blueprint('activity_bp', __name__)

@activity_bp.route('/me', methods=['GET'])
@jwt_required()
def get_my_activity():
    """로그인한 사용자의 활동 기록을 최신순으로 조회합니다."""
    activity_logger = current_app.services['activity']
    user_id = get_jwt_identity()
    limit = request.args.get('limit', 50, type=int)
    try:
        logs = activity_logger.list_activity(user_id, limit=limit)
        return jsonify({"logs": ActivityLogResponseSchema(many=True).dump(logs)}), 200
    except Exception as e:
        logging.error(f"활동 기록 조회 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "활동 기록 조회 중 오류가 발생했습니다."}), 500
