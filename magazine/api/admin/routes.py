# magazine/api/admin/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import get_jwt_identity
from marshmallow import ValidationError

from magazine.api.admin.schemas import PostCreateSchema, PostCreatedResponseSchema
from magazine.core.errors import PostValidationError
from magazine.core.security import admin_required
from magazine.core.session import Identity
from magazine.views.admin import AdminAuthoringView

admin_bp = Blueprint('admin_bp', __name__)

def _build_form(user_id: str, data: dict, files) -> AdminAuthoringView:
    """요청 데이터를 관리자 작성 폼 상태로 옮깁니다."""
    config = current_app.config
    form = AdminAuthoringView(
        Identity(uid=user_id),
        current_app.services['posts'],
        alert=lambda message: None,
        categories=config['POST_CATEGORIES'],
        min_images=config['MIN_POST_IMAGES'],
        max_images=config['MAX_POST_IMAGES']
    )
    form.title = data['title']
    form.description = data['description']
    form.category = data['category'] or config['DEFAULT_POST_CATEGORY']

    for tag in data['hashtags']:
        form.hashtag_input = tag
        form.add_hashtag()

    links = data['links']
    # 파일을 고르지 않은 입력칸은 파일명이 빈 파트로 전달됩니다.
    files = [file for file in files if file.filename]
    for index, file in enumerate(files):
        form.stage_image(
            filename=file.filename,
            data=file.read(),
            content_type=file.mimetype or 'application/octet-stream',
            link=links[index] if index < len(links) else ''
        )
    return form


@admin_bp.route('/posts', methods=['POST'])
@admin_required
def create_post():
    """
    새 게시물을 등록합니다. (관리자 전용, multipart/form-data)
    - 제목 필수, 이미지 1~5장
    - 이미지는 순서대로 업로드된 뒤 게시물 문서가 한 번에 기록됩니다.
    """
    post_repository = current_app.services['posts']
    user_id = get_jwt_identity()
    try:
        data = PostCreateSchema().load({
            "title": request.form.get('title', ''),
            "description": request.form.get('description', ''),
            "category": request.form.get('category'),
            "hashtags": request.form.getlist('hashtags'),
            "links": request.form.getlist('links'),
        })
        form = _build_form(user_id, data, request.files.getlist('images'))
        form.validate()

        post_id = post_repository.create_post(form.build_post(), form.images)
        return jsonify(PostCreatedResponseSchema().dump({
            "post_id": post_id,
            "message": "게시물이 성공적으로 등록되었습니다!"
        })), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PostValidationError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 400
    except Exception as e:
        logging.error(f"게시물 등록 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "POST_CREATION_FAILED", "message": f"게시물 등록에 실패했습니다: {e}"}), 500
