# magazine/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, Response, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from magazine.api.posts.schemas import PostListQuerySchema, PostResponseSchema
from magazine.models.activity import ActivityAction
from magazine.views.feed import filter_posts, should_log_search

posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('', methods=['GET'])
@jwt_required()
def get_posts():
    """
    최신 게시물 한 페이지를 가져와 검색어(q)와 해시태그(tag)로 메모리에서 거릅니다.
    검색어가 2자를 넘으면 검색 기록을 남깁니다.
    """
    post_repository = current_app.services['posts']
    activity_logger = current_app.services['activity']
    user_id = get_jwt_identity()
    try:
        params = PostListQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    try:
        posts = post_repository.list_posts(limit=current_app.config['POSTS_PAGE_SIZE'])
    except Exception as e:
        # 조회 실패는 '게시물 없음'과 같은 빈 목록으로 응답합니다.
        logging.error(f"게시물 목록 조회 중 오류 발생: {e}", exc_info=True)
        posts = []

    if should_log_search(params['q'], current_app.config['SEARCH_LOG_MIN_LENGTH']):
        _ = activity_logger.log(user_id, ActivityAction.SEARCH, query=params['q'])

    filtered = filter_posts(posts, params['q'], params['tag'])
    return jsonify({
        "posts": PostResponseSchema(many=True).dump(filtered),
        "total": len(posts)
    }), 200


@posts_bp.route('/categories', methods=['GET'])
def get_categories():
    return jsonify({"categories": current_app.config['POST_CATEGORIES']}), 200


@posts_bp.route('/<string:post_id>', methods=['GET'])
@jwt_required()
def get_post(post_id: str):
    """게시물 상세를 조회하고 조회 기록(view_post)을 남깁니다."""
    post_repository = current_app.services['posts']
    activity_logger = current_app.services['activity']
    user_id = get_jwt_identity()
    try:
        post = post_repository.get_post(post_id)
    except Exception as e:
        logging.error(f"게시물 조회 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "게시물 조회 중 오류가 발생했습니다."}), 500

    if not post:
        return jsonify({"error_code": "POST_NOT_FOUND", "message": "게시물을 찾을 수 없습니다."}), 404

    _ = activity_logger.log(user_id, ActivityAction.VIEW_POST, postId=post['id'], postTitle=post.get('title'))
    return jsonify(PostResponseSchema().dump(post)), 200


@posts_bp.route('/<string:post_id>/images/<int:order>/click', methods=['POST'])
@jwt_required()
def click_image(post_id: str, order: int):
    """
    이미지 클릭. 링크가 있으면 click_image_link 기록을 남기고 이동할 링크를 돌려줍니다.
    링크가 없으면 아무 기록 없이 204를 반환합니다.
    """
    post_repository = current_app.services['posts']
    activity_logger = current_app.services['activity']
    user_id = get_jwt_identity()

    post = post_repository.get_post(post_id)
    if not post:
        return jsonify({"error_code": "POST_NOT_FOUND", "message": "게시물을 찾을 수 없습니다."}), 404

    image = next((img for img in post.get('images') or [] if img.get('order') == order), None)
    if image is None:
        return jsonify({"error_code": "IMAGE_NOT_FOUND", "message": "이미지를 찾을 수 없습니다."}), 404

    link = image.get('link')
    if not link:
        return Response(status=204)

    _ = activity_logger.log(user_id, ActivityAction.CLICK_IMAGE_LINK, postId=post_id, link=link)
    return jsonify({"link": link, "target": "_blank"}), 200
