# magazine/api/admin/schemas.py
from marshmallow import Schema, fields

class PostCreateSchema(Schema):
    """
    POST /api/admin/posts
    multipart 폼 필드의 유효성을 검사합니다. 이미지 파일은 'images' 필드로 별도 처리합니다.
    제목/카테고리/이미지 개수의 도메인 검증은 validate_submission에서 수행합니다.
    """
    title = fields.Str(load_default='')
    description = fields.Str(load_default='')
    category = fields.Str(load_default=None, allow_none=True)
    # 입력 순서대로 전달되며, 공백/중복은 서버에서 정리합니다.
    hashtags = fields.List(fields.Str(), load_default=list)
    # images와 같은 순서의 이미지별 이동 링크 (없으면 빈 문자열)
    links = fields.List(fields.Str(), load_default=list)

class PostCreatedResponseSchema(Schema):
    post_id = fields.Str(required=True)
    message = fields.Str(required=True)
