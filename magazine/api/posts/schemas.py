# magazine/api/posts/schemas.py
from marshmallow import Schema, fields

# --- 재사용을 위한 중첩 스키마 ---
class ImageSchema(Schema):
    """게시물에 포함된 이미지 정보 스키마."""
    url = fields.Str(required=True)
    link = fields.Str(load_default='', dump_default='')
    order = fields.Int(required=True)

# --- API 요청/응답 스키마 ---

class PostListQuerySchema(Schema):
    """GET /api/posts 쿼리 파라미터의 유효성을 검사합니다."""
    q = fields.Str(load_default='')
    tag = fields.Str(load_default=None, allow_none=True)


class PostResponseSchema(Schema):
    """게시물 정보 응답을 위한 최종 JSON 형식을 정의합니다."""
    id = fields.Str(required=True)
    title = fields.Str(required=True)
    description = fields.Str(dump_default='')
    category = fields.Str(required=True)
    hashtags = fields.List(fields.Str(), dump_default=list)
    images = fields.List(fields.Nested(ImageSchema), required=True)
    createdBy = fields.Str()
    views = fields.Int(dump_default=0)
    createdAt = fields.DateTime(allow_none=True)
    updatedAt = fields.DateTime(allow_none=True)
