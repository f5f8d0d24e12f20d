# magazine/api/activity/schemas.py
from marshmallow import Schema, fields

class ActivityLogResponseSchema(Schema):
    """활동 기록 응답 스키마. action에 따라 일부 필드만 채워집니다."""
    id = fields.Str(required=True)
    action = fields.Str(required=True)
    query = fields.Str()
    postId = fields.Str()
    postTitle = fields.Str()
    link = fields.Str()
    timestamp = fields.DateTime(allow_none=True)
