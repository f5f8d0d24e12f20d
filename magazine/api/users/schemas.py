# magazine/api/users/schemas.py
from marshmallow import Schema, fields

class UserProfileResponseSchema(Schema):
    """
    GET /api/users/me
    로그인한 사용자 본인의 프로필 정보를 응답할 때 사용하는 스키마.
    """
    uid = fields.Str(required=True)
    email = fields.Str(allow_none=True)
    displayName = fields.Str(allow_none=True)
    photoURL = fields.Str(allow_none=True)
    isAdmin = fields.Bool(dump_default=False)
    createdAt = fields.DateTime(allow_none=True)
    lastLogin = fields.DateTime(allow_none=True)
