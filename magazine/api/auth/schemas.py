#magazine/api/auth/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

class SocialLoginSchema(Schema):
    """Google 로그인 요청의 유효성을 검사하는 스키마"""
    # provider: 소셜 로그인 제공자. 현재는 'google'만 허용합니다.
    provider = fields.Str(
        load_default='google',
        validate=validate.OneOf(['google']),
        metadata={"description": "소셜 로그인 제공자 (e.g., google)"}
    )
    id_token = fields.Str(
        metadata={"description": "Google 팝업 로그인 후 발급된 Firebase ID 토큰"}
    )
    auth_code = fields.Str(
        metadata={"description": "Google OAuth 2.0 인증 코드"}
    )

    @validates_schema
    def validate_credential(self, data, **kwargs):
        if not data.get('id_token') and not data.get('auth_code'):
            raise ValidationError("id_token 또는 auth_code 중 하나가 필요합니다.", "id_token")

class LogoutRequestSchema(Schema):
    """로그아웃 요청의 유효성을 검사하는 스키마"""
    access_token = fields.Str(required=True)
    refresh_token = fields.Str(required=True)

class FirebaseWebConfigSchema(Schema):
    """웹 클라이언트가 Firebase SDK를 초기화할 때 쓰는 공개 설정값"""
    apiKey = fields.Str(allow_none=True)
    projectId = fields.Str(allow_none=True)
    storageBucket = fields.Str(allow_none=True)
    messagingSenderId = fields.Str(allow_none=True)
    appId = fields.Str(allow_none=True)
