# magazine/core/errors.py


class MagazineError(Exception):
    """매거진 애플리케이션에서 사용하는 예외의 기반 클래스."""
    error_code = "MAGAZINE_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(MagazineError):
    """팝업 차단, 사용자 취소, 토큰 검증 실패 등 로그인 과정의 모든 실패."""
    error_code = "AUTHENTICATION_FAILED"
    status_code = 401


class PermissionDeniedError(MagazineError):
    error_code = "FORBIDDEN"
    status_code = 403


class PostValidationError(MagazineError):
    """게시물 등록 전 검증(제목, 이미지 개수, 카테고리) 실패."""
    error_code = "POST_VALIDATION_ERROR"
    status_code = 400
