from fastapi import status


class ReviewAppError(Exception):
    """API 응답으로 변환되는 애플리케이션 오류의 기본 클래스"""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReviewAppError):
    """필수 값 누락, 형식 오류 등 요청 자체의 문제"""
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateSubmission(ReviewAppError):
    """같은 (productId, shop, clientId)로 이미 제출된 평점"""
    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(ReviewAppError):
    """저장소 오류. 상세 내용은 서버 로그에만 남긴다"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
