from typing import Dict, Optional
from fastapi import status
from fastapi.responses import JSONResponse
from app.core.exceptions import ReviewAppError

# 텍스트 리뷰 조회는 스토어프론트에서 직접 호출된다
PUBLIC_READ_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def return_json(
    content: dict,
    code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"ok": True, **content},
        headers=headers
    )


def return_error_json(
    message: str = "Error",
    code: int = status.HTTP_400_BAD_REQUEST
) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"ok": False, "message": message}
    )


def error_from_exception(error: ReviewAppError) -> JSONResponse:
    return return_error_json(error.message, error.status_code)
