"""요청 본문/쿼리 파싱 및 검증

라우터는 여기서 돌려주는 pydantic 모델만 다룬다. 형식이 맞지 않는 입력은
저장소까지 내려가기 전에 ``ValidationError`` 로 끝난다.
"""
import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.schemas.rating import RatingCreate
from app.schemas.typed_review import TypedReviewCreate

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

INVALID_JSON_MESSAGE = "Invalid JSON payload."
INVALID_FORM_MESSAGE = "Invalid form payload."
INVALID_CONTENT_TYPE_MESSAGE = "Invalid Content-Type. Expected application/json."
MISSING_QUERY_MESSAGE = "Missing query parameters: productId and shop are required"
MISSING_RATING_FIELDS_MESSAGE = "Missing data. Required data: productId, shop, rating, clientId"
MISSING_RATING_FIELDS_NO_CLIENT_MESSAGE = "Missing data. Required data: productId, shop, rating"
INVALID_RATING_MESSAGE = "Invalid rating. It must be an integer between 1 and 5."
MISSING_REVIEW_FIELDS_MESSAGE = (
    "Missing fields: productId, shop, ratingDescription, loggedIn and clientId are required."
)

RATING_REQUIRED_FIELDS = ("productId", "shop", "clientId")
REVIEW_REQUIRED_FIELDS = ("productId", "shop", "ratingDescription", "loggedIn", "clientId")

# 폼 값은 항상 문자열이다
FORM_INTEGER_PATTERN = re.compile(r"[0-9]+")


def is_json_request(request: Request) -> bool:
    content_type = request.headers.get("content-type") or ""
    return JSON_CONTENT_TYPE in content_type.lower()


async def read_json_body(request: Request) -> Dict[str, Any]:
    """JSON 본문을 객체로 읽기"""
    raw = await request.body()
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError(INVALID_JSON_MESSAGE)
    if not isinstance(data, dict):
        raise ValidationError(INVALID_JSON_MESSAGE)
    return data


async def read_payload(request: Request) -> Dict[str, Any]:
    """Content-Type에 따라 JSON 또는 폼 본문 읽기

    JSON이 아니거나 Content-Type이 없으면 폼으로 해석한다.
    """
    if is_json_request(request):
        return await read_json_body(request)

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        logger.warning(f"폼 본문 파싱 실패: {str(e)}")
        raise ValidationError(INVALID_FORM_MESSAGE)
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _is_missing(value: Any) -> bool:
    # 빈 문자열, None, 0 모두 누락으로 본다
    return not value


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _form_rating(value: Any) -> Any:
    if isinstance(value, str) and FORM_INTEGER_PATTERN.fullmatch(value):
        return int(value)
    return value


def parse_rating_submission(
    data: Dict[str, Any],
    require_client_id: bool = True,
    from_form: bool = False
) -> RatingCreate:
    """평점 제출 본문 검증

    1) productId, shop (중복 방지 모드에서는 clientId까지) 존재 여부
    2) rating이 1~5 사이 정수인지. 숫자 문자열은 폼 본문에서만 허용한다
    """
    required = RATING_REQUIRED_FIELDS if require_client_id else RATING_REQUIRED_FIELDS[:2]
    if any(_is_missing(data.get(field)) for field in required):
        if require_client_id:
            raise ValidationError(MISSING_RATING_FIELDS_MESSAGE)
        raise ValidationError(MISSING_RATING_FIELDS_NO_CLIENT_MESSAGE)

    try:
        return RatingCreate(
            product_id=_as_text(data["productId"]),
            shop=_as_text(data["shop"]),
            rating=_form_rating(data.get("rating")) if from_form else data.get("rating"),
            client_id=_as_text(data["clientId"]) if require_client_id else None,
        )
    except PydanticValidationError:
        raise ValidationError(INVALID_RATING_MESSAGE)


def parse_typed_review_submission(data: Dict[str, Any]) -> TypedReviewCreate:
    """텍스트 리뷰 제출 본문 검증. 모든 필드 필수"""
    if any(_is_missing(data.get(field)) for field in REVIEW_REQUIRED_FIELDS):
        raise ValidationError(MISSING_REVIEW_FIELDS_MESSAGE)

    return TypedReviewCreate(
        product_id=_as_text(data["productId"]),
        shop=_as_text(data["shop"]),
        rating_description=_as_text(data["ratingDescription"]),
        logged_in=_as_text(data["loggedIn"]),
        client_id=_as_text(data["clientId"]),
    )


def require_product_query(
    product_id: Optional[str],
    shop: Optional[str]
) -> Tuple[str, str]:
    """조회 API의 필수 쿼리 파라미터 확인"""
    if not product_id or not shop:
        raise ValidationError(MISSING_QUERY_MESSAGE)
    return product_id, shop
