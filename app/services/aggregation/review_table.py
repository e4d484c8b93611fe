"""관리자 화면용 리뷰 테이블 집계

서비스 바깥에서 두 조회 API(/rating, /review)를 호출해 상품별로 합친다.
텍스트 리뷰와 평점은 저장소에서 연결되어 있지 않으므로 id 또는 clientId가
같은 평점을 찾아 붙이고, 없으면 0점으로 표시한다.
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import aiohttp

from app.core.config import settings
from app.schemas.aggregation import Product, ReviewRow

logger = logging.getLogger(__name__)


def numeric_product_id(product_id: str) -> str:
    """'gid://shopify/Product/123' -> '123'"""
    return product_id.rstrip("/").rsplit("/", 1)[-1]


def find_matching_rating(
    review: Dict[str, Any],
    ratings: Iterable[Dict[str, Any]]
) -> Optional[Dict[str, Any]]:
    """리뷰와 id 또는 clientId가 같은 첫 번째 평점"""
    review_id = review.get("id")
    client_id = review.get("clientId")
    for rating in ratings:
        if review_id and rating.get("id") == review_id:
            return rating
        if client_id and rating.get("clientId") == client_id:
            return rating
    return None


def merge_reviews(
    typed_reviews: List[Dict[str, Any]],
    ratings: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """텍스트 리뷰마다 매칭된 평점 점수(rating)를 붙인 새 목록 반환"""
    merged = []
    for review in typed_reviews:
        matched = find_matching_rating(review, ratings)
        score = matched.get("rating") if matched else 0
        if isinstance(score, bool) or not isinstance(score, int):
            score = 0
        merged.append({**review, "rating": score})
    return merged


def _dict_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class ReviewsApiClient:
    """평점/텍스트 리뷰 조회 API 클라이언트

    실패는 로그만 남기고 빈 값으로 대체한다.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.REVIEWS_API_BASE_URL).rstrip('/')
        self.timeout = aiohttp.ClientTimeout(
            total=timeout or settings.AGGREGATION_TIMEOUT_SECONDS
        )

    async def _get_json(self, path: str, params: Dict[str, str]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            try:
                async with session.get(url, params=params) as response:
                    response.raise_for_status()
                    body = await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                logger.warning(f"Error fetching {url} {params}: {e}")
                return None

        if not isinstance(body, dict):
            logger.warning(f"Unexpected response body from {url} {params}: {type(body).__name__}")
            return None
        return body

    @staticmethod
    def _params(product_id: str, shop: str, client_id: Optional[str] = None) -> Dict[str, str]:
        params = {"productId": numeric_product_id(product_id), "shop": shop}
        if client_id:
            params["client"] = client_id
        return params

    async def fetch_ratings(
        self,
        product_id: str,
        shop: str,
        client_id: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], float]:
        """상품 평점 목록과 평균. 응답이 이상하면 ([], 0)"""
        body = await self._get_json("rating", self._params(product_id, shop, client_id))
        data = (body or {}).get("data")
        if not isinstance(data, dict):
            return [], 0

        reviews = data.get("reviews")
        avg_rating = data.get("avg_rating")
        if isinstance(avg_rating, bool) or not isinstance(avg_rating, (int, float)):
            avg_rating = 0
        return _dict_items(reviews), avg_rating

    async def fetch_typed_reviews(
        self,
        product_id: str,
        shop: str,
        client_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """상품 텍스트 리뷰 목록"""
        body = await self._get_json("review", self._params(product_id, shop, client_id))
        return _dict_items((body or {}).get("reviews"))


async def build_product_rows(
    product: Product,
    shop: str,
    client: ReviewsApiClient,
    customer_id: Optional[str] = None
) -> List[ReviewRow]:
    (ratings, avg_rating), typed_reviews = await asyncio.gather(
        client.fetch_ratings(product.id, shop),
        client.fetch_typed_reviews(product.id, shop, customer_id)
    )

    # 텍스트 리뷰가 없는 상품은 표시하지 않는다
    if not typed_reviews:
        return []

    return [
        ReviewRow(
            product_id=product.id,
            product_title=product.title,
            avg_rating=f"{float(avg_rating):.1f}",
            rating=review["rating"],
            logged_in=str(review.get("loggedIn", "")),
            rating_description=str(review.get("ratingDescription", "")),
            created_at=review.get("createdAt")
        )
        for review in merge_reviews(typed_reviews, ratings)
    ]


async def build_review_rows(
    products: List[Product],
    shop: str,
    client: Optional[ReviewsApiClient] = None,
    customer_id: Optional[str] = None
) -> List[ReviewRow]:
    """상품 목록 전체의 리뷰 테이블 행 생성 (상품 순서 유지)"""
    client = client or ReviewsApiClient()
    per_product = await asyncio.gather(*[
        build_product_rows(product, shop, client, customer_id)
        for product in products
    ])
    rows = [row for product_rows in per_product for row in product_rows]
    logger.info(f"Review table built: {len(products)} products, {len(rows)} rows")
    return rows
