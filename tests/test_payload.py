"""
ìì²­ ë³¸ë¬¸ ê²ì¦ ë¨ì íì¤í¸
"""

import pytest

from app.core.exceptions import ValidationError
from app.utils.payload import (
    parse_rating_submission,
    parse_typed_review_submission,
    require_product_query,
)


def test_rating_submission_parsed():
    rating = parse_rating_submission(
        {"productId": "7", "shop": "s", "rating": 3, "clientId": "c"}
    )
    assert rating.product_id == "7"
    assert rating.rating == 3
    assert rating.client_id == "c"


def test_rating_numeric_ids_become_text():
    rating = parse_rating_submission(
        {"productId": 7, "shop": "s", "rating": 5, "clientId": 42}
    )
    assert rating.product_id == "7"
    assert rating.client_id == "42"
    assert rating.rating == 5


def test_form_rating_digit_string_accepted():
    rating = parse_rating_submission(
        {"productId": "7", "shop": "s", "rating": "4", "clientId": "c"},
        from_form=True,
    )
    assert rating.rating == 4


@pytest.mark.parametrize("value", ["4", " +4 ", "04.0"])
def test_json_rating_string_rejected(value):
    with pytest.raises(ValidationError) as exc_info:
        parse_rating_submission(
            {"productId": "7", "shop": "s", "rating": value, "clientId": "c"}
        )
    assert exc_info.value.message.startswith("Invalid rating")


@pytest.mark.parametrize("value", [" +4 ", "+4", "4.0", "\u0664"])
def test_form_rating_must_be_plain_digits(value):
    with pytest.raises(ValidationError):
        parse_rating_submission(
            {"productId": "7", "shop": "s", "rating": value, "clientId": "c"},
            from_form=True,
        )


def test_rating_without_client_in_non_dedup_mode():
    rating = parse_rating_submission(
        {"productId": "7", "shop": "s", "rating": 2, "clientId": "ignored"},
        require_client_id=False,
    )
    assert rating.client_id is None


def test_rating_missing_client_in_dedup_mode():
    with pytest.raises(ValidationError) as exc_info:
        parse_rating_submission({"productId": "7", "shop": "s", "rating": 2})
    assert exc_info.value.status_code == 400
    assert "clientId" in exc_info.value.message


@pytest.mark.parametrize("value", [0, 6, -1, 2.5, "2.5", "", [], False])
def test_rating_out_of_range_or_not_integer(value):
    with pytest.raises(ValidationError) as exc_info:
        parse_rating_submission(
            {"productId": "7", "shop": "s", "rating": value, "clientId": "c"}
        )
    assert exc_info.value.message.startswith("Invalid rating")


def test_typed_review_parsed():
    review = parse_typed_review_submission({
        "productId": "1",
        "shop": "s",
        "ratingDescription": "Solid",
        "loggedIn": "Jamie",
        "clientId": "c1",
    })
    assert review.rating_description == "Solid"
    assert review.logged_in == "Jamie"


def test_typed_review_falsy_field_is_missing():
    with pytest.raises(ValidationError):
        parse_typed_review_submission({
            "productId": "1",
            "shop": "s",
            "ratingDescription": "Solid",
            "loggedIn": None,
            "clientId": "c1",
        })


@pytest.mark.parametrize("product_id, shop", [(None, "s"), ("1", None), ("", "s"), ("1", "")])
def test_product_query_required(product_id, shop):
    with pytest.raises(ValidationError):
        require_product_query(product_id, shop)


def test_product_query_passes_through():
    assert require_product_query("1", "s") == ("1", "s")
