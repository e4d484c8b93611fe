from .rating import Rating
from .typed_review import TypedReview

__all__ = [
    "Rating",
    "TypedReview"
]
