"""Recommendations domain exports."""

from .models import RecommendationResult
from .service import UserRecommender

__all__ = ["RecommendationResult", "UserRecommender"]
