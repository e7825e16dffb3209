"""Parameter registry and constitutional guard."""

from app.services.parameters.constitution import ARTICLES, Article, ConstitutionalGuard
from app.services.parameters.registry import ParameterRegistry

__all__ = [
    "ARTICLES",
    "Article",
    "ConstitutionalGuard",
    "ParameterRegistry",
]
