"""Parameter repositories."""

from app.repositories.parameters.parameter import ArticleRepository, ParameterRepository

__all__ = [
    "ParameterRepository",
    "ArticleRepository",
]
