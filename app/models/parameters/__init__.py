"""Parameter domain models - registry and constitution."""

from app.models.parameters.article import ARTICLE_DDL
from app.models.parameters.entities import ConstitutionalArticle, Parameter, ValidationResult, ViolationCheck
from app.models.parameters.parameter import PARAMETER_DDL

__all__ = [
    "PARAMETER_DDL",
    "ARTICLE_DDL",
    "Parameter",
    "ConstitutionalArticle",
    "ValidationResult",
    "ViolationCheck",
]
