"""Parameter and constitution entities."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class Parameter(BaseEntity):
    name: str
    category: str
    description: str | None
    value_type: str
    current_value: str
    default_value: str
    min_value: float | None
    max_value: float | None
    is_voteable: bool
    requires_supermajority: bool
    is_emergency: bool
    frozen_until: datetime | None
    rollback_count: int
    times_changed: int
    last_changed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    def is_frozen(self, now: datetime) -> bool:
        return self.frozen_until is not None and now < self.frozen_until


@dataclass
class ConstitutionalArticle(BaseEntity):
    number: int
    title: str
    principle: str
    protected_rule: str
    created_at: datetime


@dataclass
class ValidationResult(BaseEntity):
    """Outcome of parameter validation; warnings never block."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ViolationCheck(BaseEntity):
    """Outcome of a constitutional check."""

    is_violation: bool
    violations: list[dict] = field(default_factory=list)
