"""Constitutional guard - unamendable articles checked before any parameter poll.

Each article carries machine-checkable rules over the targeted parameter name,
the proposed value and the poll description. Checks are independent of the
parameter registry and run first.
"""

from dataclasses import dataclass, field
from datetime import datetime

import polars as pl
from loguru import logger

from app.errors import ConstitutionalViolation
from app.models import ViolationCheck


@dataclass(frozen=True)
class ParameterRule:
    """Violated when the parameter name contains a pattern and the value matches.

    ``forbidden_value`` of None means any value is a violation.
    """

    patterns: tuple[str, ...]
    forbidden_value: str | None
    reason: str
    exact: bool = False

    def matches(self, name: str, value: str | None) -> bool:
        name = name.lower()
        hit = name in self.patterns if self.exact else any(p in name for p in self.patterns)
        if not hit:
            return False
        if self.forbidden_value is None:
            return True
        return value is not None and value.strip().lower() == self.forbidden_value


@dataclass(frozen=True)
class DescriptionRule:
    """Violated when the description mentions any phrase."""

    phrases: tuple[str, ...]
    reason: str

    def matches(self, description: str) -> bool:
        text = description.lower()
        return any(p in text for p in self.phrases)


@dataclass(frozen=True)
class Article:
    number: int
    title: str
    principle: str
    parameter_rules: tuple[ParameterRule, ...] = field(default_factory=tuple)
    description_rules: tuple[DescriptionRule, ...] = field(default_factory=tuple)


ARTICLES: tuple[Article, ...] = (
    Article(
        number=1,
        title="Dual-Identity Architecture",
        principle="The dual-identity system (True Self + Shadow) is permanent and can never be disabled or removed.",
        parameter_rules=(
            ParameterRule(("shadow",), "false", "Cannot disable shadow voting system"),
            ParameterRule(("dual_identity",), "false", "Cannot disable dual-identity architecture"),
        ),
    ),
    Article(
        number=2,
        title="Privacy Guarantees",
        principle="Users can never be forced to reveal their shadow identity or link shadow votes to their true self.",
        parameter_rules=(
            ParameterRule(
                ("force_reveal", "require_identity"),
                None,
                "Cannot force identity revelation",
            ),
            ParameterRule(("privacy",), "false", "Cannot remove privacy protections"),
        ),
        description_rules=(
            DescriptionRule(("reveal shadow", "unmask users"), "Poll description suggests privacy violation"),
        ),
    ),
    Article(
        number=3,
        title="Proof of Humanity Requirement",
        principle="Voting power requires Proof of Humanity verification. Bots and fake accounts never vote.",
        parameter_rules=(
            ParameterRule(("poh", "proof_of_humanity"), "false", "Cannot disable Proof of Humanity requirement"),
            ParameterRule(
                ("requires_verification_to_vote",),
                "false",
                "Cannot allow unverified voting",
                exact=True,
            ),
        ),
    ),
    Article(
        number=4,
        title="Arweave Permanence",
        principle="All governance decisions, votes and constitutional changes are permanently archived.",
        parameter_rules=(
            ParameterRule(
                ("arweave", "permanent_storage", "archive"),
                "false",
                "Cannot disable permanent archiving",
            ),
        ),
    ),
    Article(
        number=5,
        title="Spot-Only Token Strategy",
        principle="Platform tokens can never enable shorts, leverage or derivatives.",
        parameter_rules=(
            ParameterRule(
                ("short", "leverage", "margin", "futures"),
                "true",
                "Cannot enable shorts, leverage, or derivatives",
            ),
        ),
        description_rules=(
            DescriptionRule(("short selling", "leverage trading"), "Poll description suggests enabling derivatives"),
        ),
    ),
    Article(
        number=6,
        title="Emergency Rollback Protocol",
        principle="The platform keeps its rollback window for governance decisions.",
        parameter_rules=(
            ParameterRule(("rollback", "emergency_protocol"), "false", "Cannot disable emergency rollback protocol"),
        ),
    ),
)


class ConstitutionalGuard:
    """Validates proposals against the fixed set of articles."""

    def __init__(self, articles: tuple[Article, ...] = ARTICLES):
        self._articles = articles

    @property
    def articles(self) -> tuple[Article, ...]:
        return self._articles

    def check(
        self,
        parameter_name: str | None = None,
        proposed_value: str | None = None,
        description: str | None = None,
    ) -> ViolationCheck:
        violations = []
        for article in self._articles:
            reasons = []
            if parameter_name:
                reasons += [r.reason for r in article.parameter_rules if r.matches(parameter_name, proposed_value)]
            if description:
                reasons += [r.reason for r in article.description_rules if r.matches(description)]
            violations += [
                {
                    "article_number": article.number,
                    "title": article.title,
                    "reason": f"{reason} (protected by Constitution Article {article.number})",
                }
                for reason in reasons
            ]

        if violations:
            logger.warning(
                "Constitutional check failed for {}={}: articles {}",
                parameter_name,
                proposed_value,
                sorted({v["article_number"] for v in violations}),
            )
        return ViolationCheck(is_violation=bool(violations), violations=violations)

    def enforce(
        self,
        parameter_name: str | None = None,
        proposed_value: str | None = None,
        description: str | None = None,
    ) -> None:
        """Raise ConstitutionalViolation if any article is breached."""
        result = self.check(parameter_name, proposed_value, description)
        if result.is_violation:
            raise ConstitutionalViolation(result.violations)

    def seed_frame(self, now: datetime) -> pl.DataFrame:
        """Articles as rows of the constitutional_article table."""
        return pl.DataFrame(
            {
                "number": [a.number for a in self._articles],
                "title": [a.title for a in self._articles],
                "principle": [a.principle for a in self._articles],
                "protected_rule": ["; ".join(r.reason for r in a.parameter_rules + a.description_rules) for a in self._articles],
                "created_at": [now] * len(self._articles),
            }
        )
