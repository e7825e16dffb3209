"""Parameter registry - the whitelist of values governance is allowed to change."""

import math
import re
from collections.abc import Callable
from datetime import datetime, timedelta

from loguru import logger

from app.errors import InvalidParameter
from app.models import Parameter, ValidationResult
from app.models.common import ValueType
from app.repositories import ParameterRepository, PollRepository, Transaction
from app.services.parameters.seed import parameter_frame
from settings.governance import GovernanceConfig

_INTEGER = re.compile(r"-?\d+")
_DECIMAL = re.compile(r"-?\d+(\.\d+)?")


def conforms(value_type: str, value: str) -> bool:
    """Whether a text value parses as the declared type."""
    value = value.strip()
    if value_type == ValueType.INTEGER:
        return bool(_INTEGER.fullmatch(value))
    if value_type == ValueType.DECIMAL:
        return bool(_DECIMAL.fullmatch(value)) and math.isfinite(float(value))
    if value_type == ValueType.BOOLEAN:
        return value in ("true", "false")
    return True


class ParameterRegistry:
    """Validation, lookup and mutation of platform parameters.

    Only actions and rollbacks call the mutating methods.
    """

    def __init__(
        self,
        parameter_repo: ParameterRepository,
        poll_repo: PollRepository,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
    ):
        self._params = parameter_repo
        self._polls = poll_repo
        self._config = config
        self._clock = clock
        logger.debug("ParameterRegistry initialized")

    def list_parameters(self, tx: Transaction, category: str | None = None, voteable_only: bool = False) -> list[Parameter]:
        return self._params.list_parameters(tx, category, voteable_only)

    def get_parameter(self, tx: Transaction, name: str) -> Parameter:
        return self._params.require(tx, name)

    def numeric_value(self, tx: Transaction, name: str, default: float) -> float:
        """Current numeric value of a parameter, or ``default`` when it is not seeded."""
        param = self._params.get(tx, name)
        if param is None or param.value_type not in (ValueType.INTEGER, ValueType.DECIMAL):
            return default
        return float(param.current_value)

    def validate_parameter_value(self, tx: Transaction, name: str, value: str) -> ValidationResult:
        """Type, bounds and voteability check; warnings never block."""
        errors: list[str] = []
        warnings: list[str] = []

        param = self._params.get(tx, name)
        if param is None:
            return ValidationResult(is_valid=False, errors=[f"Parameter '{name}' is not in the whitelist"])

        if not param.is_voteable or param.is_frozen(self._clock()):
            errors.append(f"Parameter '{name}' is currently not voteable (may be frozen)")

        errors += self._value_errors(param, value)

        if value.strip() == param.current_value:
            warnings.append(f"Proposed value is identical to current value: {param.current_value}")
        if param.requires_supermajority:
            warnings.append(f"This parameter requires {self._config.supermajority_percentage:g}% super-majority approval")
        if param.is_emergency:
            warnings.append("This is an emergency parameter - changes take effect immediately")

        result = ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
        logger.debug("validate {}={}: valid={} errors={}", name, value, result.is_valid, len(errors))
        return result

    @staticmethod
    def _value_errors(param: Parameter, value: str) -> list[str]:
        if not conforms(param.value_type, value):
            return [f"Invalid value type. Expected {param.value_type}."]
        if param.value_type not in (ValueType.INTEGER, ValueType.DECIMAL):
            return []
        errors = []
        number = float(value)
        if param.min_value is not None and number < param.min_value:
            errors.append(f"Value {value} is below minimum allowed value: {param.min_value:g}")
        if param.max_value is not None and number > param.max_value:
            errors.append(f"Value {value} is above maximum allowed value: {param.max_value:g}")
        return errors

    def ensure_valid(self, tx: Transaction, name: str, value: str) -> ValidationResult:
        """Validate or raise InvalidParameter."""
        result = self.validate_parameter_value(tx, name, value)
        if not result.is_valid:
            raise InvalidParameter(name, result.errors)
        return result

    def requires_supermajority(self, tx: Transaction, name: str) -> bool:
        param = self._params.get(tx, name)
        return bool(param and param.requires_supermajority)

    def apply_value(self, tx: Transaction, name: str, value: str) -> str:
        """Write a new current value; returns the previous one.

        Voteability is checked at poll creation, not here: an approved
        change still executes if the parameter froze in the meantime.
        """
        param = self._params.require(tx, name)
        errors = self._value_errors(param, value)
        if errors:
            raise InvalidParameter(name, errors)

        now = self._clock()
        self._params.update(
            tx,
            name,
            current_value=value.strip(),
            times_changed=param.times_changed + 1,
            last_changed_at=now,
            updated_at=now,
        )
        logger.info("Parameter {} changed: {} -> {}", name, param.current_value, value)
        return param.current_value

    def record_rollback(self, tx: Transaction, name: str, restored_value: str) -> Parameter:
        """Restore a value after rollback; freezes the parameter on repeated reversals."""
        param = self._params.require(tx, name)
        now = self._clock()
        count = param.rollback_count + 1
        self._params.update(
            tx,
            name,
            current_value=restored_value,
            rollback_count=count,
            last_changed_at=now,
            updated_at=now,
        )
        logger.info("Parameter {} rolled back to {} (rollback #{})", name, restored_value, count)

        if count >= self._config.max_rollbacks_before_freeze:
            self.freeze(tx, name, now + timedelta(days=self._config.freeze_days))
        return self._params.require(tx, name)

    def freeze(self, tx: Transaction, name: str, until: datetime) -> None:
        self._params.update(tx, name, is_voteable=False, frozen_until=until, updated_at=self._clock())
        logger.warning("Parameter {} frozen until {}", name, until)

    def unfreeze(self, tx: Transaction, name: str) -> None:
        self._params.require(tx, name)
        self._params.update(tx, name, is_voteable=True, frozen_until=None, updated_at=self._clock())
        logger.info("Parameter {} unfrozen", name)

    def unfreeze_expired(self, tx: Transaction) -> list[str]:
        """Timed unfreeze sweep."""
        names = [p.name for p in self._params.frozen_expired(tx, self._clock())]
        for name in names:
            self.unfreeze(tx, name)
        return names

    def voting_history(self, tx: Transaction, name: str) -> list[dict]:
        """Past polls that targeted the parameter, newest first."""
        self._params.require(tx, name)
        return [
            {
                "poll_id": p.id,
                "title": p.title,
                "status": p.status,
                "proposed_value": p.parameter_proposed_value,
                "previous_value": p.parameter_current_value,
                "yes_pct": p.final_yes_pct,
                "quorum_met": p.quorum_met,
                "created_at": p.created_at,
                "closed_at": p.closed_at,
            }
            for p in self._polls.parameter_history(tx, name)
        ]

    def seed(self, tx: Transaction) -> int:
        """Insert whitelist entries that do not exist yet."""
        existing = self._params.existing_names(tx)
        df = parameter_frame(self._clock())
        return self._params.bulk_insert(tx, df.filter(~df["name"].is_in(list(existing))))
