"""Governance error taxonomy.

Every rejected operation raises a subclass of ``GovernanceError``. Nothing is
written when one of these escapes a transaction: ``Database.transaction`` rolls
back on any exception.
"""


class GovernanceError(Exception):
    """Base class for all governance failures."""

    retryable = False

    def __init__(self, message: str = "Governance error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(GovernanceError):
    """Malformed input, rejected before any write."""


class InvalidParameter(ValidationError):
    """Parameter value failed registry validation."""

    def __init__(self, name: str, errors: list[str]):
        self.name = name
        self.errors = errors
        super().__init__(f"Invalid value for parameter '{name}': {'; '.join(errors)}")


class EligibilityError(GovernanceError):
    """Caller is not allowed to perform the operation."""


class InsufficientReputation(EligibilityError):
    def __init__(self, required: float, actual: float):
        self.required = required
        self.actual = actual
        super().__init__(f"Minimum reputation of {required:g} required (current: {actual:g})")


class InsufficientBalance(EligibilityError):
    def __init__(self, token: str, required: int, available: int):
        self.token = token
        self.required = required
        self.available = available
        super().__init__(f"Insufficient {token}: {required} required, {available} available")


class NotVerified(EligibilityError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is not a verified human")


class DuplicateVote(EligibilityError):
    def __init__(self, message: str = "Already voted with this identity"):
        super().__init__(message)


class DuplicateStake(EligibilityError):
    def __init__(self, message: str = "Already staked on this poll with this identity"):
        super().__init__(message)


class AuthorityExhausted(EligibilityError):
    """Founder has no rollback tokens or authority left."""


class ConstitutionalViolation(GovernanceError):
    """Proposal would breach one or more constitutional articles."""

    def __init__(self, violations: list[dict]):
        self.violations = violations
        titles = ", ".join(f"Article {v['article_number']} ({v['title']})" for v in violations)
        super().__init__(f"Proposal violates {titles}")


class StateError(GovernanceError):
    """Entity is in the wrong lifecycle state for the operation."""


class RollbackWindowExpired(StateError):
    def __init__(self, action_id: str, expired_at):
        self.action_id = action_id
        self.expired_at = expired_at
        super().__init__(f"Rollback window for action {action_id} expired at {expired_at}")


class ConcurrencyConflict(StateError):
    """Concurrent transaction touched the same rows; safe to retry."""

    retryable = True


class NotFoundError(GovernanceError):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class DependencyFailure(GovernanceError):
    """Ledger, reputation or identity collaborator failed."""

    retryable = True
