"""Reputation and identity lookups over HTTP."""

import httpx
from loguru import logger

from app.errors import DependencyFailure
from app.repositories.db import Transaction
from platform_client import IdentityClient, ReputationClient


class RemoteReputation:
    """ReputationService backed by the reputation API."""

    def __init__(self, client: ReputationClient, default_score: float = 50.0):
        self._client = client
        self._default_score = default_score

    def get_score(self, tx: Transaction, user_id: str) -> float:
        try:
            result = self._client.score(user_id)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Reputation lookup failed for {}: {}", user_id, exc)
            raise DependencyFailure(f"Reputation service unavailable: {exc}") from exc
        return self._default_score if result.score is None else result.score


class RemoteIdentity:
    """IdentityService backed by the identity API."""

    def __init__(self, client: IdentityClient):
        self._client = client

    def is_verified_human(self, tx: Transaction, user_id: str) -> bool:
        try:
            return self._client.verification(user_id).is_verified_human
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Identity lookup failed for {}: {}", user_id, exc)
            raise DependencyFailure(f"Identity service unavailable: {exc}") from exc
