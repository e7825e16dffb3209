"""Parameter and constitutional article repositories."""

from datetime import datetime

import polars as pl
from loguru import logger

from app.models import ConstitutionalArticle, Parameter
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class ParameterRepository(BaseRepository):
    """Repository for parameter rows."""

    table = "parameter"
    entity = Parameter
    key = "name"
    label = "Parameter"

    def list_parameters(
        self,
        tx: Transaction,
        category: str | None = None,
        voteable_only: bool = False,
    ) -> list[Parameter]:
        clauses, params = [], []
        if category:
            clauses.append("category = ?")
            params.append(category)
        if voteable_only:
            clauses.append("is_voteable")
        return self.select(tx, " AND ".join(clauses), params, order_by="category, name")

    def frozen_expired(self, tx: Transaction, now: datetime) -> list[Parameter]:
        return self.select(tx, "frozen_until IS NOT NULL AND frozen_until <= ?", [now], order_by="name")

    def existing_names(self, tx: Transaction) -> set[str]:
        return {r[0] for r in tx.fetchall("SELECT name FROM parameter")}

    def bulk_insert(self, tx: Transaction, df: pl.DataFrame) -> int:
        """Insert rows of a DataFrame whose columns match the table."""
        if df.is_empty():
            return 0
        tx.register("parameter_df", df)
        tx.execute(f"INSERT INTO parameter ({', '.join(df.columns)}) SELECT * FROM parameter_df")
        tx.unregister("parameter_df")
        logger.info("Parameters: +{} new", df.height)
        return df.height


class ArticleRepository(BaseRepository):
    """Repository for constitutional articles."""

    table = "constitutional_article"
    entity = ConstitutionalArticle
    key = "number"
    label = "Constitutional article"

    def all(self, tx: Transaction) -> list[ConstitutionalArticle]:
        return self.select(tx, order_by="number")

    def existing_numbers(self, tx: Transaction) -> set[int]:
        return {r[0] for r in tx.fetchall("SELECT number FROM constitutional_article")}

    def bulk_insert(self, tx: Transaction, df: pl.DataFrame) -> int:
        if df.is_empty():
            return 0
        tx.register("article_df", df)
        tx.execute(f"INSERT INTO constitutional_article ({', '.join(df.columns)}) SELECT * FROM article_df")
        tx.unregister("article_df")
        logger.info("Constitutional articles: +{} new", df.height)
        return df.height
