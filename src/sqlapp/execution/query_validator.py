"""SQL 기본 안전성 검증."""

import logging
import re
from typing import Optional

from sqlapp.core.config import Settings
from sqlapp.core.exceptions import QueryValidationError
from sqlapp.core.sql_summary import summarize_sql

logger = logging.getLogger(__name__)

# 차단 대상 구문 (단어 경계 기준, 단어 사이 공백 개수 무관)
DANGEROUS_PATTERNS = (
    "drop database",
    "drop schema",
    "drop table",
    "drop view",
    "drop index",
    "truncate",
    "alter table",
    "alter database",
    "alter schema",
    "create user",
    "drop user",
    "grant",
    "revoke",
)

DANGEROUS_PATTERN = re.compile(
    r"\b(" + "|".join(p.replace(" ", r"\s+") for p in DANGEROUS_PATTERNS) + r")\b",
    re.IGNORECASE,
)


class QueryValidator:
    """SQL 기본 안전성 검증기."""

    def __init__(self, settings: Settings) -> None:
        """검증기 초기화.

        Args:
            settings: 애플리케이션 설정
        """
        self._settings = settings

    def validate(self, sql: Optional[str]) -> None:
        """SQL이 실행 가능한지 검증한다.

        Args:
            sql: 검증할 SQL 문자열

        Raises:
            QueryValidationError: 빈 SQL, 위험 구문 포함, 최대 길이 초과 시
        """
        if sql is None or not sql.strip():
            raise QueryValidationError("SQL is empty")

        match = DANGEROUS_PATTERN.search(sql)
        if match:
            pattern = " ".join(match.group(1).lower().split())
            summary = summarize_sql(sql)
            logger.warning(
                "validate: rejected sql_len=%s sql_hash=%s pattern=%s",
                summary["len"],
                summary["sha256_8"],
                pattern,
            )
            raise QueryValidationError(
                f"Potentially dangerous SQL operation detected: {pattern}"
            )

        if len(sql) > self._settings.max_sql_length:
            raise QueryValidationError(
                f"SQL query too long (maximum {self._settings.max_sql_length:,} characters)"
            )
