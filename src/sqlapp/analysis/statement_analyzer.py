"""SQL 문 구조 분석기 - 페이징 적용 가능 여부 판단.

파싱 트리를 만들지 않고 원문 SQL에 대한 정규식 검색만 수행한다.
파라미터 추출기와 달리 문자열 리터럴과 주석을 제외하지 않는다.
"""

import logging
import re
from typing import Optional

from sqlapp.core.models import PagingCompatibility
from sqlapp.core.sql_summary import summarize_sql

logger = logging.getLogger(__name__)

# LIMIT 절 패턴 (대소문자 무시)
LIMIT_PATTERN = re.compile(r"\blimit\s+\d+", re.IGNORECASE)

# OFFSET 절 패턴 (대소문자 무시)
OFFSET_PATTERN = re.compile(r"\boffset\s+\d+", re.IGNORECASE)

# ORDER BY 절 패턴 (대소문자 무시)
ORDER_BY_PATTERN = re.compile(r"\border\s+by\s+", re.IGNORECASE)

# 조회성 문장으로 취급하는 시작 키워드 (단순 접두사 비교)
SELECT_PREFIXES = ("select", "with", "show", "describe", "desc", "explain")


def _is_blank(sql: Optional[str]) -> bool:
    return sql is None or not sql.strip()


class StatementAnalyzer:
    """SQL 문 구조 분석기."""

    def has_limit_clause(self, sql: Optional[str]) -> bool:
        """LIMIT 절이 포함되어 있는지 확인한다."""
        if _is_blank(sql):
            return False
        return bool(LIMIT_PATTERN.search(sql))

    def has_offset_clause(self, sql: Optional[str]) -> bool:
        """OFFSET 절이 포함되어 있는지 확인한다."""
        if _is_blank(sql):
            return False
        return bool(OFFSET_PATTERN.search(sql))

    def has_order_by_clause(self, sql: Optional[str]) -> bool:
        """ORDER BY 절이 포함되어 있는지 확인한다."""
        if _is_blank(sql):
            return False
        return bool(ORDER_BY_PATTERN.search(sql))

    def is_select_query(self, sql: Optional[str]) -> bool:
        """조회성 문장(SELECT, WITH, SHOW, DESCRIBE, DESC, EXPLAIN)인지 확인한다."""
        if _is_blank(sql):
            return False
        return sql.strip().lower().startswith(SELECT_PREFIXES)

    def has_paging_conflict(self, sql: Optional[str]) -> bool:
        """이미 LIMIT 또는 OFFSET 절이 있어 페이징과 충돌하는지 확인한다."""
        return self.has_limit_clause(sql) or self.has_offset_clause(sql)

    def is_suitable_for_paging(self, sql: Optional[str]) -> bool:
        """경고 없이 페이징을 적용할 수 있는지 확인한다."""
        return (
            self.is_select_query(sql)
            and not self.has_paging_conflict(sql)
            and self.has_order_by_clause(sql)
        )

    def paging_compatibility(self, sql: Optional[str]) -> PagingCompatibility:
        """페이징 호환성 상태를 판정한다.

        규칙은 다음 순서로 평가하며 처음 일치하는 규칙이 결과가 된다.

            1. 조회성 문장이 아님 -> NOT_SELECT
            2. LIMIT/OFFSET 존재 -> HAS_LIMIT_OFFSET
            3. ORDER BY 없음 -> NO_ORDER_BY
            4. 그 외 -> COMPATIBLE

        Args:
            sql: SQL 문자열

        Returns:
            PagingCompatibility
        """
        if not self.is_select_query(sql):
            status = PagingCompatibility.NOT_SELECT
        elif self.has_paging_conflict(sql):
            status = PagingCompatibility.HAS_LIMIT_OFFSET
        elif not self.has_order_by_clause(sql):
            status = PagingCompatibility.NO_ORDER_BY
        else:
            status = PagingCompatibility.COMPATIBLE

        summary = summarize_sql(sql)
        logger.debug(
            "paging_compatibility: sql_len=%s sql_hash=%s status=%s",
            summary["len"],
            summary["sha256_8"],
            status.name,
        )
        return status


_default_analyzer = StatementAnalyzer()


def has_limit_clause(sql: Optional[str]) -> bool:
    return _default_analyzer.has_limit_clause(sql)


def has_offset_clause(sql: Optional[str]) -> bool:
    return _default_analyzer.has_offset_clause(sql)


def has_order_by_clause(sql: Optional[str]) -> bool:
    return _default_analyzer.has_order_by_clause(sql)


def is_select_query(sql: Optional[str]) -> bool:
    return _default_analyzer.is_select_query(sql)


def has_paging_conflict(sql: Optional[str]) -> bool:
    return _default_analyzer.has_paging_conflict(sql)


def is_suitable_for_paging(sql: Optional[str]) -> bool:
    return _default_analyzer.is_suitable_for_paging(sql)


def paging_compatibility(sql: Optional[str]) -> PagingCompatibility:
    """SQL의 페이징 호환성 상태를 반환한다."""
    return _default_analyzer.paging_compatibility(sql)
