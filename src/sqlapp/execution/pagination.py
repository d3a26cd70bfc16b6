"""LIMIT/OFFSET 기반 페이징."""

import logging

from sqlapp.analysis.statement_analyzer import paging_compatibility
from sqlapp.core.config import Settings
from sqlapp.core.exceptions import InvalidPagingRequestError
from sqlapp.core.models import PagingCompatibility, PagingRequest
from sqlapp.core.sql_summary import summarize_sql

logger = logging.getLogger(__name__)


def _strip_terminator(sql: str) -> str:
    """끝의 공백과 문장 종료자(;)를 제거한다."""
    return sql.rstrip().rstrip(";").rstrip()


class Paginator:
    """페이징 요청 검증 및 페이징 SQL 생성기."""

    def __init__(self, settings: Settings) -> None:
        """페이지네이터 초기화.

        Args:
            settings: 애플리케이션 설정
        """
        self._settings = settings

    def default_request(self, page: int = 0) -> PagingRequest:
        """설정의 기본 페이지 크기로 페이징 요청을 생성한다."""
        return PagingRequest(page=page, page_size=self._settings.default_page_size)

    def validate(self, sql: str, request: PagingRequest) -> PagingCompatibility:
        """페이징 요청과 SQL의 호환성을 검증한다.

        Args:
            sql: 페이징을 적용할 SQL
            request: 페이징 요청

        Returns:
            허용된 경우의 PagingCompatibility (COMPATIBLE 또는 NO_ORDER_BY)

        Raises:
            InvalidPagingRequestError: 페이지 번호/크기가 범위를 벗어나거나
                SQL에 페이징을 적용할 수 없을 때
        """
        if request.page < 0:
            raise InvalidPagingRequestError("Page number must be non-negative")

        max_page_size = self._settings.max_page_size
        if request.page_size <= 0 or request.page_size > max_page_size:
            raise InvalidPagingRequestError(
                f"Page size must be between 1 and {max_page_size}"
            )

        compatibility = paging_compatibility(sql)

        if compatibility is PagingCompatibility.NOT_SELECT:
            raise InvalidPagingRequestError(
                "Pagination is only supported for SELECT queries"
            )
        if compatibility is PagingCompatibility.HAS_LIMIT_OFFSET:
            raise InvalidPagingRequestError(
                "Cannot apply pagination: SQL already contains LIMIT/OFFSET clause"
            )
        if compatibility is PagingCompatibility.NO_ORDER_BY:
            if not request.ignore_order_by_warning:
                raise InvalidPagingRequestError(
                    "Pagination without ORDER BY may produce inconsistent results. "
                    "Add ORDER BY clause or set ignore_order_by_warning=True"
                )
            summary = summarize_sql(sql)
            logger.warning(
                "validate: paging without ORDER BY sql_len=%s sql_hash=%s",
                summary["len"],
                summary["sha256_8"],
            )

        return compatibility

    def paginate_sql(self, sql: str, request: PagingRequest) -> str:
        """SQL 끝에 LIMIT/OFFSET 절을 붙인다.

        끝의 ';'는 제거하고, 마지막 줄의 라인 주석에 절이 묻히지 않도록
        줄을 바꿔서 붙인다.
        """
        body = _strip_terminator(sql)
        return f"{body}\nLIMIT {request.page_size} OFFSET {request.offset}"

    def count_sql(self, sql: str) -> str:
        """전체 건수 조회용 SQL을 생성한다."""
        body = _strip_terminator(sql)
        return f"SELECT COUNT(*) FROM ({body}\n) AS count_query"
