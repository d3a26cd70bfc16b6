"""DB-API 2.0 연결 위에서 검증, 바인딩, 페이징을 조합하여 쿼리를 실행한다."""

import logging
from contextlib import closing
from typing import Any, Mapping, Optional

from sqlapp.analysis.statement_analyzer import is_select_query
from sqlapp.core.config import Settings
from sqlapp.core.models import PagedResult, PagingRequest, ParameterizedQuery
from sqlapp.core.sql_summary import summarize_sql
from sqlapp.execution.pagination import Paginator
from sqlapp.execution.parameter_binder import ParameterBinder
from sqlapp.execution.query_validator import QueryValidator

logger = logging.getLogger(__name__)


class QueryExecutor:
    """쿼리 실행기.

    연결은 호출자가 생성하고 관리한다. 실행기는 커서만 열고 닫는다.
    """

    def __init__(
        self,
        connection: Any,
        settings: Settings,
        paramstyle: Optional[str] = None,
    ) -> None:
        """실행기 초기화.

        Args:
            connection: DB-API 2.0 연결 객체
            settings: 애플리케이션 설정
            paramstyle: 바인드 변수 스타일 (기본값은 settings.paramstyle)
        """
        self._connection = connection
        self._settings = settings
        self._validator = QueryValidator(settings)
        self._paginator = Paginator(settings)
        self._binder = ParameterBinder(paramstyle or settings.paramstyle)

    def execute(
        self,
        sql: str,
        parameters: Optional[Mapping[str, Any]] = None,
        parameter_types: Optional[Mapping[str, str]] = None,
    ) -> list[dict[str, Any]] | dict[str, int]:
        """SQL을 실행한다.

        Args:
            sql: 실행할 SQL
            parameters: 파라미터 이름 -> 값
            parameter_types: 파라미터 이름 -> 선언 타입명

        Returns:
            조회성 문장이면 최대 max_rows개의 행(dict) 리스트,
            그 외에는 {"affected_rows": 건수}
        """
        self._validator.validate(sql)
        query = self._binder.bind(sql, parameters, parameter_types)

        summary = summarize_sql(sql)
        logger.info(
            "execute: sql_len=%s sql_hash=%s", summary["len"], summary["sha256_8"]
        )

        with closing(self._connection.cursor()) as cursor:
            self._run(cursor, query)
            if is_select_query(sql):
                return self._fetch_rows(cursor, self._settings.max_rows)
            return {"affected_rows": cursor.rowcount}

    def execute_paged(
        self,
        sql: str,
        request: PagingRequest,
        parameters: Optional[Mapping[str, Any]] = None,
        parameter_types: Optional[Mapping[str, str]] = None,
    ) -> PagedResult[dict[str, Any]]:
        """LIMIT/OFFSET을 붙여 한 페이지를 조회하고 전체 건수를 함께 반환한다.

        Args:
            sql: 조회 SQL
            request: 페이징 요청
            parameters: 파라미터 이름 -> 값
            parameter_types: 파라미터 이름 -> 선언 타입명

        Returns:
            PagedResult
        """
        self._validator.validate(sql)
        self._paginator.validate(sql, request)

        page_query = self._binder.bind(
            self._paginator.paginate_sql(sql, request), parameters, parameter_types
        )
        count_query = self._binder.bind(
            self._paginator.count_sql(sql), parameters, parameter_types
        )

        summary = summarize_sql(sql)
        logger.info(
            "execute_paged: sql_len=%s sql_hash=%s page=%s page_size=%s",
            summary["len"],
            summary["sha256_8"],
            request.page,
            request.page_size,
        )

        with closing(self._connection.cursor()) as cursor:
            self._run(cursor, page_query)
            rows = self._fetch_rows(cursor)

            self._run(cursor, count_query)
            count_row = cursor.fetchone()
            total = int(count_row[0]) if count_row else 0

        return PagedResult.of(rows, request.page, request.page_size, total)

    def _run(self, cursor: Any, query: ParameterizedQuery) -> None:
        """바인드 값이 있을 때만 파라미터와 함께 실행한다."""
        if query.parameters:
            cursor.execute(query.sql, query.parameters)
        else:
            cursor.execute(query.sql)

    def _fetch_rows(
        self, cursor: Any, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """커서 결과를 컬럼명 -> 값 dict 리스트로 변환한다."""
        if cursor.description is None:
            return []
        columns = [col[0] for col in cursor.description]
        rows = cursor.fetchall() if limit is None else cursor.fetchmany(limit)
        return [dict(zip(columns, row)) for row in rows]
