"""쿼리 실행기 테스트."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from sqlapp.core.config import Settings
from sqlapp.core.exceptions import (
    InvalidPagingRequestError,
    ParameterNotProvidedError,
    QueryValidationError,
)
from sqlapp.core.models import PagingRequest
from sqlapp.execution.query_executor import QueryExecutor


@pytest.fixture
def connection():
    """샘플 데이터가 들어 있는 인메모리 SQLite 연결 fixture."""
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)")
    conn.executemany(
        "INSERT INTO users (id, name, age) VALUES (?, ?, ?)",
        [(i, f"user{i}", 20 + i) for i in range(1, 8)],
    )
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def executor(connection) -> QueryExecutor:
    """실행기 fixture."""
    return QueryExecutor(connection, Settings(max_rows=5))


class TestExecute:
    """일반 실행 테스트."""

    def test_select_with_named_parameters(self, executor: QueryExecutor) -> None:
        """네임드 파라미터로 조회하고 dict 행을 반환해야 함."""
        rows = executor.execute(
            "SELECT id, name FROM users WHERE age >= :min_age AND age <= :max_age ORDER BY id",
            {"min_age": "23", "max_age": 24},
            {"min_age": "integer"},
        )

        assert rows == [{"id": 3, "name": "user3"}, {"id": 4, "name": "user4"}]

    def test_select_respects_max_rows(self, executor: QueryExecutor) -> None:
        """max_rows를 넘는 행은 반환하지 않아야 함."""
        rows = executor.execute("SELECT * FROM users ORDER BY id")

        assert len(rows) == 5

    def test_update_returns_affected_rows(self, executor: QueryExecutor) -> None:
        """조회성 문장이 아니면 영향받은 행 수를 반환해야 함."""
        result = executor.execute(
            "UPDATE users SET name = :name WHERE id = :id", {"name": "x", "id": 1}
        )

        assert result == {"affected_rows": 1}

    def test_literal_colon_is_not_bound(self, executor: QueryExecutor) -> None:
        """문자열 안의 :name은 바인딩하지 않아야 함."""
        rows = executor.execute(
            "SELECT ':id' AS label, name FROM users WHERE id = :id", {"id": 2}
        )

        assert rows == [{"label": ":id", "name": "user2"}]

    def test_missing_parameter(self, executor: QueryExecutor) -> None:
        """값이 없는 파라미터는 예외여야 함."""
        with pytest.raises(ParameterNotProvidedError):
            executor.execute(
                "SELECT * FROM users WHERE id = :id AND age = :age", {"id": 1}
            )

    def test_dangerous_sql_is_rejected(self, executor: QueryExecutor) -> None:
        """위험 구문은 실행 전에 거부해야 함."""
        with pytest.raises(QueryValidationError):
            executor.execute("DROP TABLE users")


class TestExecutePaged:
    """페이징 실행 테스트."""

    def test_first_page(self, executor: QueryExecutor) -> None:
        """첫 페이지와 전체 건수를 반환해야 함."""
        result = executor.execute_paged(
            "SELECT id FROM users ORDER BY id", PagingRequest(page=0, page_size=3)
        )

        assert [row["id"] for row in result.data] == [1, 2, 3]
        assert result.total_elements == 7
        assert result.total_pages == 3
        assert result.has_next is True
        assert result.has_previous is False

    def test_page_with_parameters(self, executor: QueryExecutor) -> None:
        """파라미터가 있는 쿼리도 페이징과 건수 조회를 해야 함."""
        result = executor.execute_paged(
            "SELECT id FROM users WHERE age > :age ORDER BY id",
            PagingRequest(page=1, page_size=2),
            {"age": 23},
        )

        assert [row["id"] for row in result.data] == [6, 7]
        assert result.total_elements == 4
        assert result.has_next is False
        assert result.has_previous is True

    def test_existing_limit_is_rejected(self, executor: QueryExecutor) -> None:
        """LIMIT이 이미 있으면 페이징을 거부해야 함."""
        with pytest.raises(InvalidPagingRequestError):
            executor.execute_paged(
                "SELECT id FROM users ORDER BY id LIMIT 2", PagingRequest(page_size=2)
            )


class TestExecutorWithMockConnection:
    """모의 연결을 사용한 실행기 테스트."""

    def test_cursor_is_closed_and_format_style_used(self) -> None:
        """format 스타일로 실행하고 커서를 닫아야 함."""
        mock_cursor = MagicMock()
        mock_cursor.description = [("id",), ("name",)]
        mock_cursor.fetchmany.return_value = [(1, "Alice")]
        mock_connection = MagicMock()
        mock_connection.cursor.return_value = mock_cursor

        executor = QueryExecutor(mock_connection, Settings(), paramstyle="format")
        rows = executor.execute("SELECT id, name FROM users WHERE id = :id", {"id": 1})

        mock_cursor.execute.assert_called_once_with(
            "SELECT id, name FROM users WHERE id = %s", [1]
        )
        mock_cursor.close.assert_called_once()
        assert rows == [{"id": 1, "name": "Alice"}]

    def test_execute_without_parameters(self) -> None:
        """바인드 값이 없으면 SQL만 전달해야 함."""
        mock_cursor = MagicMock()
        mock_cursor.description = None
        mock_cursor.rowcount = 3
        mock_connection = MagicMock()
        mock_connection.cursor.return_value = mock_cursor

        executor = QueryExecutor(mock_connection, Settings())
        result = executor.execute("DELETE FROM sessions")

        mock_cursor.execute.assert_called_once_with("DELETE FROM sessions")
        assert result == {"affected_rows": 3}

    def test_postgres_cast_with_parameter(self) -> None:
        """캐스트가 있는 쿼리도 실제 파라미터만 바인딩해야 함."""
        mock_cursor = MagicMock()
        mock_cursor.description = [("id",)]
        mock_cursor.fetchmany.return_value = [("1",)]
        mock_connection = MagicMock()
        mock_connection.cursor.return_value = mock_cursor

        executor = QueryExecutor(mock_connection, Settings(), paramstyle="format")
        rows = executor.execute("SELECT id::text AS id FROM t WHERE a = :a", {"a": 1})

        mock_cursor.execute.assert_called_once_with(
            "SELECT id::text AS id FROM t WHERE a = %s", [1]
        )
        assert rows == [{"id": "1"}]
