"""네임드 파라미터(:name)를 DB-API 위치 기반 바인드 변수로 변환한다."""

import logging
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from sqlapp.analysis.parameter_extractor import extract_parameter_occurrences
from sqlapp.core.exceptions import ParameterConversionError, ParameterNotProvidedError
from sqlapp.core.models import ParameterizedQuery
from sqlapp.core.sql_summary import summarize_sql

logger = logging.getLogger(__name__)

SUPPORTED_PARAMSTYLES = ("qmark", "format", "numeric")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"not a boolean: {value!r}")


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _to_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value))


# 선언 타입명(소문자) -> 변환 함수
TYPE_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "string": str,
    "varchar": str,
    "int": int,
    "integer": int,
    "long": int,
    "bigint": int,
    "double": float,
    "decimal": _to_decimal,
    "numeric": _to_decimal,
    "boolean": _to_bool,
    "date": _to_date,
    "time": _to_time,
    "datetime": _to_datetime,
    "timestamp": _to_datetime,
}


def convert_value(name: str, value: Any, type_name: Optional[str]) -> Any:
    """선언된 타입에 맞게 파라미터 값을 변환한다.

    None 값이나 알 수 없는 타입명은 그대로 반환한다.

    Args:
        name: 파라미터 이름 (오류 메시지용)
        value: 원본 값
        type_name: 선언된 타입명 (대소문자 무시)

    Returns:
        변환된 값

    Raises:
        ParameterConversionError: 변환 실패 시
    """
    if value is None or not type_name:
        return value

    converter = TYPE_CONVERTERS.get(type_name.lower())
    if converter is None:
        return value

    try:
        return converter(value)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise ParameterConversionError(name, type_name, value) from e


class ParameterBinder:
    """네임드 파라미터 바인더."""

    def __init__(self, paramstyle: str = "qmark") -> None:
        """바인더 초기화.

        Args:
            paramstyle: DB-API 바인드 변수 스타일 (qmark, format, numeric)
        """
        if paramstyle not in SUPPORTED_PARAMSTYLES:
            raise ValueError(
                f"Unsupported paramstyle: {paramstyle} "
                f"(supported: {', '.join(SUPPORTED_PARAMSTYLES)})"
            )
        self._paramstyle = paramstyle

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    def _placeholder(self, index: int) -> str:
        """index(0부터)번째 출현의 바인드 변수 표기."""
        if self._paramstyle == "qmark":
            return "?"
        if self._paramstyle == "format":
            return "%s"
        return f":{index + 1}"

    def bind(
        self,
        sql: str,
        parameters: Optional[Mapping[str, Any]],
        parameter_types: Optional[Mapping[str, str]] = None,
    ) -> ParameterizedQuery:
        """SQL의 네임드 파라미터를 위치 기반 바인드 변수로 치환한다.

        문자열 리터럴과 주석 안의 ':name'은 치환하지 않는다.
        같은 이름이 여러 번 나오면 출현마다 값을 하나씩 채운다.

        Args:
            sql: 원본 SQL
            parameters: 파라미터 이름 -> 값
            parameter_types: 파라미터 이름 -> 선언 타입명

        Returns:
            변환된 SQL과 위치 순서의 값/타입 목록

        Raises:
            ParameterNotProvidedError: SQL에서 참조한 파라미터 값이 없을 때
            ParameterConversionError: 선언 타입으로 변환할 수 없을 때
        """
        if not parameters:
            return ParameterizedQuery(sql=sql)

        types = parameter_types or {}
        positions = extract_parameter_occurrences(sql)

        for position in positions:
            if position.name not in parameters:
                raise ParameterNotProvidedError(position.name)

        # 뒤에서부터 치환하여 앞쪽 위치가 밀리지 않도록 한다
        converted = sql
        for index in range(len(positions) - 1, -1, -1):
            position = positions[index]
            converted = (
                converted[: position.start]
                + self._placeholder(index)
                + converted[position.end :]
            )

        values = [
            convert_value(p.name, parameters[p.name], types.get(p.name))
            for p in positions
        ]
        declared = [types.get(p.name) for p in positions]

        summary = summarize_sql(sql)
        logger.info(
            "bind: sql_len=%s sql_hash=%s occurrences=%s paramstyle=%s",
            summary["len"],
            summary["sha256_8"],
            len(positions),
            self._paramstyle,
        )
        return ParameterizedQuery(
            sql=converted, parameters=values, parameter_types=declared
        )
