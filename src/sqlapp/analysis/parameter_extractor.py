"""SQL 네임드 파라미터 추출기.

문자열 리터럴과 주석 안의 ':name' 형태는 무시하고, 실제 SQL 코드에 있는
파라미터만 추출한다. 단순 정규식(:(\\w+))은 다음과 같은 경우 오탐이 발생한다.

    SELECT ':param' FROM t
    -- comment with :param
    /* comment with :param */

문자 단위로 한 번만 순회하며, 현재 어휘 문맥(ScanMode)에 따라 분기한다.
어떤 입력에도 예외를 던지지 않는다.
"""

import logging
import string
from enum import Enum
from typing import Iterator, Optional

from sqlapp.core.models import ParameterPosition
from sqlapp.core.sql_summary import summarize_sql

logger = logging.getLogger(__name__)

# 파라미터 이름 첫 글자 (ASCII 영문자)
NAME_START_CHARS = frozenset(string.ascii_letters)

# 파라미터 이름 나머지 글자 (ASCII 영숫자, 밑줄)
NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class ScanMode(Enum):
    """스캐너의 어휘 문맥."""

    CODE = "code"
    IN_SINGLE_QUOTE = "in_single_quote"
    IN_DOUBLE_QUOTE = "in_double_quote"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


_QUOTE_MODES = {
    ScanMode.IN_SINGLE_QUOTE: "'",
    ScanMode.IN_DOUBLE_QUOTE: '"',
}


def scan_parameters(sql: Optional[str]) -> Iterator[ParameterPosition]:
    """SQL을 순회하며 파라미터 출현마다 위치 정보를 생성한다.

    닫히지 않은 문자열/주석은 입력 끝까지 소비하며 오류로 취급하지 않는다.
    블록 주석은 중첩을 지원하지 않는다 (처음 만나는 '*/'에서 종료).

    Args:
        sql: 분석할 SQL 문자열 (None 허용)

    Yields:
        출현 순서대로의 ParameterPosition
    """
    if not sql:
        return

    length = len(sql)
    mode = ScanMode.CODE
    i = 0

    while i < length:
        c = sql[i]
        nxt = sql[i + 1] if i + 1 < length else ""

        if mode is ScanMode.CODE:
            if c == "'":
                mode = ScanMode.IN_SINGLE_QUOTE
                i += 1
            elif c == '"':
                mode = ScanMode.IN_DOUBLE_QUOTE
                i += 1
            elif c == "-" and nxt == "-":
                mode = ScanMode.IN_LINE_COMMENT
                i += 2
            elif c == "/" and nxt == "*":
                mode = ScanMode.IN_BLOCK_COMMENT
                i += 2
            elif c == ":" and nxt == ":":
                # PostgreSQL 캐스트 (a::int)
                i += 2
            elif c == ":" and nxt in NAME_START_CHARS:
                end = i + 2
                while end < length and sql[end] in NAME_CHARS:
                    end += 1
                yield ParameterPosition(name=sql[i + 1 : end], start=i, end=end)
                i = end
            else:
                i += 1

        elif mode in _QUOTE_MODES:
            quote = _QUOTE_MODES[mode]
            if c == quote:
                # '' 또는 "" 는 이스케이프된 따옴표
                if nxt == quote:
                    i += 2
                else:
                    mode = ScanMode.CODE
                    i += 1
            else:
                i += 1

        elif mode is ScanMode.IN_LINE_COMMENT:
            if c == "\n":
                mode = ScanMode.CODE
            i += 1

        else:
            if c == "*" and nxt == "/":
                mode = ScanMode.CODE
                i += 2
            else:
                i += 1


class ParameterExtractor:
    """SQL 네임드 파라미터 추출기."""

    def extract_names(self, sql: Optional[str]) -> list[str]:
        """SQL에서 파라미터 이름을 추출한다.

        Args:
            sql: SQL 문자열

        Returns:
            처음 출현한 순서의 중복 없는 파라미터 이름 리스트
        """
        names: list[str] = []
        seen: set[str] = set()
        for position in scan_parameters(sql):
            if position.name in seen:
                continue
            seen.add(position.name)
            names.append(position.name)

        if names:
            summary = summarize_sql(sql)
            logger.debug(
                "extract_names: sql_len=%s sql_hash=%s params=%s",
                summary["len"],
                summary["sha256_8"],
                len(names),
            )
        return names

    def extract_occurrences(self, sql: Optional[str]) -> list[ParameterPosition]:
        """SQL에서 모든 파라미터 출현을 위치와 함께 추출한다.

        이름 리스트와 달리 중복을 제거하지 않는다.

        Args:
            sql: SQL 문자열

        Returns:
            출현 순서대로의 ParameterPosition 리스트
        """
        return list(scan_parameters(sql))


_default_extractor = ParameterExtractor()


def extract_parameter_names(sql: Optional[str]) -> list[str]:
    """SQL에서 중복 없는 파라미터 이름 리스트를 추출한다."""
    return _default_extractor.extract_names(sql)


def extract_parameter_occurrences(sql: Optional[str]) -> list[ParameterPosition]:
    """SQL에서 모든 파라미터 출현을 위치와 함께 추출한다."""
    return _default_extractor.extract_occurrences(sql)
