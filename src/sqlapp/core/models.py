"""Core 데이터 모델 정의."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ParameterPosition:
    """SQL 내 파라미터 출현 위치.

    start는 ':' 문자의 위치, end는 이름 마지막 문자 다음 위치이다 (반열린 구간).
    """

    name: str
    start: int
    end: int


class PagingCompatibility(Enum):
    """페이징 호환성 상태."""

    COMPATIBLE = "Compatible with pagination"
    NOT_SELECT = "Not a SELECT query"
    HAS_LIMIT_OFFSET = "Already contains LIMIT/OFFSET clause"
    NO_ORDER_BY = "No ORDER BY clause (results may be inconsistent)"

    @property
    def description(self) -> str:
        """사람이 읽을 수 있는 설명."""
        return self.value

    @property
    def is_compatible(self) -> bool:
        """경고 없이 페이징을 적용할 수 있는 상태인지 여부."""
        return self is PagingCompatibility.COMPATIBLE

    @property
    def allows_warning(self) -> bool:
        """경고와 함께 페이징을 허용하는 상태인지 여부."""
        return self is PagingCompatibility.NO_ORDER_BY


@dataclass
class PagingRequest:
    """페이징 요청."""

    page: int = 0
    page_size: int = 100
    ignore_order_by_warning: bool = False

    @property
    def offset(self) -> int:
        """OFFSET 값."""
        return self.page * self.page_size


@dataclass
class PagedResult(Generic[T]):
    """페이징 결과 컨테이너."""

    data: list[T]
    page: int
    page_size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def of(
        cls, data: list[T], page: int, page_size: int, total_elements: int
    ) -> "PagedResult[T]":
        """전체 건수로부터 페이지 정보를 계산하여 결과를 생성한다.

        Args:
            data: 현재 페이지의 데이터
            page: 0부터 시작하는 페이지 번호
            page_size: 페이지 크기
            total_elements: 전체 건수

        Returns:
            PagedResult
        """
        total_pages = math.ceil(total_elements / page_size)
        return cls(
            data=data,
            page=page,
            page_size=page_size,
            total_elements=total_elements,
            total_pages=total_pages,
            has_next=page < total_pages - 1,
            has_previous=page > 0,
        )


@dataclass
class ParameterizedQuery:
    """위치 기반 바인드 변수로 변환된 쿼리."""

    sql: str
    parameters: list[Any] = field(default_factory=list)
    parameter_types: list[Optional[str]] = field(default_factory=list)
