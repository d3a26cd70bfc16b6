"""실행 계층 예외 정의.

분석 코어(sqlapp.analysis)는 어떤 입력에도 예외를 던지지 않는다.
아래 예외는 검증/바인딩/페이징을 담당하는 실행 계층에서만 사용한다.
"""


class SqlAppError(Exception):
    """sqlapp 기본 예외."""

    pass


class QueryValidationError(SqlAppError):
    """SQL 검증 실패."""

    pass


class InvalidPagingRequestError(SqlAppError):
    """페이징 요청이 유효하지 않거나 SQL과 호환되지 않음."""

    pass


class ParameterNotProvidedError(SqlAppError):
    """SQL에서 참조한 파라미터 값이 제공되지 않음."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Parameter not provided: {name}")
        self.name = name


class ParameterConversionError(SqlAppError):
    """선언된 타입으로 파라미터 값을 변환할 수 없음."""

    def __init__(self, name: str, type_name: str, value: object) -> None:
        super().__init__(
            f"Cannot convert parameter '{name}' to {type_name}: {value!r}"
        )
        self.name = name
        self.type_name = type_name
        self.value = value
