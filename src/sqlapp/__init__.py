"""SQL 텍스트 분석 코어 패키지."""

__version__ = "0.1.0"
