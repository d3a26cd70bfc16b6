"""애플리케이션 설정 모듈."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정."""

    # 페이징 설정
    default_page_size: int = Field(default=100, description="기본 페이지 크기")
    max_page_size: int = Field(default=1000, description="최대 페이지 크기")

    # 쿼리 실행 제한
    max_sql_length: int = Field(default=10000, description="허용하는 SQL 최대 길이")
    max_rows: int = Field(default=10000, description="비페이징 조회 시 최대 반환 행 수")

    # DB-API 바인드 변수 스타일 (qmark, format, numeric)
    paramstyle: str = Field(default="qmark", description="바인드 변수 스타일")

    model_config = SettingsConfigDict(
        env_prefix="SQLAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
