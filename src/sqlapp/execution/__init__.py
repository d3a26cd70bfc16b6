"""쿼리 실행 계층 - 검증, 파라미터 바인딩, 페이징."""
