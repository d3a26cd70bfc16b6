"""로그 출력용 SQL 요약.

원문 SQL은 로그에 남기지 않고 길이와 해시 접두사만 남긴다.
"""

import hashlib
from typing import Optional


def summarize_sql(sql: Optional[str]) -> dict[str, int | str]:
    """SQL의 길이와 sha256 앞 8자리를 반환한다.

    Args:
        sql: 원본 SQL 문자열 (None 허용)

    Returns:
        {"len": 길이, "sha256_8": 해시 접두사}
    """
    text = sql or ""
    sql_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()[:8]
    return {"len": len(text), "sha256_8": sql_hash}
