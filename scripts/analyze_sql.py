#!/usr/bin/env python
"""SQL 분석 데모 스크립트.

SQL 텍스트에서 파라미터를 추출하고 페이징 호환성을 확인합니다.

사용법:
    python scripts/analyze_sql.py "SELECT * FROM t WHERE id = :id ORDER BY id"
    python scripts/analyze_sql.py --file query.sql
    python scripts/analyze_sql.py --demo              # 샘플 SQL로 데모 실행
    python scripts/analyze_sql.py --demo --page 2 --page-size 20
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# 프로젝트 루트 경로 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from sqlapp.analysis.parameter_extractor import (
    extract_parameter_names,
    extract_parameter_occurrences,
)
from sqlapp.analysis.statement_analyzer import paging_compatibility
from sqlapp.core.config import Settings
from sqlapp.core.models import PagingCompatibility, PagingRequest
from sqlapp.execution.pagination import Paginator

console = Console()

SAMPLE_SQLS = [
    "SELECT * FROM users WHERE id = :userId AND status = :status ORDER BY id",
    "SELECT ':notParam' AS label, name FROM users WHERE name = :name",
    "-- filter by :ignored\nSELECT * FROM orders WHERE created_at > :since",
    "SELECT id::text FROM t /* :hidden */ WHERE a = :a OR b = :a LIMIT 10",
    "UPDATE users SET name = :name WHERE id = :id",
]

STATUS_STYLES = {
    PagingCompatibility.COMPATIBLE: "green",
    PagingCompatibility.NO_ORDER_BY: "yellow",
    PagingCompatibility.HAS_LIMIT_OFFSET: "red",
    PagingCompatibility.NOT_SELECT: "dim",
}


def render_analysis(sql: str, paginator: Paginator, request: PagingRequest) -> None:
    """SQL 하나의 분석 결과를 출력."""
    console.print(Panel(sql, title="📝 SQL", border_style="blue"))

    table = Table(title="🔍 파라미터 출현 위치")
    table.add_column("이름", style="cyan")
    table.add_column("start", justify="right")
    table.add_column("end", justify="right")
    for position in extract_parameter_occurrences(sql):
        table.add_row(position.name, str(position.start), str(position.end))
    console.print(table)

    console.print(f"📊 파라미터 목록: {extract_parameter_names(sql)}")

    status = paging_compatibility(sql)
    style = STATUS_STYLES[status]
    console.print(f"📄 페이징 호환성: [{style}]{status.name}[/{style}] - {status.description}")

    if status.is_compatible or status.allows_warning:
        console.print(f"   → {paginator.paginate_sql(sql, request)}")
        console.print(f"   → {paginator.count_sql(sql)}")
    console.print()


def main():
    """메인 함수."""
    parser = argparse.ArgumentParser(
        description="SQL 파라미터 추출 및 페이징 호환성 분석",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("sql", nargs="?", help="분석할 SQL 텍스트")
    parser.add_argument("--file", type=Path, help="SQL 파일 경로")
    parser.add_argument("--demo", action="store_true", help="샘플 SQL로 데모 실행")
    parser.add_argument("--page", type=int, default=0, help="페이지 번호 (0부터)")
    parser.add_argument("--page-size", type=int, default=None, help="페이지 크기")

    args = parser.parse_args()

    settings = Settings()
    paginator = Paginator(settings)
    request = paginator.default_request(page=args.page)
    if args.page_size is not None:
        request.page_size = args.page_size

    if args.demo:
        sqls = SAMPLE_SQLS
    elif args.file:
        sqls = [args.file.read_text(encoding="utf-8")]
    elif args.sql:
        sqls = [args.sql]
    else:
        parser.error("SQL 텍스트, --file 또는 --demo 중 하나를 지정하세요.")

    for sql in sqls:
        render_analysis(sql, paginator, request)

    console.print("[bold green]✅ 분석 완료![/bold green]")


if __name__ == "__main__":
    main()
