"""
MySQL CREATE TABLE → Python 모델 코드 생성 CLI.
- model-agent gen: 모델 파일 생성
- model-agent inspect: 파싱 결과 확인
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from model_agent.config import GenConfig, settings
from model_agent.commands.gen import load_table, render, run_gen

console = Console()

app = typer.Typer(
    name="model-agent",
    add_completion=False,
    help="MySQL DDL(CREATE TABLE)을 읽어 Python dataclass 모델 코드를 생성",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG 로그 출력"),
):
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _ddl_arg() -> Path:
    return typer.Argument(..., help="CREATE TABLE 문이 들어있는 .sql 파일")


def _check_exists(ddl_file: Path) -> None:
    if not ddl_file.is_file():
        raise typer.BadParameter(f"파일이 없습니다: {ddl_file}")


@app.command("gen")
def gen(
    ddl_file: Path = _ddl_arg(),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리 (기본: MODEL_OUTPUT_DIR)"),
    out_file: Optional[str] = typer.Option(None, help="출력 파일명 (기본: <테이블명>.py)"),
    package: str = typer.Option(settings.package_name, "--package", "-p", help="출력 패키지명"),
    json_tag: bool = typer.Option(settings.use_json_tag, "--json/--no-json", help="json 태그"),
    orm_tag: bool = typer.Option(settings.use_orm_tag, "--orm/--no-orm", help="orm 태그"),
    sort_fields: bool = typer.Option(settings.sort_fields, "--sort/--no-sort", help="필드명 정렬"),
    stdout: bool = typer.Option(False, "--stdout", help="파일 대신 표준출력으로"),
):
    """DDL 파일에서 모델 코드 생성."""
    _check_exists(ddl_file)
    config = GenConfig(
        use_json_tag=json_tag,
        use_orm_tag=orm_tag,
        sort_fields=sort_fields,
        package_name=package,
    )
    try:
        if stdout:
            code = render(ddl_file, config)
            if not code:
                console.print(f"[red]No CREATE TABLE found in[/red] {ddl_file}")
                raise typer.Exit(code=1)
            typer.echo(code, nl=False)
            return
        out_path = run_gen(ddl_file, out_dir=out_dir, out_file=out_file, config=config)
    except OSError as e:
        console.print(f"[red]Failed to read {ddl_file}:[/red] {e}")
        raise typer.Exit(code=1)
    if out_path is None:
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_table(ddl_file: Path = _ddl_arg()):
    """파싱된 테이블 구조 출력."""
    _check_exists(ddl_file)
    try:
        table = load_table(ddl_file)
    except OSError as e:
        console.print(f"[red]Failed to read {ddl_file}:[/red] {e}")
        raise typer.Exit(code=1)
    if not table.name:
        console.print(f"[red]No CREATE TABLE found in[/red] {ddl_file}")
        raise typer.Exit(code=1)

    title = f"{table.raw_name} → {table.name}"
    if table.comment:
        title += f" ({escape(table.comment)})"
    out = RichTable(title=title)
    for col in ("Column", "Name", "DDL type", "Type", "Flags", "Default", "Comment"):
        out.add_column(col)
    for f in table.fields:
        flags = []
        if table.is_primary_key(f.raw_name): flags.append("PK")
        if f.auto_increment: flags.append("AI")
        if f.unsigned: flags.append("UNSIGNED")
        if f.not_null: flags.append("NOT NULL")
        default = f.default.value if f.default.valid else "-"
        out.add_row(
            f.raw_name, f.name, f.raw_type_name, f.type.name or "?",
            ", ".join(flags), default, f.comment,
        )
    console.print(out)

    if table.primary_keys:
        console.print(f"[bold]Primary key:[/bold] {', '.join(table.primary_keys)}")
    for idx in table.indexes:
        note = f": {escape(idx.comment)}" if idx.comment else ""
        console.print(f"[bold]{idx.type.tag_name}[/bold] {idx.raw_name} ({', '.join(idx.fields)}){note}")
