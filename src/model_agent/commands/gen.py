"""모델 코드 생성: DDL 파일 → Table → Python dataclass 소스."""
from __future__ import annotations
import logging
from pathlib import Path

from rich.console import Console

from model_agent.config import GenConfig, settings
from model_agent.model import Table
from model_agent.parsers import MySQLParser, Parser
from model_agent.code_writer import gen_code, write_code

console = Console()
logger = logging.getLogger(__name__)

PARSERS: list[Parser] = [MySQLParser()]


def load_table(ddl_path: Path) -> Table:
    # 읽기 실패(OSError)는 호출자에게 그대로 전달
    text = ddl_path.read_bytes().decode("utf-8", errors="replace")
    table = Table()
    for p in PARSERS:
        if p.can_parse(text):
            table = p.parse(text)
            break
    else:
        logger.info("no parser accepts %s", ddl_path)
    logger.info("parsed %s: table=%r fields=%d", ddl_path, table.raw_name, len(table.fields))
    return table


def run_gen(
    ddl_path: Path,
    out_dir: Path | None = None,
    out_file: str | None = None,
    config: GenConfig | None = None,
) -> Path | None:
    """
    DDL 파일을 읽어 모델 코드를 생성한다.
    반환: 생성된 파일 경로. CREATE TABLE을 찾지 못하면 None.
    """
    config = config or settings.gen_config()
    table = load_table(ddl_path)
    if not table.name:
        console.print(f"[red]No CREATE TABLE found in[/red] {ddl_path}")
        return None

    base = (out_dir or settings.output_dir) / config.package_name
    out_path = base / (out_file or f"{table.raw_name}.py")

    console.print(f"[bold]Table:[/bold] {table.raw_name} → {table.name}")
    console.print(f"Found [green]{len(table.fields)}[/green] fields, [green]{len(table.indexes)}[/green] indexes")

    write_code(table, out_path, config)
    console.print(f"[bold green]Model:[/bold green] {out_path}")
    return out_path


def render(ddl_path: Path, config: GenConfig | None = None) -> str:
    return gen_code(load_table(ddl_path), config or settings.gen_config())
