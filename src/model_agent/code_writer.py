"""Table 모델 → Python dataclass 소스 생성."""
from __future__ import annotations
import ast
import logging
from pathlib import Path
from typing import Dict, List, Optional

from model_agent.config import GenConfig
from model_agent.errors import CodegenError
from model_agent.model import Table, Field

logger = logging.getLogger(__name__)

HEADER = "Code generated by model-agent. DO NOT EDIT."
FRAMEWORK_IMPORT = "dataclasses"


def _const(value: str) -> ast.Constant:
    return ast.Constant(value=value, kind=None)


def _dotted(path: str) -> ast.expr:
    # "datetime.datetime" → Attribute(Name("datetime"), "datetime")
    head, *attrs = path.split(".")
    node: ast.expr = ast.Name(id=head, ctx=ast.Load())
    for attr in attrs:
        node = ast.Attribute(value=node, attr=attr, ctx=ast.Load())
    return node


def build_orm_tag(f: Field, table: Table) -> str:
    parts = [f"column:{f.raw_name};type:{f.raw_type_name}"]
    if f.default.valid:
        parts.append(f"default:{f.default.value}")
    if table.is_primary_key(f.raw_name):
        parts.append("primaryKey")
    for index in f.indexes:
        for priority, name in enumerate(index.fields, start=1):
            if name == f.raw_name:
                parts.append(f"{index.type.tag_name}:{index.raw_name},priority:{priority}")
    return ";".join(parts)


def build_tags(f: Field, table: Table, config: GenConfig) -> Dict[str, str]:
    """json / orm 태그. 둘 다 켜져 있으면 하나의 metadata로 합쳐진다."""
    tags: Dict[str, str] = {}
    if config.use_json_tag:
        tags["json"] = f.raw_name
    if config.use_orm_tag:
        tags["orm"] = build_orm_tag(f, table)
    return tags


def _field_nodes(f: Field, table: Table, config: GenConfig) -> List[ast.stmt]:
    value: Optional[ast.expr] = None
    tags = build_tags(f, table, config)
    if tags:
        metadata = ast.Dict(
            keys=[_const(k) for k in tags],
            values=[_const(v) for v in tags.values()],
        )
        value = ast.Call(
            func=_dotted(f"{FRAMEWORK_IMPORT}.field"),
            args=[],
            keywords=[ast.keyword(arg="metadata", value=metadata)],
        )

    nodes: List[ast.stmt] = [
        ast.AnnAssign(
            target=ast.Name(id=f.name, ctx=ast.Store()),
            annotation=_dotted(str(f.type)),
            value=value,
            simple=1,
        )
    ]
    # 필드 주석은 attribute docstring으로
    if f.comment:
        nodes.append(ast.Expr(value=_const(f.comment)))
    return nodes


def _table_name_method(table: Table) -> ast.FunctionDef:
    node = ast.parse("def table_name(self) -> str:\n    return ''\n").body[0]
    node.body[0].value = _const(table.raw_name)
    return node


def _class_def(table: Table, config: GenConfig) -> ast.ClassDef:
    node = ast.parse(f"@{FRAMEWORK_IMPORT}.dataclass\nclass {table.name}:\n    pass\n").body[0]
    body: List[ast.stmt] = []
    if table.comment:
        body.append(ast.Expr(value=_const(f"{table.name} {table.comment}")))

    fields = table.fields
    if config.sort_fields:
        fields = sorted(fields, key=lambda f: f.name)
    for f in fields:
        body.extend(_field_nodes(f, table, config))

    body.append(_table_name_method(table))
    node.body = body
    return node


def _module_nodes(table: Table, config: GenConfig) -> List[ast.stmt]:
    doc = f"{HEADER}\n\npackage: {config.package_name}\ntable: {table.raw_name}\n"
    nodes: List[ast.stmt] = [
        ast.Expr(value=_const(doc)),
        ast.Import(names=[ast.alias(name=FRAMEWORK_IMPORT, asname=None)]),
    ]
    for path in sorted(table.imports - {FRAMEWORK_IMPORT}):
        nodes.append(ast.Import(names=[ast.alias(name=path, asname=None)]))
    nodes.append(_class_def(table, config))
    return nodes


def _separator(prev: ast.stmt, node: ast.stmt) -> str:
    if isinstance(prev, ast.Import) and isinstance(node, ast.Import):
        return "\n"
    if isinstance(node, ast.ClassDef) or isinstance(prev, ast.ClassDef):
        return "\n\n\n"
    return "\n\n"


def format_module(nodes: List[ast.stmt], filename: str = "<generated>") -> str:
    """top-level 문장 단위로 unparse 후 PEP 8 빈 줄 규칙으로 이어 붙이고 컴파일로 검증."""
    chunks: List[str] = []
    prev: Optional[ast.stmt] = None
    for node in nodes:
        module = ast.fix_missing_locations(ast.Module(body=[node], type_ignores=[]))
        if prev is not None:
            chunks.append(_separator(prev, node))
        chunks.append(ast.unparse(module).strip("\n"))
        prev = node
    source = "".join(chunks) + "\n"
    try:
        compile(source, filename, "exec")
    except SyntaxError as e:
        raise CodegenError(f"generated source is not valid Python: {e}") from e
    return source


def gen_code(table: Table, config: GenConfig | None = None) -> str:
    """테이블 이름이 없으면 빈 문자열."""
    if table is None or not table.name:
        return ""
    config = config or GenConfig()
    logger.debug("generating %s (%d fields)", table.name, len(table.fields))
    return format_module(_module_nodes(table, config), filename=f"<{table.raw_name}>")


def write_code(table: Table, out_path: Path, config: GenConfig | None = None) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(gen_code(table, config), encoding="utf-8")
    return out_path
