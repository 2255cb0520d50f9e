from __future__ import annotations
from dataclasses import dataclass, field
import keyword
import logging
import re
from typing import Dict, List, Optional, Set

from model_agent.model import Table, Field, Index, IndexType, Type, DefaultValue
from model_agent.parsers.base import Parser
from model_agent.type_map import resolve_type

logger = logging.getLogger(__name__)

QUOTES = "`'\""

_INVALID_IDENT_RE = re.compile(r"\W")


def unquote(s: str) -> str:
    # 바깥쪽 따옴표 한 쌍만 제거
    if len(s) >= 2 and s[0] == s[-1] and s[0] in QUOTES:
        return s[1:-1]
    return s


def export_name(raw: str) -> str:
    """첫 글자만 대문자로. Python 식별자가 안 되는 경우에만 보정한다."""
    name = raw[:1].upper() + raw[1:]
    if name.isidentifier() and not keyword.iskeyword(name):
        return name
    name = _INVALID_IDENT_RE.sub("_", name) or "_"
    if name[0].isdigit():
        name = "_" + name
    if keyword.iskeyword(name):
        name += "_"
    return name


def split_tokens(line: str) -> List[str]:
    """공백 기준 분리. 따옴표/백틱/괄호 안의 공백은 분리하지 않는다."""
    tokens: List[str] = []
    buf: List[str] = []
    quote: Optional[str] = None
    escaped = False
    depth = 0
    for ch in line:
        if quote:
            buf.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\" and quote != "`":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in QUOTES:
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch.isspace() and depth == 0:
            if buf:
                tokens.append("".join(buf))
                buf = []
            continue
        buf.append(ch)
    if buf:
        tokens.append("".join(buf))
    return tokens


def split_columns(group: str) -> List[str]:
    # (`a`,`b`(10)) → ["a", "b"]
    inner = group.strip()
    if inner.startswith("("):
        inner = inner[1:]
    if inner.endswith(")"):
        inner = inner[:-1]
    names = []
    for part in inner.split(","):
        # `a` DESC, `b`(10) → 컬럼명만
        tokens = split_tokens(part)
        if not tokens:
            continue
        name = unquote(tokens[0].split("(")[0])
        if name:
            names.append(name)
    return names


def _space_before_paren(line: str) -> str:
    # KEY idx(`a`) / PRIMARY KEY(`id`) → 첫 괄호 앞에 공백
    pos = line.find("(")
    if pos > 0 and not line[pos - 1].isspace():
        return line[:pos] + " " + line[pos:]
    return line


def _to_uint(s: str) -> int:
    try:
        return max(int(s.strip()), 0)
    except ValueError:
        return 0


def _quoted_value(token: str) -> str:
    # 빈 문자열 리터럴('')은 명시적으로 '' 로 남긴다
    if len(token) == 2 and token[0] == token[1] and token[0] in "'\"":
        return "''"
    return unquote(token)


@dataclass
class _ParseState:
    table: Table
    # raw 필드명 → Field. 파싱 중에만 존재한다.
    fields_by_name: Dict[str, Field] = field(default_factory=dict)
    in_block_comment: bool = False
    # 이미 사용된 생성 필드명
    used_names: Set[str] = field(default_factory=set)


def _unique_name(state: _ParseState, name: str) -> str:
    """보정 결과가 겹치면(`order-no` / `order_no`) 뒤에 _2, _3 ... 을 붙인다."""
    candidate, n = name, 1
    while candidate in state.used_names:
        n += 1
        candidate = f"{name}_{n}"
    if candidate != name:
        logger.debug("field name %s already used, renamed to %s", name, candidate)
    state.used_names.add(candidate)
    return candidate


class MySQLParser(Parser):
    def can_parse(self, text: str) -> bool:
        return "CREATE TABLE" in text.upper()

    def parse(self, data: bytes | str) -> Table:
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        state = _ParseState(table=Table())
        # CRLF/LF 만 줄바꿈으로 취급
        for raw_line in data.replace("\r\n", "\n").split("\n"):
            self._parse_line(state, raw_line.rstrip())
        return state.table

    def _parse_line(self, state: _ParseState, line: str) -> None:
        line = line.strip()
        if not line:
            return

        # 블록 주석: /* ... */ 한 줄짜리는 그 줄만 건너뛴다
        if state.in_block_comment:
            if "*/" in line:
                state.in_block_comment = False
            return
        if line.startswith("/*"):
            if "*/" not in line[2:]:
                state.in_block_comment = True
            return
        if line.startswith("*/"):
            return

        upper = line.upper()
        if line.startswith("--") or upper.startswith("SET") or upper.startswith("DROP"):
            return

        if upper.startswith("CREATE TABLE"):
            self._parse_create(state, line)
            return

        if line.endswith(","):
            line = line[:-1]

        head = line[0].upper()
        if head == "`":
            self._parse_field(state, line)
        elif head == ")":
            self._parse_table_comment(state, line)
        elif head == "P":
            self._parse_primary_key(state, line)
        elif head in ("I", "K"):
            self._parse_index(state, line, IndexType.NORMAL)
        elif head == "U":
            self._parse_index(state, line, IndexType.UNIQUE)
        else:
            logger.debug("skip line: %s", line)

    def _parse_create(self, state: _ParseState, line: str) -> None:
        tokens = line.split()
        pos = 2
        # CREATE TABLE IF NOT EXISTS `t`
        if [t.upper() for t in tokens[2:5]] == ["IF", "NOT", "EXISTS"]:
            pos = 5
        if len(tokens) <= pos:
            return
        # `db`.`t`( → t
        name = tokens[pos].split("(")[0]
        name = unquote(name.split(".")[-1])
        if not name:
            return
        state.table.raw_name = name
        state.table.name = export_name(name)

    def _parse_field(self, state: _ParseState, line: str) -> None:
        tokens = split_tokens(line)
        if len(tokens) < 2:
            logger.debug("skip field line: %s", line)
            return

        raw_name = unquote(tokens[0])
        raw_type = tokens[1]
        name = _unique_name(state, export_name(raw_name))
        f = Field(raw_name=raw_name, name=name, raw_type_name=raw_type, type_name=raw_type)
        state.table.fields.append(f)
        state.fields_by_name[raw_name] = f

        i = 2
        while i < len(tokens):
            word = tokens[i].upper()
            has_next = i + 1 < len(tokens)
            if word == "NOT" and has_next:
                if tokens[i + 1].upper() == "NULL":
                    f.not_null = True
                i += 2
                continue
            if word == "DEFAULT" and has_next:
                f.default = DefaultValue(value=_quoted_value(tokens[i + 1]), valid=True)
                i += 2
                continue
            if word == "COMMENT" and has_next:
                f.comment = unquote(tokens[i + 1])
                i += 2
                continue
            if word == "AUTO_INCREMENT":
                f.auto_increment = True
            elif word == "UNSIGNED":
                f.unsigned = True
            i += 1

        self._parse_type(state, f)

    def _parse_type(self, state: _ParseState, f: Field) -> None:
        base, _, suffix = f.type_name.partition("(")
        f.type_name = base
        size = decimal_size = 0
        if suffix:
            sizes = suffix.rstrip(")").split(",")
            size = _to_uint(sizes[0])
            if len(sizes) > 1:
                decimal_size = _to_uint(sizes[1])
        f.type = Type(
            size=size,
            decimal_size=decimal_size,
            semantic=resolve_type(base, f.unsigned, size),
        )
        if f.type.semantic.import_path:
            state.table.add_import(f.type.semantic.import_path)

    def _parse_table_comment(self, state: _ParseState, line: str) -> None:
        tokens = split_tokens(line)
        for i, token in enumerate(tokens):
            if not token.upper().startswith("COMMENT"):
                continue
            _, eq, value = token.partition("=")
            if not eq:
                # COMMENT = 'x' / COMMENT 'x'
                rest = tokens[i + 1:]
                if rest and rest[0] == "=":
                    rest = rest[1:]
                elif rest and rest[0].startswith("="):
                    rest = [rest[0][1:]]
                if not rest:
                    return
                value = rest[0]
            value = value.rstrip(";")
            state.table.comment = unquote(value)
            return

    def _parse_primary_key(self, state: _ParseState, line: str) -> None:
        tokens = split_tokens(_space_before_paren(line))
        if len(tokens) < 3 or [t.upper() for t in tokens[:2]] != ["PRIMARY", "KEY"]:
            logger.debug("skip key line: %s", line)
            return
        for token in tokens[2:]:
            if token.startswith("("):
                state.table.primary_keys.extend(split_columns(token))
                return

    def _parse_index(self, state: _ParseState, line: str, index_type: IndexType) -> None:
        tokens = split_tokens(_space_before_paren(line))
        words = [t.upper() for t in tokens]
        if index_type is IndexType.UNIQUE:
            # UNIQUE KEY / UNIQUE INDEX / UNIQUE
            if not words or words[0] != "UNIQUE":
                return
            pos = 2 if len(words) > 1 and words[1] in ("KEY", "INDEX") else 1
        else:
            if not words or words[0] not in ("KEY", "INDEX"):
                logger.debug("skip index line: %s", line)
                return
            pos = 1

        rest = tokens[pos:]
        if not rest:
            return
        if rest[0].startswith("("):
            # 이름 없는 인덱스: MySQL처럼 첫 컬럼명을 이름으로 사용
            name, group, tail = None, rest[0], rest[1:]
        elif len(rest) >= 2 and rest[1].startswith("("):
            name, group, tail = unquote(rest[0]), rest[1], rest[2:]
        else:
            logger.debug("skip index line: %s", line)
            return

        columns = split_columns(group)
        if not columns:
            return
        idx = Index(raw_name=name or columns[0], type=index_type, fields=columns)
        for i, token in enumerate(tail):
            if token.upper() == "COMMENT" and i + 1 < len(tail):
                idx.comment = unquote(tail[i + 1])
        state.table.indexes.append(idx)

        for col in idx.fields:
            f = state.fields_by_name.get(col)
            if f is None:
                logger.debug("index %s refers to unknown field %s", idx.raw_name, col)
                continue
            f.indexes.append(idx)


def parse_ddl(data: bytes | str) -> Table:
    return MySQLParser().parse(data)
