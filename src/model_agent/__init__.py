"""MySQL CREATE TABLE → Python dataclass 모델 코드 생성."""
from model_agent.model import Table, Field, Index, IndexType, Type, SemanticType, DefaultValue
from model_agent.config import GenConfig
from model_agent.parsers import MySQLParser, parse_ddl
from model_agent.code_writer import gen_code, write_code

__all__ = [
    "Table",
    "Field",
    "Index",
    "IndexType",
    "Type",
    "SemanticType",
    "DefaultValue",
    "GenConfig",
    "MySQLParser",
    "parse_ddl",
    "gen_code",
    "write_code",
]
