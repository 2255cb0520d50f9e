from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Set


class SemanticType(Enum):
    """DDL 컬럼 타입이 매핑되는 대상 타입. (type_name, annotation, import_path)"""

    BOOL = ("bool", "bool", None)
    INT8 = ("int8", "int", None)
    INT16 = ("int16", "int", None)
    UINT16 = ("uint16", "int", None)
    INT = ("int", "int", None)
    UINT = ("uint", "int", None)
    INT64 = ("int64", "int", None)
    UINT64 = ("uint64", "int", None)
    FLOAT64 = ("float64", "float", None)
    STRING = ("string", "str", None)
    DATETIME = ("datetime", "datetime.datetime", "datetime")
    DYNAMIC = ("any", "typing.Any", "typing")
    UNKNOWN = ("", "typing.Any", "typing")  # 미해결 타입

    def __init__(self, type_name: str, annotation: str, import_path: Optional[str]):
        self.type_name = type_name
        self.annotation = annotation
        self.import_path = import_path


class IndexType(Enum):
    NORMAL = "index"
    UNIQUE = "uniqueIndex"

    @property
    def tag_name(self) -> str:
        return self.value


@dataclass
class Type:
    size: int = 0
    decimal_size: int = 0
    semantic: SemanticType = SemanticType.UNKNOWN

    @property
    def name(self) -> str:
        return self.semantic.type_name

    def __str__(self) -> str:
        return self.semantic.annotation


@dataclass
class DefaultValue:
    value: str = ""
    valid: bool = False


@dataclass
class Index:
    raw_name: str
    type: IndexType = IndexType.NORMAL
    fields: List[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class Field:
    raw_name: str
    name: str
    raw_type_name: str
    type_name: str
    type: Type = field(default_factory=Type)
    default: DefaultValue = field(default_factory=DefaultValue)
    comment: str = ""
    auto_increment: bool = False
    unsigned: bool = False
    not_null: bool = False
    # 이 필드를 포함하는 인덱스 (소유 관계 아님)
    indexes: List[Index] = field(default_factory=list, repr=False, compare=False)


@dataclass
class Table:
    name: str = ""
    raw_name: str = ""
    fields: List[Field] = field(default_factory=list)
    primary_keys: List[str] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    imports: Set[str] = field(default_factory=set)
    comment: str = ""

    def add_import(self, path: str) -> None:
        self.imports.add(path)

    def is_primary_key(self, raw_name: str) -> bool:
        return raw_name in self.primary_keys
