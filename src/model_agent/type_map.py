from __future__ import annotations
from model_agent.model import SemanticType

# unsigned 여부와 무관한 매핑
SIMPLE_TYPE_MAP = {
    "decimal": SemanticType.FLOAT64,
    "float": SemanticType.FLOAT64,
    "char": SemanticType.STRING,
    "varchar": SemanticType.STRING,
    "text": SemanticType.STRING,
    "longtext": SemanticType.STRING,
    "date": SemanticType.DATETIME,
    "datetime": SemanticType.DATETIME,
    "timestamp": SemanticType.DATETIME,
    "time": SemanticType.DATETIME,
    "json": SemanticType.DYNAMIC,
}

# (signed, unsigned)
INTEGER_TYPE_MAP = {
    "smallint": (SemanticType.INT16, SemanticType.UINT16),
    "int": (SemanticType.INT, SemanticType.UINT),
    "integer": (SemanticType.INT, SemanticType.UINT),
    "bigint": (SemanticType.INT64, SemanticType.UINT64),
}


def resolve_type(type_name: str, unsigned: bool = False, size: int = 0) -> SemanticType:
    """DDL 기본 타입명(괄호 제외) → SemanticType. 모르는 타입은 UNKNOWN."""
    name = type_name.lower()
    if name == "tinyint":
        return SemanticType.BOOL if size == 1 else SemanticType.INT8
    if name in INTEGER_TYPE_MAP:
        signed_type, unsigned_type = INTEGER_TYPE_MAP[name]
        return unsigned_type if unsigned else signed_type
    return SIMPLE_TYPE_MAP.get(name, SemanticType.UNKNOWN)
