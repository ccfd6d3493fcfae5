"""Result types for the developer SQL console and schema browser."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Ad-hoc rows have no fixed shape: column name -> SQLite scalar.
SQLValue = Union[str, int, float, bytes, None]
QueryRow = Dict[str, SQLValue]


@dataclass
class QueryValidation:
    is_valid: bool
    is_dangerous: bool
    message: Optional[str] = None


@dataclass
class QueryResult:
    columns: List[str] = field(default_factory=list)
    rows: List[QueryRow] = field(default_factory=list)
    error: Optional[str] = None
    affected_rows: Optional[int] = None

    @property
    def is_error(self) -> bool:
        """True if the statement failed."""
        return self.error is not None


@dataclass
class ColumnInfo:
    name: str
    type: str
    nullable: bool
    default_value: Any
    primary_key: bool


@dataclass
class TableInfo:
    name: str
    columns: List[ColumnInfo] = field(default_factory=list)
    indexes: List[str] = field(default_factory=list)
