"""openfeature プロバイダーのデータモデル"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any


class ValueKind(StrEnum):
    """Value の種別。"""

    NULL = "NULL"
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    LIST = "LIST"
    STRUCTURE = "STRUCTURE"


@dataclass(frozen=True)
class Value:
    """任意の型付き値を表すタグ付き共用体。

    kind が有効な種別を示し、content はその種別のペイロードを保持する。
    LIST は tuple、STRUCTURE は読み取り専用のマッピングとして保持し、
    呼び出し元の入力とは共有しない。
    """

    kind: ValueKind
    content: Any = None

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, value: bool) -> Value:
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def integer(cls, value: int) -> Value:
        return cls(ValueKind.INTEGER, int(value))

    @classmethod
    def double(cls, value: float) -> Value:
        return cls(ValueKind.DOUBLE, float(value))

    @classmethod
    def string(cls, value: str) -> Value:
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def list(cls, items: Iterable[Value]) -> Value:
        return cls(ValueKind.LIST, tuple(items))

    @classmethod
    def structure(cls, fields: Mapping[str, Value]) -> Value:
        return cls(ValueKind.STRUCTURE, MappingProxyType(dict(fields)))

    def __hash__(self) -> int:
        if self.kind == ValueKind.STRUCTURE:
            return hash((self.kind, frozenset(self.content.items())))
        return hash((self.kind, self.content))

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL

    def as_boolean(self) -> bool | None:
        return self.content if self.kind == ValueKind.BOOLEAN else None

    def as_integer(self) -> int | None:
        """整数値を返す。整数値の DOUBLE も整数として扱う。"""
        if self.kind == ValueKind.INTEGER:
            return self.content
        if self.kind == ValueKind.DOUBLE and self.content.is_integer():
            return int(self.content)
        return None

    def as_double(self) -> float | None:
        """浮動小数点値を返す。INTEGER は float に拡張する。"""
        if self.kind == ValueKind.DOUBLE:
            return self.content
        if self.kind == ValueKind.INTEGER:
            return float(self.content)
        return None

    def as_string(self) -> str | None:
        return self.content if self.kind == ValueKind.STRING else None

    def as_list(self) -> list[Value] | None:
        return list(self.content) if self.kind == ValueKind.LIST else None

    def as_structure(self) -> dict[str, Value] | None:
        return dict(self.content) if self.kind == ValueKind.STRUCTURE else None

    def to_python(self) -> Any:
        """Value をプレーンな Python オブジェクトに再帰的に変換する。"""
        if self.kind == ValueKind.LIST:
            return [item.to_python() for item in self.content]
        if self.kind == ValueKind.STRUCTURE:
            return {key: item.to_python() for key, item in self.content.items()}
        return self.content


@dataclass
class EvaluationContext:
    """フラグ評価コンテキスト。"""

    targeting_key: str = ""
    attributes: dict[str, Value] = field(default_factory=dict)

    def get_value(self, key: str) -> Value | None:
        """属性値を取得する。"""
        return self.attributes.get(key)


@dataclass(frozen=True)
class Variable:
    """バリエーションに紐づく型付き変数。"""

    key: str
    type: str
    value: Any = None


@dataclass
class Variation:
    """フラグ評価の結果として選ばれたバリエーション。"""

    key: str
    variables: dict[str, Variable] = field(default_factory=dict)


@dataclass(frozen=True)
class Conversion:
    """コンバージョンデータ。"""

    goal_id: int
    revenue: float = 0.0
    negative: bool = False


@dataclass(frozen=True)
class CustomData:
    """カスタムデータ。"""

    id: int
    values: tuple[str, ...] = ()


BackendData = Conversion | CustomData
