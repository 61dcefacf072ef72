"""フラグ評価エンジンのプロトコル"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .models import BackendData, Variable, Variation


class VariationEngineProtocol(Protocol):
    """フラグキーからバリエーションを取得するエンジン。

    フラグが存在しない、または無効化されている場合は FeatureError を送出する。
    """

    def get_variation(self, flag_key: str) -> Variation: ...


class VariableEngineProtocol(Protocol):
    """バリエーションキーと変数を個別に取得するエンジン。"""

    def get_variation_key(self, flag_key: str) -> str: ...

    def get_variation_variables(
        self, flag_key: str, variation_key: str
    ) -> Mapping[str, Any]: ...


class DataEngineProtocol(Protocol):
    """データ送信とライフサイクルを扱うエンジン。"""

    def add_data(self, *data: BackendData) -> None: ...

    def wait_for_ready(self, timeout: float) -> bool: ...

    def close(self) -> None: ...


class EngineProtocol(VariationEngineProtocol, DataEngineProtocol, Protocol):
    """プロバイダーが利用するエンジンプロトコル。"""


def variable_type(value: Any) -> str:
    """ネイティブ値から変数の型タグを求める。"""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "BOOLEAN"
    if isinstance(value, (int, float)):
        return "NUMBER"
    if isinstance(value, str):
        return "STRING"
    return "JSON"


class VariableEngineAdapter:
    """VariableEngineProtocol を VariationEngineProtocol として扱うアダプター。"""

    def __init__(self, engine: VariableEngineProtocol) -> None:
        self._engine = engine

    def get_variation(self, flag_key: str) -> Variation:
        variation_key = self._engine.get_variation_key(flag_key)
        variables = self._engine.get_variation_variables(flag_key, variation_key)
        return Variation(
            key=variation_key,
            variables={
                name: Variable(key=name, type=variable_type(value), value=value)
                for name, value in variables.items()
            },
        )
