"""評価コンテキストの属性キー定義"""

from __future__ import annotations

from enum import StrEnum

from .models import Value


class DataType(StrEnum):
    """評価コンテキストで意味を持つ属性キー。"""

    VARIABLE_KEY = "variableKey"
    CONVERSION = "conversion"
    CUSTOM_DATA = "customData"


class ConversionField(StrEnum):
    """コンバージョン構造体のフィールド名。"""

    GOAL_ID = "goalId"
    REVENUE = "revenue"


class CustomDataField(StrEnum):
    """カスタムデータ構造体のフィールド名。"""

    INDEX = "index"
    VALUES = "values"


def make_conversion(goal_id: int, revenue: float | None = None) -> Value:
    """コンバージョン属性の Value 構造体を作成する。

    Args:
        goal_id: ゴール ID
        revenue: 売上（省略時はフィールド自体を含めない）

    Returns:
        conversion 属性にそのまま設定できる Structure
    """
    fields = {ConversionField.GOAL_ID.value: Value.integer(goal_id)}
    if revenue is not None:
        fields[ConversionField.REVENUE.value] = Value.double(revenue)
    return Value.structure(fields)


def make_custom_data(index: int, *values: str) -> Value:
    """カスタムデータ属性の Value 構造体を作成する。

    Args:
        index: カスタムデータのインデックス
        values: 文字列値（0 個以上）

    Returns:
        customData 属性にそのまま設定できる Structure
    """
    return Value.structure(
        {
            CustomDataField.INDEX.value: Value.integer(index),
            CustomDataField.VALUES.value: Value.list([Value.string(v) for v in values]),
        }
    )
