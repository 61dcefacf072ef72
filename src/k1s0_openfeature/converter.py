"""評価コンテキストとエンジンのデータを相互変換する"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from openfeature.evaluation_context import EvaluationContext as OpenFeatureContext

from .exceptions import ProviderError, ProviderErrorCodes
from .models import BackendData, Conversion, CustomData, EvaluationContext, Value, ValueKind
from .types import ConversionField, CustomDataField, DataType

logger = structlog.stdlib.get_logger(__name__)

_JSON_TYPES = (bool, int, float, str, Mapping, list, tuple)


def to_backend_records(context: EvaluationContext | None) -> list[BackendData]:
    """評価コンテキストの属性をエンジンのデータに変換する。

    conversion / customData 属性のみを対象とし、それ以外のキーは無視する。
    属性値が LIST の場合は各要素を、それ以外は値そのものを 1 件として扱う。
    欠けたフィールドは既定値で補い、例外は送出しない。

    Args:
        context: 評価コンテキスト（None 可）

    Returns:
        属性の走査順、続いてリスト内の順に並んだデータ
    """
    if context is None or not context.attributes:
        return []

    records: list[BackendData] = []
    for key, value in context.attributes.items():
        if key == DataType.CONVERSION.value:
            build = _make_conversion
        elif key == DataType.CUSTOM_DATA.value:
            build = _make_custom_data
        else:
            continue

        items = value.as_list() if value.kind == ValueKind.LIST else [value]
        for item in items:
            fields = item.as_structure()
            if fields is None:
                logger.debug("skip_non_structure_item", attribute=key, kind=item.kind)
                continue
            records.append(build(fields))
    return records


def _make_conversion(fields: dict[str, Value]) -> Conversion:
    goal_id = _field(fields, ConversionField.GOAL_ID.value, Value.as_integer)
    revenue = _field(fields, ConversionField.REVENUE.value, Value.as_double)
    return Conversion(
        goal_id=goal_id if goal_id is not None else 0,
        revenue=revenue if revenue is not None else 0.0,
        negative=False,
    )


def _make_custom_data(fields: dict[str, Value]) -> CustomData:
    index = _field(fields, CustomDataField.INDEX.value, Value.as_integer)
    raw = fields.get(CustomDataField.VALUES.value)
    if raw is None:
        items: list[Value] = []
    elif raw.kind == ValueKind.LIST:
        items = raw.as_list()
    else:
        items = [raw]
    values = tuple(s for s in (item.as_string() for item in items) if s is not None)
    return CustomData(id=index if index is not None else 0, values=values)


def _field(fields: dict[str, Value], name: str, accessor: Any) -> Any:
    value = fields.get(name)
    return accessor(value) if value is not None else None


def to_generic_value(native: Any) -> Value:
    """エンジンのネイティブ値を Value に変換する。

    未対応の型は NULL になる。JSON ツリー内部に未対応の型がある場合は
    ProviderError(UNSUPPORTED_JSON_TYPE) を送出する。
    """
    if isinstance(native, Value):
        return native
    if native is None or isinstance(native, _JSON_TYPES):
        return _from_json(native, strict=True)
    logger.debug("unsupported_native_type", type=type(native).__name__)
    return Value.null()


def to_context_value(native: Any) -> Value:
    """呼び出し元が渡した属性値を Value に変換する。

    to_generic_value と異なり、ツリー内部の未対応の型も NULL にして送出しない。
    """
    if isinstance(native, Value):
        return native
    return _from_json(native, strict=False)


def _from_json(node: Any, strict: bool) -> Value:
    if isinstance(node, Value):
        return node
    # bool は int のサブクラスなので先に判定する
    if node is None:
        return Value.null()
    if isinstance(node, bool):
        return Value.boolean(node)
    if isinstance(node, int):
        return Value.integer(node)
    if isinstance(node, float):
        return Value.double(node)
    if isinstance(node, str):
        return Value.string(node)
    if isinstance(node, Mapping):
        return Value.structure({str(k): _from_json(v, strict) for k, v in node.items()})
    if isinstance(node, (list, tuple)):
        return Value.list(_from_json(item, strict) for item in node)
    if not strict:
        logger.debug("unsupported_context_value_type", type=type(node).__name__)
        return Value.null()
    raise ProviderError(
        code=ProviderErrorCodes.UNSUPPORTED_JSON_TYPE,
        message=f"Unsupported JSON value type: {type(node).__name__}",
    )


def to_evaluation_context(context: OpenFeatureContext | None) -> EvaluationContext | None:
    """OpenFeature SDK の評価コンテキストを変換する。

    日時などの未対応の属性値は NULL になり、評価を妨げない。
    """
    if context is None:
        return None
    return EvaluationContext(
        targeting_key=context.targeting_key or "",
        attributes={key: to_context_value(value) for key, value in context.attributes.items()},
    )
