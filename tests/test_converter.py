"""データ変換のユニットテスト"""

import json
from datetime import datetime, timezone

import pytest
from openfeature.evaluation_context import EvaluationContext as OpenFeatureContext

from k1s0_openfeature import (
    Conversion,
    CustomData,
    EvaluationContext,
    ProviderError,
    ProviderErrorCodes,
    Value,
    make_conversion,
    make_custom_data,
    to_backend_records,
    to_context_value,
    to_evaluation_context,
    to_generic_value,
)


def make_context(attributes: dict[str, Value]) -> EvaluationContext:
    return EvaluationContext(targeting_key="", attributes=attributes)


def test_to_backend_records_none_context() -> None:
    """コンテキストなしは空リスト。"""
    assert to_backend_records(None) == []


def test_to_backend_records_empty_attributes() -> None:
    """属性なしは空リスト。"""
    assert to_backend_records(make_context({})) == []


def test_to_backend_records_conversion_without_revenue() -> None:
    """revenue なしのコンバージョンは 0.0 になること。"""
    ctx = make_context({"conversion": Value.structure({"goalId": Value.integer(7)})})
    assert to_backend_records(ctx) == [Conversion(goal_id=7, revenue=0.0, negative=False)]


def test_to_backend_records_conversion_with_revenue() -> None:
    """revenue 付きのコンバージョン。"""
    ctx = make_context({"conversion": make_conversion(12, 99.5)})
    result = to_backend_records(ctx)
    assert len(result) == 1
    assert result[0].goal_id == 12
    assert result[0].revenue == pytest.approx(99.5)


def test_to_backend_records_conversion_missing_fields_default() -> None:
    """フィールドが欠けたコンバージョンは既定値になること。"""
    ctx = make_context(
        {"conversion": Value.structure({"goalId": Value.string("x"), "revenue": Value.boolean(True)})}
    )
    assert to_backend_records(ctx) == [Conversion(goal_id=0, revenue=0.0)]


@pytest.mark.parametrize(
    "values",
    [(), ("",), ("v1",), ("v1", "v1"), ("v1", "v2", "v3")],
)
def test_to_backend_records_custom_data(values: tuple[str, ...]) -> None:
    """カスタムデータの値が保持されること。"""
    fields = {"index": Value.integer(5)}
    if len(values) == 1:
        fields["values"] = Value.string(values[0])
    elif len(values) > 1:
        fields["values"] = Value.list([Value.string(v) for v in values])
    ctx = make_context({"customData": Value.structure(fields)})
    assert to_backend_records(ctx) == [CustomData(id=5, values=values)]


def test_to_backend_records_custom_data_batch_keeps_order() -> None:
    """バッチのカスタムデータがリスト順に変換されること。"""
    ctx = make_context(
        {
            "customData": Value.list(
                [make_custom_data(1, "a", "b"), Value.structure({"index": Value.integer(2)})]
            )
        }
    )
    assert to_backend_records(ctx) == [
        CustomData(id=1, values=("a", "b")),
        CustomData(id=2, values=()),
    ]


def test_to_backend_records_custom_data_drops_non_string_values() -> None:
    """文字列以外の値は無視されること。"""
    ctx = make_context(
        {
            "customData": Value.structure(
                {
                    "index": Value.integer(1),
                    "values": Value.list([Value.string("a"), Value.integer(2), Value.string("b")]),
                }
            )
        }
    )
    assert to_backend_records(ctx) == [CustomData(id=1, values=("a", "b"))]


def test_to_backend_records_custom_data_missing_index() -> None:
    """index がない場合は 0 になること。"""
    ctx = make_context({"customData": Value.structure({"values": Value.string("a")})})
    assert to_backend_records(ctx) == [CustomData(id=0, values=("a",))]


def test_to_backend_records_all_types() -> None:
    """属性の走査順、続いてリスト順に変換されること。"""
    ctx = make_context(
        {
            "conversion": Value.list([make_conversion(1), make_conversion(2)]),
            "variableKey": Value.string("ignored"),
            "customData": Value.list([make_custom_data(3), make_custom_data(4)]),
        }
    )
    assert to_backend_records(ctx) == [
        Conversion(goal_id=1),
        Conversion(goal_id=2),
        CustomData(id=3),
        CustomData(id=4),
    ]


def test_to_backend_records_skips_unknown_and_non_structure() -> None:
    """未知のキーと構造体以外の要素は無視されること。"""
    ctx = make_context(
        {
            "unknown": make_conversion(1),
            "conversion": Value.list([Value.integer(1), make_conversion(9)]),
        }
    )
    assert to_backend_records(ctx) == [Conversion(goal_id=9)]


@pytest.mark.parametrize(
    ("native", "expected"),
    [
        (None, Value.null()),
        (Value.integer(1), Value.integer(1)),
        (42, Value.integer(42)),
        (3.14, Value.double(3.14)),
        (True, Value.boolean(True)),
        ("test", Value.string("test")),
        (json.loads('{"key": "value"}'), Value.structure({"key": Value.string("value")})),
        (
            json.loads("[1, 2, 3]"),
            Value.list([Value.integer(1), Value.integer(2), Value.integer(3)]),
        ),
    ],
)
def test_to_generic_value(native: object, expected: Value) -> None:
    """ネイティブ値が Value に変換されること。"""
    assert to_generic_value(native) == expected


def test_to_generic_value_nested_json() -> None:
    """ネストした JSON ツリーの変換。"""
    native = json.loads('{"a": {"b": [1, 2.5, null, false]}}')
    assert to_generic_value(native) == Value.structure(
        {
            "a": Value.structure(
                {
                    "b": Value.list(
                        [Value.integer(1), Value.double(2.5), Value.null(), Value.boolean(False)]
                    )
                }
            )
        }
    )


def test_to_generic_value_unsupported_type_is_null() -> None:
    """未対応の型は NULL になること。"""
    assert to_generic_value(object()) == Value.null()


def test_to_generic_value_unsupported_json_node_raises() -> None:
    """JSON ツリー内の未対応型は ProviderError になること。"""
    with pytest.raises(ProviderError) as exc_info:
        to_generic_value({"key": object()})
    assert exc_info.value.code == ProviderErrorCodes.UNSUPPORTED_JSON_TYPE


def test_to_evaluation_context() -> None:
    """OpenFeature SDK のコンテキストが変換されること。"""
    ctx = OpenFeatureContext(
        targeting_key="visitor",
        attributes={"variableKey": "k", "conversion": {"goalId": 3}},
    )
    result = to_evaluation_context(ctx)
    assert result is not None
    assert result.targeting_key == "visitor"
    assert result.get_value("variableKey") == Value.string("k")
    assert to_backend_records(result) == [Conversion(goal_id=3)]


def test_to_evaluation_context_none() -> None:
    """コンテキストなしは None。"""
    assert to_evaluation_context(None) is None


def test_to_context_value_unsupported_node_is_null() -> None:
    """属性値ツリー内の未対応型は NULL になり、例外を送出しないこと。"""
    at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert to_context_value({"at": at, "tags": [at, "x"]}) == Value.structure(
        {
            "at": Value.null(),
            "tags": Value.list([Value.null(), Value.string("x")]),
        }
    )
    assert to_context_value(at) == Value.null()


def test_to_evaluation_context_with_datetime_attributes() -> None:
    """日時を含む属性があっても変換でき、他の属性は保たれること。"""
    at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ctx = OpenFeatureContext(
        targeting_key="visitor",
        attributes={
            "user": {"signed_up": at},
            "conversion": {"goalId": 4, "at": at},
        },
    )
    result = to_evaluation_context(ctx)
    assert result is not None
    assert result.get_value("user") == Value.structure({"signed_up": Value.null()})
    assert to_backend_records(result) == [Conversion(goal_id=4)]
