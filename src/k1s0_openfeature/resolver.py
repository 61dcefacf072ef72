"""フラグ評価リゾルバー"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog
from openfeature.exception import ErrorCode
from openfeature.flag_evaluation import FlagResolutionDetails, Reason

from .client import VariationEngineProtocol
from .converter import to_generic_value
from .exceptions import FeatureError
from .models import EvaluationContext, Value, Variation
from .types import DataType

T = TypeVar("T")

logger = structlog.stdlib.get_logger(__name__)

TYPE_MISMATCH_MESSAGE = "The type of value received is different from the requested value."
CONTEXT_REQUIRED_MESSAGE = "The evaluation context is required to resolve the flag"


class Resolver:
    """エンジンのバリエーションから型付きの評価結果を作成するリゾルバー。

    エンジンへの参照以外に状態を持たないため、複数スレッドから同時に呼び出せる。
    評価中のエラーは送出せず、すべてデフォルト値とエラーコードを持つ結果に変換する。
    """

    def __init__(self, engine: VariationEngineProtocol, require_context: bool = True) -> None:
        """
        Args:
            engine: バリエーションを返すフラグ評価エンジン
            require_context: True の場合、評価コンテキストがなければ
                TARGETING_KEY_MISSING を返す
        """
        self._engine = engine
        self._require_context = require_context

    def resolve(
        self,
        flag_key: str,
        default_value: T,
        context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[T]:
        """フラグを評価する。

        Args:
            flag_key: フラグキー
            default_value: エラー時に返すデフォルト値。型の照合にも使う
            context: 評価コンテキスト（None 可）

        Returns:
            評価結果。reason は常に STATIC
        """
        if self._require_context and context is None:
            return _error(default_value, None, ErrorCode.TARGETING_KEY_MISSING, CONTEXT_REQUIRED_MESSAGE)

        try:
            variation = self._engine.get_variation(flag_key)
            variant = variation.key

            # variableKey がなければ最初の変数を使う。その場合バリエーションの変数は 1 つである前提
            variable_key = _variable_key(context, variation)
            variable = variation.variables.get(variable_key) if variable_key is not None else None
            value = variable.value if variable is not None else None

            if variable_key is None or value is None:
                return _error(
                    default_value,
                    variant,
                    ErrorCode.FLAG_NOT_FOUND,
                    _not_found_message(variant, variable_key),
                )

            if isinstance(default_value, Value):
                value = to_generic_value(value)
            elif type(value) is not type(default_value):
                return _error(default_value, variant, ErrorCode.TYPE_MISMATCH, TYPE_MISMATCH_MESSAGE)

            return FlagResolutionDetails(value=value, variant=variant, reason=Reason.STATIC)
        except FeatureError as e:
            logger.debug("feature_error", flag_key=flag_key, code=e.code, error=e.message)
            return _error(default_value, None, ErrorCode.FLAG_NOT_FOUND, e.message)
        except Exception as e:
            logger.warning("flag_resolution_failed", flag_key=flag_key, error=str(e))
            return _error(default_value, None, ErrorCode.GENERAL, str(e))


def _variable_key(context: EvaluationContext | None, variation: Variation) -> str | None:
    value = context.get_value(DataType.VARIABLE_KEY.value) if context is not None else None
    variable_key = value.as_string() if value is not None else None
    if variable_key is None and variation.variables:
        variable_key = next(iter(variation.variables))
    return variable_key


def _not_found_message(variant: str, variable_key: str | None) -> str:
    if not variable_key:
        return f"The variation '{variant}' has no variables"
    return f"The value for provided variable key '{variable_key}' isn't found in variation '{variant}'"


def _error(
    default_value: Any,
    variant: str | None,
    error_code: ErrorCode,
    error_message: str,
) -> FlagResolutionDetails[Any]:
    return FlagResolutionDetails(
        value=default_value,
        variant=variant,
        reason=Reason.STATIC,
        error_code=error_code,
        error_message=error_message,
    )
