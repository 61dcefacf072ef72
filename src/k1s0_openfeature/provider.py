"""OpenFeature プロバイダー実装"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from openfeature.evaluation_context import EvaluationContext as OpenFeatureContext
from openfeature.exception import ProviderNotReadyError
from openfeature.flag_evaluation import FlagResolutionDetails
from openfeature.provider import AbstractProvider, Metadata

from .client import EngineProtocol
from .config import ProviderConfig
from .converter import to_backend_records, to_context_value, to_evaluation_context
from .logger import configure_logging
from .resolver import Resolver

logger = structlog.stdlib.get_logger(__name__)


class VariationProvider(AbstractProvider):
    """バリエーション型エンジンを OpenFeature SDK に接続するプロバイダー。

    型付きの評価は Resolver に委譲し、評価コンテキストの conversion / customData
    属性は初期化時とコンテキスト変更時にエンジンへ送る。
    """

    def __init__(self, engine: EngineProtocol, config: ProviderConfig | None = None) -> None:
        super().__init__()
        self._engine = engine
        self._config = config or ProviderConfig()
        if self._config.log is not None:
            configure_logging(self._config.log)
        self._resolver = Resolver(engine, require_context=self._config.require_context)

    @property
    def engine(self) -> EngineProtocol:
        return self._engine

    def get_metadata(self) -> Metadata:
        return Metadata(name=self._config.provider_name)

    def initialize(self, evaluation_context: OpenFeatureContext) -> None:
        """エンジンの準備完了を待ち、初期コンテキストのデータを送る。

        Raises:
            ProviderNotReadyError: タイムアウトまでにエンジンが準備できなかった場合
        """
        try:
            ready = self._engine.wait_for_ready(self._config.ready_timeout)
        except TimeoutError as e:
            raise ProviderNotReadyError(f"Engine initialization timed out: {e}") from e
        if not ready:
            raise ProviderNotReadyError("Engine is not ready")
        self._add_data(evaluation_context)
        logger.info("provider_initialized", provider=self._config.provider_name)

    def on_context_changed(
        self,
        old_context: OpenFeatureContext | None,
        new_context: OpenFeatureContext,
    ) -> None:
        """コンテキスト変更時に新しいコンテキストのデータを送る。"""
        self._add_data(new_context)

    def shutdown(self) -> None:
        self._engine.close()
        logger.info("provider_shutdown", provider=self._config.provider_name)

    def resolve_boolean_details(
        self,
        flag_key: str,
        default_value: bool,
        evaluation_context: OpenFeatureContext | None = None,
    ) -> FlagResolutionDetails[bool]:
        return self._resolver.resolve(flag_key, default_value, to_evaluation_context(evaluation_context))

    def resolve_string_details(
        self,
        flag_key: str,
        default_value: str,
        evaluation_context: OpenFeatureContext | None = None,
    ) -> FlagResolutionDetails[str]:
        return self._resolver.resolve(flag_key, default_value, to_evaluation_context(evaluation_context))

    def resolve_integer_details(
        self,
        flag_key: str,
        default_value: int,
        evaluation_context: OpenFeatureContext | None = None,
    ) -> FlagResolutionDetails[int]:
        return self._resolver.resolve(flag_key, default_value, to_evaluation_context(evaluation_context))

    def resolve_float_details(
        self,
        flag_key: str,
        default_value: float,
        evaluation_context: OpenFeatureContext | None = None,
    ) -> FlagResolutionDetails[float]:
        return self._resolver.resolve(flag_key, default_value, to_evaluation_context(evaluation_context))

    def resolve_object_details(
        self,
        flag_key: str,
        default_value: Sequence[Any] | Mapping[str, Any],
        evaluation_context: OpenFeatureContext | None = None,
    ) -> FlagResolutionDetails[Any]:
        """オブジェクトフラグを Value として評価し、プレーンな Python 値で返す。"""
        details = self._resolver.resolve(
            flag_key,
            to_context_value(default_value),
            to_evaluation_context(evaluation_context),
        )
        return FlagResolutionDetails(
            value=default_value if details.error_code else details.value.to_python(),
            variant=details.variant,
            reason=details.reason,
            error_code=details.error_code,
            error_message=details.error_message,
        )

    def _add_data(self, evaluation_context: OpenFeatureContext | None) -> None:
        records = to_backend_records(to_evaluation_context(evaluation_context))
        if records:
            self._engine.add_data(*records)
            logger.debug("backend_data_added", count=len(records))
