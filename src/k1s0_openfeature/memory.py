"""InMemoryVariationEngine 実装"""

from __future__ import annotations

from .exceptions import FeatureError, FeatureErrorCodes
from .models import BackendData, Variation


class InMemoryVariationEngine:
    """テスト用インメモリフラグ評価エンジン。"""

    def __init__(self, ready: bool = True) -> None:
        self._variations: dict[str, Variation] = {}
        self._disabled: set[str] = set()
        self.data: list[BackendData] = []
        self.ready = ready
        self.closed = False

    def set_variation(self, flag_key: str, variation: Variation) -> None:
        """フラグのバリエーションを設定する。"""
        self._variations[flag_key] = variation
        self._disabled.discard(flag_key)

    def disable(self, flag_key: str) -> None:
        """フラグを現在の環境で無効化する。"""
        self._disabled.add(flag_key)

    def get_variation(self, flag_key: str) -> Variation:
        if flag_key in self._disabled:
            raise FeatureError(
                FeatureErrorCodes.FEATURE_ENVIRONMENT_DISABLED,
                f"Feature flag '{flag_key}' is disabled for the current environment",
            )
        variation = self._variations.get(flag_key)
        if variation is None:
            raise FeatureError(
                FeatureErrorCodes.FEATURE_NOT_FOUND,
                f"Feature flag '{flag_key}' not found",
            )
        return variation

    def add_data(self, *data: BackendData) -> None:
        self.data.extend(data)

    def wait_for_ready(self, timeout: float) -> bool:
        return self.ready

    def close(self) -> None:
        self.closed = True
