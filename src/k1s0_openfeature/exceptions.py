"""openfeature プロバイダーライブラリの例外型定義"""

from __future__ import annotations


class ProviderError(Exception):
    """openfeature プロバイダーライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ProviderErrorCodes:
    """ProviderError のエラーコード定数。"""

    UNSUPPORTED_JSON_TYPE: str = "UNSUPPORTED_JSON_TYPE"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class FeatureError(ProviderError):
    """フラグ評価エンジンが宣言するフィーチャーエラー。

    フラグが存在しない、または環境で無効化されている場合にエンジンが送出する。
    """


class FeatureErrorCodes:
    """FeatureError のエラーコード定数。"""

    FEATURE_NOT_FOUND: str = "FEATURE_NOT_FOUND"
    FEATURE_ENVIRONMENT_DISABLED: str = "FEATURE_ENVIRONMENT_DISABLED"
