"""プロバイダー設定（pydantic BaseModel）と読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ProviderError, ProviderErrorCodes


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ProviderConfig(BaseModel):
    """プロバイダー設定。"""

    provider_name: str = "k1s0 OpenFeature Provider"
    # コンテキストなしの評価を TARGETING_KEY_MISSING にする
    require_context: bool = True
    ready_timeout: float = Field(default=10.0, gt=0)
    # 指定時のみプロバイダー生成時に structlog を設定する
    log: LogSection | None = None


def load_config(path: Path) -> ProviderConfig:
    """YAML 設定ファイルを読み込んで ProviderConfig を返す。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProviderError(
            code=ProviderErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ProviderError(
            code=ProviderErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as e:
        raise ProviderError(
            code=ProviderErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
