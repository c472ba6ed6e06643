"""error_bag 設定（pydantic BaseModel）と YAML 読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ErrorBagError, ErrorBagErrorCodes

PRODUCTION = "production"


class LogSection(BaseModel):
    """ログ設定。"""

    # True なら ErrorCollection 生成時に structlog を設定する
    configure: bool = False
    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ErrorBagConfig(BaseModel):
    """ErrorCollection の動作設定。"""

    environment: str = "development"
    # True なら存在しない ID の remove_by_id で NotFoundError を送出する
    strict_remove_by_id: bool = False
    # False なら clear(scope) でも全件クリアする
    scoped_clear: bool = True
    log: LogSection = Field(default_factory=LogSection)

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ErrorBagError(
            code=ErrorBagErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ErrorBagError(
            code=ErrorBagErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    return data


def load_config(path: Path) -> ErrorBagConfig:
    """設定ファイルを読み込んで ErrorBagConfig を返す。

    トップレベルに error_bag キーがあればその値を、なければ全体を設定として扱う。
    """
    data = _read_yaml(path)
    if isinstance(data, dict) and "error_bag" in data:
        data = data["error_bag"] or {}
    try:
        return ErrorBagConfig.model_validate(data)
    except ValidationError as e:
        raise ErrorBagError(
            code=ErrorBagErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
