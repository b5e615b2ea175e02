"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from apimetrics.llm.pricing import ModelInfo


class ApiMetricsConfig(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8350
    log_level: str = "INFO"

    # Message log
    message_log_path: str = "~/.apimetrics/messages.json"

    # DeepSeek
    deepseek_api_key: str = ""
    deepseek_model: str = "deepseek-chat"
    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_status_url: str = "https://status.deepseek.com/api/v2/status.json"
    deepseek_status_interval: int = 300  # seconds between status page checks
    deepseek_max_tokens: int = 1024
    deepseek_custom_model_info: dict[str, Any] | None = Field(default=None)

    @field_validator("deepseek_custom_model_info")
    @classmethod
    def _known_model_info_keys(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value:
            known = {f.name for f in dataclasses.fields(ModelInfo)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise ValueError(
                    f"Unknown model info keys: {', '.join(unknown)} "
                    f"(expected some of: {', '.join(sorted(known))})"
                )
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; the environment wins over them
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def custom_model_info(self) -> ModelInfo | None:
        if not self.deepseek_custom_model_info:
            return None
        return ModelInfo(**self.deepseek_custom_model_info)

    @classmethod
    def from_yaml(cls, path: str | Path = "apimetrics.yaml") -> ApiMetricsConfig:
        """Load config from YAML file, with env vars taking precedence."""
        yaml_path = Path(path)
        yaml_data: dict[str, Any] = {}

        if yaml_path.exists():
            with yaml_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            yaml_data = _flatten_yaml(raw.get("apimetrics", {}))

        return cls(**yaml_data)


def _flatten_yaml(data: dict, prefix: str = "") -> dict:
    """Flatten nested YAML into flat key-value pairs for Pydantic."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}_{key}" if prefix else key
        if isinstance(value, dict) and full_key not in ("deepseek_custom_model_info",):
            flat.update(_flatten_yaml(value, full_key))
        else:
            flat[full_key] = value
    return flat
