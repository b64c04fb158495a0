"""
Analyzer configuration.

Settings are resolved in three layers, later layers winning:

1. built-in defaults;
2. an optional YAML file whose ``openai`` section mirrors the
   settings (``url``, ``key``, ``model``, ``timeout``,
   ``temperature``, ``quota_signature``, ``quota_codes``);
3. environment variables ``OPENAI_API_URL``, ``OPENAI_API_KEY``,
   ``OPENAI_MODEL`` and ``OPENAI_TIMEOUT``.  A local ``.env`` file is
   loaded into the environment first.

Example YAML::

    openai:
      url: https://api.openai.com/v1/chat/completions
      model: gpt-4o-mini
      timeout: 20
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT = 30.0
DEFAULT_QUOTA_SIGNATURE = "You exceeded your current quota"
DEFAULT_QUOTA_CODES: Tuple[str, ...] = ("insufficient_quota",)


@dataclass(frozen=True)
class AnalyzerSettings:
    """Connection and fallback settings for the analysis engine."""

    api_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT
    temperature: Optional[float] = None
    quota_signature: str = DEFAULT_QUOTA_SIGNATURE
    quota_codes: Tuple[str, ...] = field(default=DEFAULT_QUOTA_CODES)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _to_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid number for {key}: {value!r}") from exc


def load_settings(config_path: Optional[Union[str, Path]] = None) -> AnalyzerSettings:
    """Build `AnalyzerSettings` from defaults, a YAML file and the environment.

    Args:
        config_path: Optional YAML file.  A missing file is an error;
            pass ``None`` to skip the file layer.

    Returns:
        The resolved settings.
    """
    load_dotenv()
    section: Dict[str, Any] = {}
    if config_path is not None:
        config = load_config(config_path)
        if not isinstance(config, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")
        section = config.get("openai") or {}
        if not isinstance(section, dict):
            raise ValueError(f"'openai' section in {config_path} must be a mapping")
        logger.debug("Loaded analyzer configuration from %s", config_path)

    api_url = os.getenv("OPENAI_API_URL") or section.get("url") or DEFAULT_API_URL
    api_key = os.getenv("OPENAI_API_KEY") or section.get("key") or None
    model = os.getenv("OPENAI_MODEL") or section.get("model") or DEFAULT_MODEL

    timeout_value = os.getenv("OPENAI_TIMEOUT") or section.get("timeout")
    timeout = _to_float("timeout", timeout_value) if timeout_value not in (None, "") else DEFAULT_TIMEOUT
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be a positive finite number, got {timeout}")

    temperature_value = section.get("temperature")
    temperature = _to_float("temperature", temperature_value) if temperature_value is not None else None

    quota_signature = section.get("quota_signature") or DEFAULT_QUOTA_SIGNATURE
    quota_codes_value = section.get("quota_codes")
    if quota_codes_value is None:
        quota_codes = DEFAULT_QUOTA_CODES
    elif isinstance(quota_codes_value, str):
        quota_codes = (quota_codes_value,)
    else:
        quota_codes = tuple(str(code) for code in quota_codes_value)

    return AnalyzerSettings(
        api_url=str(api_url),
        api_key=str(api_key) if api_key else None,
        model=str(model),
        timeout=timeout,
        temperature=temperature,
        quota_signature=str(quota_signature),
        quota_codes=quota_codes,
    )
