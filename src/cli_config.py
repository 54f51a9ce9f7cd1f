"""CLI configuration: YAML config file, environment and flag layering.

Precedence is CLI flag > config file > environment > Constants default.
Problems with the config file are logged and ignored so a bad file never
breaks the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants
from versioning.proxies import parse_goproxy

logger = logging.getLogger(__name__)


@dataclass
class RuntimeConfig:
    """Effective settings for one invocation."""
    proxies: List[str]
    deadline_sec: Optional[float]
    request_timeout: float


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML mapping from path; return {} when absent or unusable."""
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s does not contain a mapping; ignoring", path)
        return {}
    return data


def _as_float(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s value: %r", name, value)
        return None


def resolve_config(args, env: Optional[Mapping[str, str]] = None) -> RuntimeConfig:
    """Combine CLI args, config file and environment into a RuntimeConfig."""
    env = os.environ if env is None else env
    config_path = getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG)
    file_cfg = load_config_file(config_path)

    proxy_value = getattr(args, "PROXY", None)
    if proxy_value is None:
        proxy_value = file_cfg.get("goproxy")
    if proxy_value is None:
        proxy_value = env.get(Constants.ENV_GOPROXY) or Constants.DEFAULT_GOPROXY
    proxies = parse_goproxy(proxy_value)

    deadline = _as_float(getattr(args, "TIMEOUT", None), "timeout")
    if deadline is None:
        deadline = _as_float(file_cfg.get("timeout"), "timeout")
    if deadline is None:
        deadline = float(Constants.DEFAULT_DEADLINE_SEC)
    # 0 disables the overall deadline.
    deadline_sec = deadline if deadline > 0 else None

    request_timeout = _as_float(file_cfg.get("request_timeout"), "request_timeout")
    if request_timeout is None or request_timeout <= 0:
        request_timeout = float(Constants.REQUEST_TIMEOUT)

    return RuntimeConfig(proxies=proxies, deadline_sec=deadline_sec, request_timeout=request_timeout)


def apply_overrides(cfg: RuntimeConfig) -> None:
    """Publish tunables that library code reads from Constants."""
    Constants.REQUEST_TIMEOUT = cfg.request_timeout  # type: ignore[assignment]
