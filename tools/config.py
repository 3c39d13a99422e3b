"""Configuration loader for bar schedule comparisons."""

import os
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .reconciler import AdjustmentPolicy, DEFAULT_POLICY

logger = logging.getLogger(__name__)


ENV_SECTION_AND_LAYOUT = "BARCHECK_SECTION_AND_LAYOUT"
ENV_ADJUSTMENT_POLICY = "BARCHECK_ADJUSTMENT_POLICY"
ENV_IGNORE_MARKS = "BARCHECK_IGNORE_MARKS"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is invalid."""


@dataclass
class ComparisonConfig:
    section_and_layout: bool = False
    adjustment_policy: AdjustmentPolicy = DEFAULT_POLICY
    ignore_marks: List[str] = field(default_factory=list)
    section_view_marks: List[str] = field(default_factory=list)
    source: Optional[str] = None


def default_search_paths() -> List[Path]:
    return [
        Path.cwd() / 'config' / 'bar_check.yaml',
        Path.home() / '.barcheck' / 'config.yaml',
    ]


def parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got '{value}'")


def parse_marks(value: Any) -> List[str]:
    """Accept a list or a comma/space separated string of marks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.replace(",", " ").split()
    return [str(mark).strip() for mark in value if str(mark).strip()]


def _parse_policy(value: Any) -> AdjustmentPolicy:
    try:
        return AdjustmentPolicy.from_value(value)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return raw


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None
) -> ComparisonConfig:
    """
    Load configuration from YAML and environment variables.

    Precedence: defaults < YAML file < environment. CLI flags are applied on
    top by the caller.

    Args:
        config_path: Explicit YAML path. If None, default locations are
            searched and a missing file is not an error.
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ComparisonConfig
    """
    environ = os.environ if environ is None else environ
    config = ComparisonConfig()

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        path = next((p for p in default_search_paths() if p.exists()), None)

    if path is not None:
        raw = _read_yaml(path)
        if 'section_and_layout' in raw:
            config.section_and_layout = parse_bool(raw['section_and_layout'], 'section_and_layout')
        if 'adjustment_policy' in raw:
            config.adjustment_policy = _parse_policy(raw['adjustment_policy'])
        config.ignore_marks = parse_marks(raw.get('ignore_marks'))
        config.section_view_marks = parse_marks(raw.get('section_view_marks'))
        config.source = str(path)
        logger.info(f"Loaded config from {path}")

    if ENV_SECTION_AND_LAYOUT in environ:
        config.section_and_layout = parse_bool(environ[ENV_SECTION_AND_LAYOUT], ENV_SECTION_AND_LAYOUT)
    if ENV_ADJUSTMENT_POLICY in environ:
        config.adjustment_policy = _parse_policy(environ[ENV_ADJUSTMENT_POLICY])
    if ENV_IGNORE_MARKS in environ:
        config.ignore_marks = parse_marks(environ[ENV_IGNORE_MARKS])

    return config
