import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from recipemark.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TOLERANCE = 0.05
ENV_PREFIX = "RECIPEMARK_"


def default_ingredient_database() -> Path:
    return Path(__file__).resolve().parents[1] / "data" / "ingredients-en.txt"


@dataclass(frozen=True)
class RenderConfig:
    convert_to_metric: bool = True
    round_satisfying: bool = True
    rounding_tolerance: float = DEFAULT_TOLERANCE
    ingredient_database: Path = field(default_factory=default_ingredient_database)
    log_level: str = "INFO"


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _as_tolerance(value: Any) -> float:
    tolerance = _as_float(value, DEFAULT_TOLERANCE)
    if not 0.0 < tolerance < 1.0:
        logger.warning(f"Rounding tolerance {value!r} outside (0, 1), using {DEFAULT_TOLERANCE}")
        return DEFAULT_TOLERANCE
    return tolerance


def _config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "render_config.json"


def _read_json(config_path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid render config JSON at {config_path}: {exc}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Render config at {config_path} is not a JSON object, ignoring it")
        return {}
    return data


def _with_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(data)
    for key in ("convert_to_metric", "round_satisfying", "rounding_tolerance", "ingredient_database", "log_level"):
        env_value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if env_value is not None and env_value.strip():
            merged[key] = env_value
    return merged


def load_render_config(path: Optional[Path] = None) -> RenderConfig:
    """Load rendering defaults from JSON, then apply RECIPEMARK_* environment overrides."""
    load_dotenv()
    config_path = path or _config_path()
    data = _with_env_overrides(_read_json(config_path))

    database = data.get("ingredient_database")
    return RenderConfig(
        convert_to_metric=_as_bool(data.get("convert_to_metric"), True),
        round_satisfying=_as_bool(data.get("round_satisfying"), True),
        rounding_tolerance=_as_tolerance(data.get("rounding_tolerance", DEFAULT_TOLERANCE)),
        ingredient_database=Path(database) if database else default_ingredient_database(),
        log_level=str(data.get("log_level") or "INFO").upper()
    )
