"""Configuration defaults, overridable through PATTERNVIZ_* environment variables."""

import os

from patternviz.layout import LayoutConfig

DEFAULT_DIALECT = os.environ.get("PATTERNVIZ_DIALECT", "javascript")
LOG_LEVEL = os.environ.get("PATTERNVIZ_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


NODE_SPACING = _env_float("PATTERNVIZ_NODE_SPACING", 120.0)
LEVEL_SPACING = _env_float("PATTERNVIZ_LEVEL_SPACING", 100.0)


def default_layout_config() -> LayoutConfig:
    """Layout configuration built from the environment defaults."""
    return LayoutConfig(node_spacing=NODE_SPACING, level_spacing=LEVEL_SPACING)
