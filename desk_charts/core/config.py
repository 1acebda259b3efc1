from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    default_width: float | None
    theme_path: str
    png_dpi: int


def _read_env_file() -> dict[str, str]:
    """Load minimal .env to support DESK_CHARTS_* keys if not in the environment.

    We intentionally do not overwrite existing os.environ values.
    """
    env_path = Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            env[k] = v
    except (OSError, UnicodeDecodeError):
        # Unreadable .env is treated as absent so rendering still works
        return {}
    return env


def _get_env(
    name: str,
    fallback_names: list[str] | None = None,
    env_file: dict[str, str] | None = None,
) -> str | None:
    # Priority: process env -> .env -> fallback names
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    if fallback_names:
        for fb in fallback_names:
            v = os.getenv(fb)
            if v:
                return v
            if env_file and fb in env_file:
                return env_file[fb]
    return None


def _parse_positive_float(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def get_settings() -> Settings:
    env_file = _read_env_file()
    # Support DESK_CHARTS_* prefixed variables with non-prefixed fallbacks
    width = _get_env("DESK_CHARTS_DEFAULT_WIDTH", ["CHART_DEFAULT_WIDTH"], env_file)
    theme = _get_env("DESK_CHARTS_THEME", ["CHART_THEME"], env_file)
    dpi = _parse_positive_float(_get_env("DESK_CHARTS_PNG_DPI", None, env_file))
    return Settings(
        default_width=_parse_positive_float(width),
        theme_path=theme or "configs/theme.yaml",
        png_dpi=int(dpi) if dpi else 100,
    )
