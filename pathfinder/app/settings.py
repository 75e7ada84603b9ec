# pathfinder/app/settings.py
#!/usr/bin/env python3
"""
Viewer settings, resolved from the environment first and then the command line.

- ENV: PATHFINDER_TILES, PATHFINDER_WINDOW, PATHFINDER_ANIMATE,
       PATHFINDER_STEP_INTERVAL, PATHFINDER_LOG_LEVEL
- CLI: --tiles=11 --window=1280x720 --animate/--no-animate
       --step-interval=0.05 --log-level=DEBUG
"""

import os
import sys
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Tuple

ENV_PREFIX = "PATHFINDER_"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    tiles: int = 11                           # cells along the short window axis
    window: Tuple[int, int] = (1280, 720)     # initial window size in px
    animate: bool = False
    step_interval: float = 0.05               # seconds per animation frame
    log_level: str = "INFO"


def _parse_bool(key: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {raw!r}")


def _parse_window(key: str, raw: str) -> Tuple[int, int]:
    try:
        w, h = raw.lower().split("x", 1)
        size = (int(w), int(h))
    except ValueError:
        raise ValueError(f"{key}: expected WIDTHxHEIGHT, got {raw!r}") from None
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"{key}: window size must be positive, got {raw!r}")
    return size


def _parse_positive_int(key: str, raw: str) -> int:
    try:
        v = int(raw)
    except ValueError:
        raise ValueError(f"{key}: expected an integer, got {raw!r}") from None
    if v <= 0:
        raise ValueError(f"{key}: must be positive, got {raw!r}")
    return v


def _parse_positive_float(key: str, raw: str) -> float:
    try:
        v = float(raw)
    except ValueError:
        raise ValueError(f"{key}: expected a number, got {raw!r}") from None
    if v <= 0:
        raise ValueError(f"{key}: must be positive, got {raw!r}")
    return v


def _collect(argv: List[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for name in ("tiles", "window", "animate", "step_interval", "log_level"):
        env_key = ENV_PREFIX + name.upper()
        if env_key in environ:
            raw[name] = environ[env_key]

    for arg in argv:
        if arg == "--animate":
            raw["animate"] = "1"
        elif arg == "--no-animate":
            raw["animate"] = "0"
        elif arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            raw[key.replace("-", "_")] = value
    return raw


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _collect(argv, environ)

    kwargs = {}
    if "tiles" in raw:
        kwargs["tiles"] = _parse_positive_int("tiles", raw["tiles"])
    if "window" in raw:
        kwargs["window"] = _parse_window("window", raw["window"])
    if "animate" in raw:
        kwargs["animate"] = _parse_bool("animate", raw["animate"])
    if "step_interval" in raw:
        kwargs["step_interval"] = _parse_positive_float("step_interval", raw["step_interval"])
    if "log_level" in raw:
        level = raw["log_level"].strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level: unknown level {raw['log_level']!r}")
        kwargs["log_level"] = level

    return replace(Settings(), **kwargs)
