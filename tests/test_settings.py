"""Offline tests for viewer settings resolution.

Run:
  pytest tests/test_settings.py
"""

import pytest

from pathfinder.app.settings import Settings, resolve_settings


def test_defaults():
    assert resolve_settings(argv=[], environ={}) == Settings()


def test_environment_values():
    s = resolve_settings(argv=[], environ={
        "PATHFINDER_TILES": "15",
        "PATHFINDER_WINDOW": "800x600",
        "PATHFINDER_ANIMATE": "yes",
        "PATHFINDER_STEP_INTERVAL": "0.1",
        "PATHFINDER_LOG_LEVEL": "debug",
    })
    assert s == Settings(tiles=15, window=(800, 600), animate=True,
                         step_interval=0.1, log_level="DEBUG")


def test_cli_overrides_environment():
    s = resolve_settings(
        argv=["--tiles=9", "--no-animate", "--step-interval=0.2", "--window=640X480"],
        environ={"PATHFINDER_TILES": "15", "PATHFINDER_ANIMATE": "1"},
    )
    assert s.tiles == 9
    assert s.animate is False
    assert s.step_interval == 0.2
    assert s.window == (640, 480)


def test_animate_flag():
    assert resolve_settings(argv=["--animate"], environ={}).animate is True


@pytest.mark.parametrize("argv", [
    ["--tiles=0"],
    ["--tiles=abc"],
    ["--window=800"],
    ["--window=0x600"],
    ["--step-interval=-1"],
    ["--log-level=LOUD"],
])
def test_invalid_values_raise(argv):
    with pytest.raises(ValueError):
        resolve_settings(argv=argv, environ={})


def test_invalid_boolean_env_raises():
    with pytest.raises(ValueError, match="animate"):
        resolve_settings(argv=[], environ={"PATHFINDER_ANIMATE": "maybe"})
