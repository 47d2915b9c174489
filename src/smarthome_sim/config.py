"""Configuration helpers for the simulator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .strategies import THERMOSTAT_MODES

DEFAULT_THERMOSTAT_MODE = "eco"
DEFAULT_TICK_STEP = 1

_TRUTHY = {"1", "true", "yes", "on"}


def _env_file_path() -> Path:
    override = os.environ.get("SMARTHOME_ENV_FILE")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / ".env"


def _load_env_file(path: Path) -> None:
    """Copy ``KEY=value`` lines into os.environ without overriding set keys."""
    if not path.is_file():
        logger.bind(path=str(path)).debug("No .env file found")
        return

    logger.bind(path=str(path)).info("Loading environment variables from .env")
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip().strip("\"'"))


_load_env_file(_env_file_path())


@dataclass(frozen=True)
class Settings:
    """Typed accessors for configuration derived from the environment."""

    thermostat_mode: str
    tick_step: int
    seed_devices: bool

    @classmethod
    def from_env(cls) -> Settings:
        thermostat_mode = (
            os.environ.get("SMARTHOME_THERMOSTAT_MODE", DEFAULT_THERMOSTAT_MODE)
            .strip()
            .lower()
        )
        if thermostat_mode not in THERMOSTAT_MODES:
            raise RuntimeError(
                "SMARTHOME_THERMOSTAT_MODE must be one of "
                f"{', '.join(THERMOSTAT_MODES)}, got '{thermostat_mode}'."
            )

        raw_step = os.environ.get("SMARTHOME_TICK_STEP", str(DEFAULT_TICK_STEP))
        try:
            tick_step = int(raw_step)
        except ValueError as exc:
            raise RuntimeError(
                f"SMARTHOME_TICK_STEP must be an integer, got '{raw_step}'."
            ) from exc
        if tick_step <= 0:
            raise RuntimeError("SMARTHOME_TICK_STEP must be positive.")

        seed_env = os.environ.get("SMARTHOME_SEED_DEVICES")
        seed_devices = (
            seed_env.strip().lower() in _TRUTHY if seed_env is not None else True
        )

        logger.bind(
            thermostat_mode=thermostat_mode,
            tick_step=tick_step,
            seed_devices=seed_devices,
        ).info("Configuration loaded from environment")

        return cls(
            thermostat_mode=thermostat_mode,
            tick_step=tick_step,
            seed_devices=seed_devices,
        )


settings = Settings.from_env()
