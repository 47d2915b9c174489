"""Temperature strategies applied by thermostats."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .utils import logger

if TYPE_CHECKING:
    from .devices import Thermostat

ECO_TEMPERATURE_F = 68
COMFORT_TEMPERATURE_F = 72


class TemperatureStrategy(Protocol):
    name: str

    def apply(self, thermostat: Thermostat) -> int:
        ...


class _FixedTemperature:
    name = "fixed"
    temperature = 0

    def apply(self, thermostat: Thermostat) -> int:
        thermostat.target_temperature = self.temperature
        logger.bind(
            device=thermostat.name, mode=self.name, temperature=self.temperature
        ).info("Thermostat strategy applied")
        return self.temperature

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EcoMode(_FixedTemperature):
    """Energy saving set point."""

    name = "eco"
    temperature = ECO_TEMPERATURE_F


class ComfortMode(_FixedTemperature):
    """Comfort set point."""

    name = "comfort"
    temperature = COMFORT_TEMPERATURE_F


_STRATEGIES: dict[str, type[_FixedTemperature]] = {
    EcoMode.name: EcoMode,
    ComfortMode.name: ComfortMode,
}


THERMOSTAT_MODES: tuple[str, ...] = tuple(sorted(_STRATEGIES))


def strategy_for(mode: str) -> TemperatureStrategy:
    """Return a fresh strategy for a mode name such as ``eco``."""
    try:
        return _STRATEGIES[mode.strip().lower()]()
    except KeyError as exc:
        raise ValueError(
            f"Unknown thermostat mode '{mode}'. Valid modes: "
            f"{', '.join(sorted(_STRATEGIES))}."
        ) from exc


__all__ = [
    "COMFORT_TEMPERATURE_F",
    "ECO_TEMPERATURE_F",
    "ComfortMode",
    "EcoMode",
    "THERMOSTAT_MODES",
    "TemperatureStrategy",
    "strategy_for",
]
