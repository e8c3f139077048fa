# tunables.py
"""
Runtime-adjustable physics parameters.

This module defines the Tunables class, the process-wide parameter source the
particles read on every update, and ParameterControl, which describes how one
of those parameters may be adjusted from the control panel.
"""
import logging
import math
from typing import Any, Dict, List

from constants import (
    DEFAULT_DRAG, DEFAULT_GRAVITY, DEFAULT_PARTICLE_COUNT,
    DEFAULT_QUANTUM_FACTOR, DEFAULT_TURBULENCE, DEFAULT_WIND_STRENGTH
)

# --- Data Contracts ---
#
# class Tunables:
#   - __init__(self, gravity, wind_strength, quantum_factor, drag, turbulence):
#     - Inputs: Finite floats. No range validation; the core tolerates any
#       finite value, including 0.
#     - Side Effects: Remembers the values as the defaults restored by
#       restore_defaults().
#
#   - from_config(params: Dict[str, Any]) -> Tunables:
#     - Inputs: The "simulation_parameters" section of config.json.
#       Missing keys fall back to the constants module.
#     - Raises: ValueError if a value is not a finite number.
#
# class ParameterControl:
#   - nudge(self, tunables: Tunables, steps: int) -> float:
#     - Side Effects: Moves the named tunable by steps * step, clamped to
#       [minimum, maximum]. Returns the new value.

TUNABLE_NAMES = ("gravity", "wind_strength", "quantum_factor", "drag", "turbulence")


def _finite_number(params: Dict[str, Any], key: str, default: float) -> float:
    value = params.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        msg = f"Configuration error: '{key}' must be a finite number, got {value!r}."
        logging.critical(msg)
        raise ValueError(msg)
    return float(value)


def particle_count_from_config(params: Dict[str, Any]) -> int:
    """Reads and validates the fixed size of the particle field."""
    count = params.get('particle_count', DEFAULT_PARTICLE_COUNT)
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        msg = f"Configuration error: 'particle_count' must be a positive integer, got {count!r}."
        logging.critical(msg)
        raise ValueError(msg)
    return count


class Tunables:
    """
    Mutable physics parameters shared by every particle.

    Writers (the control panel) change attributes directly; readers pick up
    the new value on their next update.
    """
    def __init__(
        self,
        gravity: float = DEFAULT_GRAVITY,
        wind_strength: float = DEFAULT_WIND_STRENGTH,
        quantum_factor: float = DEFAULT_QUANTUM_FACTOR,
        drag: float = DEFAULT_DRAG,
        turbulence: float = DEFAULT_TURBULENCE
    ):
        self.gravity = gravity
        self.wind_strength = wind_strength
        self.quantum_factor = quantum_factor
        self.drag = drag
        self.turbulence = turbulence
        self._defaults = self.as_dict()

    @classmethod
    def from_config(cls, params: Dict[str, Any]) -> "Tunables":
        """Builds the parameter source from the simulation config section."""
        tunables = cls(
            gravity=_finite_number(params, 'gravity', DEFAULT_GRAVITY),
            wind_strength=_finite_number(params, 'wind_strength', DEFAULT_WIND_STRENGTH),
            quantum_factor=_finite_number(params, 'quantum_factor', DEFAULT_QUANTUM_FACTOR),
            drag=_finite_number(params, 'drag', DEFAULT_DRAG),
            turbulence=_finite_number(params, 'turbulence', DEFAULT_TURBULENCE),
        )
        logging.info(f"Tunables loaded: {tunables.as_dict()}")
        return tunables

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in TUNABLE_NAMES}

    def restore_defaults(self) -> None:
        for name, value in self._defaults.items():
            setattr(self, name, value)
        logging.info("Tunables restored to their startup values.")


class ParameterControl:
    """
    A bounded, stepped control for one tunable, as shown in the UI panel.
    """
    def __init__(self, name: str, label: str, minimum: float, maximum: float, step: float):
        if name not in TUNABLE_NAMES:
            raise ValueError(f"Unknown tunable '{name}'.")
        if step <= 0 or minimum > maximum:
            raise ValueError(f"Invalid range for control '{name}'.")
        self.name = name
        self.label = label
        self.minimum = minimum
        self.maximum = maximum
        self.step = step

    def value(self, tunables: Tunables) -> float:
        return getattr(tunables, self.name)

    def nudge(self, tunables: Tunables, steps: int) -> float:
        """
        Moves the value by a whole number of steps and keeps it on the grid.
        """
        old_value = self.value(tunables)
        raw = old_value + steps * self.step
        # Snap to the step grid.
        snapped = self.minimum + round((raw - self.minimum) / self.step) * self.step
        new_value = round(min(max(snapped, self.minimum), self.maximum), 6)
        setattr(tunables, self.name, new_value)
        if new_value != old_value:
            logging.info(f"{self.label} changed. Old: {old_value:.2f}, New: {new_value:.2f}")
        return new_value


def default_controls(quantum_enabled: bool) -> List[ParameterControl]:
    """The controls offered by the panel, matching the reference slider ranges."""
    controls = [
        ParameterControl('gravity', "Gravity", 10.0, 100.0, 1.0),
        ParameterControl('wind_strength', "Wind", 0.0, 20.0, 1.0),
    ]
    if quantum_enabled:
        controls.append(ParameterControl('quantum_factor', "Quantum", 0.0, 1.0, 0.1))
    return controls
