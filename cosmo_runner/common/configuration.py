# © 2024 fezjo
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

# UI payload key -> Configuration attribute
payload_keys = {
    "fieldValues": "field_values",
    "fieldVelocities": "field_velocities",
    "initialTime": "initial_time",
    "timeStep": "time_step",
    "kstar": "kstar",
    "cq": "cq",
    "potentialType": "potential_type",
    "potentialParameters": "potential_parameters",
    "potentialExpression": "potential_expression",
}
required_keys = ("field_values", "field_velocities", "initial_time", "time_step")
required_keys += ("kstar", "cq")


def to_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


def to_numbers(name: str, values: Iterable[Any]) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)):
        raise ValueError(f"{name} must be a list of numbers, got {values!r}")
    return tuple(to_number(f"{name}[{i}]", v) for i, v in enumerate(values))


def check_single_line(name: str, text: Optional[str]) -> None:
    if text is None:
        return
    if not isinstance(text, str):
        raise ValueError(f"{name} must be a string, got {text!r}")
    if "\n" in text or "\r" in text:
        raise ValueError(f"{name} must fit on a single line")


@dataclass(frozen=True)
class Configuration:
    """
    Model and initial conditions of one solver run.

    The number of fields is the length of `field_values`, it is never stored
    on its own. `field_velocities` must have the same length.
    """

    field_values: tuple[float, ...]
    field_velocities: tuple[float, ...]
    initial_time: float
    time_step: float
    kstar: float
    cq: float
    potential_type: Optional[str] = None
    potential_parameters: Optional[tuple[float, ...]] = None
    potential_expression: Optional[str] = None

    def __post_init__(self) -> None:
        def put(name: str, value: Any) -> None:
            object.__setattr__(self, name, value)

        put("field_values", to_numbers("field_values", self.field_values))
        put("field_velocities", to_numbers("field_velocities", self.field_velocities))
        if not self.field_values:
            raise ValueError("At least one field is required")
        if len(self.field_values) != len(self.field_velocities):
            raise ValueError(
                f"Got {len(self.field_values)} field values but "
                f"{len(self.field_velocities)} field velocities"
            )
        for name in ("initial_time", "time_step", "kstar", "cq"):
            put(name, to_number(name, getattr(self, name)))
        if self.potential_parameters is not None:
            put(
                "potential_parameters",
                to_numbers("potential_parameters", self.potential_parameters),
            )
        check_single_line("potential_type", self.potential_type)
        check_single_line("potential_expression", self.potential_expression)

    @property
    def num_fields(self) -> int:
        return len(self.field_values)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Configuration:
        if not isinstance(data, Mapping):
            raise ValueError(f"Configuration must be an object, got {type(data)}")
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = payload_keys.get(key, key)
            if name not in payload_keys.values():
                raise ValueError(f"Unknown configuration key '{key}'")
            kwargs[name] = value
        missing = [k for k in required_keys if kwargs.get(k) is None]
        if missing:
            raise ValueError(f"Missing configuration keys {missing}")
        return Configuration(**kwargs)


def load_configuration(path: str) -> Configuration:
    """raises OSError when the file can't be read, ValueError when it is malformed"""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}") from e
    return Configuration.from_dict(data)
