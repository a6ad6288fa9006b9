"""Config loading and dynamic instantiation utilities."""

from __future__ import annotations

import importlib
import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from optim.nelder_mead import NelderMeadOptimizer

__all__ = [
    "NelderMeadConfig",
    "apply_overrides",
    "build_optimizer",
    "import_object",
    "load_json",
    "resolve_callable",
    "resolve_spec",
    "resolve_values",
]


def load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_object(path: str) -> Any:
    if ":" in path:
        module_name, attr = path.split(":", 1)
    else:
        module_name, attr = path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def resolve_spec(spec: Any, **extra_kwargs: Any) -> Any:
    """Instantiate an object from a {class, params} spec or return spec as-is."""
    if isinstance(spec, dict) and "class" in spec:
        cls = import_object(spec["class"])
        params = spec.get("params", {})
        resolved = resolve_values(params)
        resolved.update(extra_kwargs)
        return cls(**resolved)
    return resolve_values(spec)


def resolve_values(value: Any, *, skip_keys: set[str] | None = None) -> Any:
    if isinstance(value, dict):
        if "class" in value:
            return resolve_spec(value)
        resolved: dict[str, Any] = {}
        for key, val in value.items():
            if skip_keys and key in skip_keys:
                resolved[key] = val
            else:
                resolved[key] = resolve_values(val, skip_keys=skip_keys)
        return resolved
    if isinstance(value, list):
        return [resolve_values(v, skip_keys=skip_keys) for v in value]
    return value


def resolve_callable(spec: Any) -> Any:
    """Turn an objective/constraint spec into a callable.

    Accepts a "module:attr" path (classes are instantiated without
    arguments), a {class, params} spec, or a callable.

    Raises:
        TypeError: If the spec does not resolve to a callable.
    """
    if isinstance(spec, str):
        obj = import_object(spec)
        if isinstance(obj, type):
            obj = obj()
    elif isinstance(spec, dict):
        obj = resolve_spec(spec)
    else:
        obj = spec
    if not callable(obj):
        raise TypeError(f"Spec {spec!r} did not resolve to a callable, got {type(obj).__name__}")
    return obj


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def apply_overrides(config: dict[str, Any], overrides: list[str]) -> dict[str, Any]:
    result = json.loads(json.dumps(config))
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"Override must be key=value, got: {item}")
        path, raw_val = item.split("=", 1)
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = _parse_value(raw_val)
    return result


@dataclass(frozen=True, slots=True)
class NelderMeadConfig:
    """Run settings for the simplex optimizer.

    Attributes:
        max_iterations: Iteration budget per run.
        reflection: Reflection coefficient.
        expansion: Expansion coefficient.
        contraction: Contraction coefficient.
        tolerance: Convergence threshold on the spread of simplex values.
        scale: Edge length of the initial simplex.
    """

    max_iterations: int = 1000
    reflection: float = 1.0
    expansion: float = 2.0
    contraction: float = 0.5
    tolerance: float = 1e-6
    scale: float = 1.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NelderMeadConfig:
        """Build from a mapping, ignoring keys that are not settings."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def apply(self, optimizer: NelderMeadOptimizer) -> None:
        optimizer.configure(
            max_iterations=self.max_iterations,
            reflection=self.reflection,
            expansion=self.expansion,
            contraction=self.contraction,
        )


def build_optimizer(config: Mapping[str, Any]) -> NelderMeadOptimizer:
    """Create a configured optimizer from a config dict.

    Recognized keys: "objective" (required), "constraint", "dimension"
    (defaults to the length of "start"), "verbose", "track_history", plus
    every NelderMeadConfig field.

    Raises:
        ValueError: If the objective is missing or the dimension cannot be determined.
    """
    if "objective" not in config:
        raise ValueError("config must define an 'objective'")
    objective = resolve_callable(config["objective"])

    constraint_spec = config.get("constraint")
    constraint = resolve_callable(constraint_spec) if constraint_spec is not None else None

    dimension = config.get("dimension")
    if dimension is None:
        start = config.get("start")
        if start is None:
            raise ValueError("config must define 'dimension' or 'start'")
        dimension = len(start)

    optimizer = NelderMeadOptimizer(
        int(dimension),
        objective,
        constraint,
        verbose=bool(config.get("verbose", False)),
        track_history=bool(config.get("track_history", False)),
    )
    NelderMeadConfig.from_dict(config).apply(optimizer)
    return optimizer
