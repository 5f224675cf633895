"""Configuration objects and YAML loading for Mandelbrot plane renders."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import yaml


@dataclass(frozen=True)
class RenderConfig:
    """Image bounds, viewport corners and iteration limit for one render."""

    width: int
    height: int
    limit: int = 255
    upper_left: complex = complex(-1.2, 0.35)
    lower_right: complex = complex(-1.0, 0.20)

    @property
    def bounds(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def image_size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def run_name(self) -> str:
        """Generate unique run name embedding all parameters."""
        return (
            f"mandelbrot_{self.image_size}_l{self.limit}_"
            f"ul{self.upper_left.real:g}{self.upper_left.imag:+g}i_"
            f"lr{self.lower_right.real:g}{self.lower_right.imag:+g}i"
        )

    def to_dict(self) -> dict:
        """Flatten to plain floats/ints for MLflow logging."""
        return {
            "width": self.width,
            "height": self.height,
            "limit": self.limit,
            "upper_left_re": self.upper_left.real,
            "upper_left_im": self.upper_left.imag,
            "lower_right_re": self.lower_right.real,
            "lower_right_im": self.lower_right.imag,
        }


DEFAULT_RENDER_CONFIG = RenderConfig(width=100, height=100)


def default_render_config(**overrides: object) -> RenderConfig:
    """Return the canonical default config optionally overridden with kwargs."""
    return _build_render_config({**_config_fields(DEFAULT_RENDER_CONFIG), **overrides})


def load_sweep_configs(yaml_path: str | Path) -> List[RenderConfig]:
    """Load a YAML file and expand its ``sweep`` block over ``defaults``."""
    with open(yaml_path) as f:
        cfg = yaml.safe_load(f) or {}

    defaults: Dict[str, object] = {
        **_config_fields(DEFAULT_RENDER_CONFIG),
        **(cfg.get("defaults", {}) or {}),
    }
    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    return _expand_sweep(defaults, sweep)


def get_config_by_index(yaml_path: str | Path, index: int) -> RenderConfig:
    """Get a specific config by index from sweep."""
    configs = load_sweep_configs(yaml_path)
    if index < 0 or index >= len(configs):
        raise ValueError(f"Config index {index} out of range [0, {len(configs) - 1}]")
    return configs[index]


def parse_image_size(value: str) -> Tuple[int, int]:
    width_str, height_str = value.lower().split("x")
    return int(width_str.strip()), int(height_str.strip())


def parse_complex(entry: object) -> complex:
    """Accept ``[re, im]``, ``"re,im"`` or a plain number."""
    if isinstance(entry, complex):
        return entry
    if isinstance(entry, (int, float)) and not isinstance(entry, bool):
        return complex(float(entry), 0.0)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return complex(float(entry[0]), float(entry[1]))
    if isinstance(entry, str):
        parts = entry.split(",")
        if len(parts) == 2:
            return complex(float(parts[0]), float(parts[1]))
    raise ValueError(f"Unsupported complex point specification: {entry!r}")


def _config_fields(config: RenderConfig) -> Dict[str, object]:
    return {
        "width": config.width,
        "height": config.height,
        "limit": config.limit,
        "upper_left": config.upper_left,
        "lower_right": config.lower_right,
    }


def _build_render_config(raw_data: Dict[str, object]) -> RenderConfig:
    data = _coerce_dimensions(raw_data)
    for corner in ("upper_left", "lower_right"):
        if corner in data:
            data[corner] = parse_complex(data[corner])
    if "limit" in data:
        data["limit"] = int(data["limit"])
        if data["limit"] < 0:
            raise ValueError(f"limit must be non-negative, got {data['limit']}")
    config = RenderConfig(**data)  # type: ignore[arg-type]
    if config.width <= 0 or config.height <= 0:
        raise ValueError(f"Image size must be positive, got {config.image_size}")
    return config


def _expand_sweep(defaults: Dict[str, object], sweep: Dict[str, object]) -> List[RenderConfig]:
    """Expand sweep definition into RenderConfig instances."""
    configs: List[RenderConfig] = []

    viewports = sweep.get("viewports")
    param_grid = {k: sweep[k] for k in sweep if k not in {"viewports", "image_shape"}}
    shape_options = sweep.get("image_shape")
    keys = list(param_grid.keys())

    if viewports:
        for viewport in viewports:
            upper_left, lower_right = viewport
            combos = product(*[param_grid[k] for k in keys]) if keys else [()]
            for combo in combos:
                data = {**defaults, **dict(zip(keys, combo))}
                data["upper_left"] = parse_complex(upper_left)
                data["lower_right"] = parse_complex(lower_right)
                configs.extend(_expand_shapes(data, shape_options))
    elif not keys:
        configs.extend(_expand_shapes(defaults, shape_options))
    else:
        for combo in product(*[param_grid[k] for k in keys]):
            data = {**defaults, **dict(zip(keys, combo))}
            configs.extend(_expand_shapes(data, shape_options))

    return configs


def _coerce_dimensions(data: Dict[str, object]) -> Dict[str, object]:
    result = dict(data)
    for key in ("image_size", "image_shape"):
        entry = result.pop(key, None)
        if entry is not None:
            result["width"], result["height"] = _normalize_shape_entry(entry)
    if "width" in result:
        result["width"] = int(result["width"])
    if "height" in result:
        result["height"] = int(result["height"])
    return result


def _normalize_shape_entry(entry: object) -> Tuple[int, int]:
    if isinstance(entry, dict):
        width = entry.get("width")
        height = entry.get("height")
        if width is None or height is None:
            raise ValueError("image_shape dict must include 'width' and 'height'")
        return int(width), int(height)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return int(entry[0]), int(entry[1])
    if isinstance(entry, str):
        return parse_image_size(entry)
    raise ValueError(f"Unsupported image shape specification: {entry!r}")


def _expand_shapes(base: Dict[str, object], shape_options: object) -> List[RenderConfig]:
    if not shape_options:
        return [_build_render_config(base)]

    shapes: Iterable[Tuple[int, int]]
    if isinstance(shape_options, (list, tuple)):
        shapes = [_normalize_shape_entry(opt) for opt in shape_options]
    else:
        shapes = [_normalize_shape_entry(shape_options)]

    sized = {k: v for k, v in base.items() if k not in {"image_size", "image_shape"}}
    configs = []
    for width, height in shapes:
        data = {**sized, "width": width, "height": height}
        configs.append(_build_render_config(data))
    return configs
