"""Mandelbrot escape-time evaluation and pixel-to-plane mapping."""

__version__ = "1.0.0"

# Core computation and config - lightweight, no tracking dependencies
from .computation import NO_ESCAPE, escape_grid, escape_time, pixel_to_point
from .config import RenderConfig, default_render_config
from .report import GridReport, compute_report


# Conditional imports - only loaded when needed
def __getattr__(name):
    """Lazy loading of heavy modules."""
    if name == "log_to_mlflow":
        from .tracking import log_to_mlflow

        return log_to_mlflow
    elif name == "load_sweep_configs":
        from .config import load_sweep_configs

        return load_sweep_configs
    elif name == "get_config_by_index":
        from .config import get_config_by_index

        return get_config_by_index
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "NO_ESCAPE",
    "escape_time",
    "pixel_to_point",
    "escape_grid",
    "RenderConfig",
    "default_render_config",
    "GridReport",
    "compute_report",
    "log_to_mlflow",
    "load_sweep_configs",
    "get_config_by_index",
]
