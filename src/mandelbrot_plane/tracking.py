"""MLflow logging for Mandelbrot plane renders."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Sequence

import mlflow
import pandas as pd

from .config import RenderConfig
from .report import GridReport

DEFAULT_TRACKING_URI = "./mlruns"
EXPERIMENT_NAME = "mandelbrot_plane"


def log_to_mlflow(
    config: RenderConfig,
    report: GridReport,
    suite_name: str = "default",
) -> None:
    """Log a grid computation to MLflow as params, metrics and a column table.

    If MLFLOW_RUN_ID is set in the environment, the existing run is
    continued. Otherwise a new run named after ``config.run_name`` is started.
    Nothing is logged while SKIP_MLFLOW is set.

    Args:
        config: Render configuration
        report: Grid, timing stats and per-column records
        suite_name: Tag used to group related runs
    """
    if os.environ.get("SKIP_MLFLOW"):
        return

    mlflow.set_tracking_uri(_resolve_tracking_uri())
    mlflow.set_experiment(EXPERIMENT_NAME)

    existing_run_id = os.environ.get("MLFLOW_RUN_ID")
    if existing_run_id:
        run_context = mlflow.start_run(run_id=existing_run_id)
    else:
        run_context = mlflow.start_run(run_name=config.run_name)

    with run_context as run:
        mlflow.set_tags(
            {
                "node_name": os.uname().nodename,
                "suite": suite_name,
            }
        )

        mlflow.log_params(config.to_dict())

        timing_stats = report.timing or {}
        for key in ("wall_time", "escaped", "members", "max_escape"):
            mlflow.log_metric(key, float(timing_stats.get(key, 0.0)))

        column_records = report.copy_columns()
        if column_records:
            mlflow.log_table(_records_to_table(column_records), "columns.json")

        print(f"[MLflow] Logged run: {config.run_name} (suite: {suite_name})")
        print(f"[MLflow] Run ID: {run.info.run_id}")


def _records_to_table(records: Sequence[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """Convert row-wise records into MLflow table format."""
    frame = pd.DataFrame.from_records(records)
    return frame.to_dict(orient="list")


def _resolve_tracking_uri() -> str:
    return os.environ.get("MLFLOW_TRACKING_URI") or DEFAULT_TRACKING_URI
