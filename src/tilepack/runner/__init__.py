"""Layout orchestration, dataset generation and experiment runs."""

from .experiment import ExperimentRunner, main
from .layout import Layout

__all__ = ["ExperimentRunner", "Layout", "main"]
