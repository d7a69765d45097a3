"""Backends for result output (bar chart, CSV file)."""

from .chart import render_bar_chart
from .file_save import ExportError, save_scores_csv

__all__ = ["ExportError", "render_bar_chart", "save_scores_csv"]
