"""Presenters that render run results for the terminal."""

from .summary import SummaryPresenter

__all__ = ["SummaryPresenter"]
