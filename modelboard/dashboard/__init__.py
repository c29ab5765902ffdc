"""
modelboard Dashboard Module

Models list, refresh coordination and chart projection, all in plain Python
so the view layer only renders prepared data structures.
"""

from .controller import DashboardCoordinator, build_dashboard
from .models_list import ModelListController, FetchState
from .chart import ChartSeriesPoint, project, build_chart

__all__ = [
    "DashboardCoordinator",
    "build_dashboard",
    "ModelListController",
    "FetchState",
    "ChartSeriesPoint",
    "project",
    "build_chart",
]
