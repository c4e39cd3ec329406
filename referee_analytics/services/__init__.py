"""Service layer package.

Exports high-level services consumed by orchestration / presentation layers.
"""

from .route_service import RouteService, RouteServiceConfig
from .heatmap_service import HeatMapResult, HeatMapSession, compute_heat_map
from .analysis_service import MatchAnalysis, MatchAnalysisConfig, MatchAnalysisService

__all__ = [
    "RouteService",
    "RouteServiceConfig",
    "HeatMapResult",
    "HeatMapSession",
    "compute_heat_map",
    "MatchAnalysis",
    "MatchAnalysisConfig",
    "MatchAnalysisService",
]
