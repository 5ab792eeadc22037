"""Analysis module - impact solving, analysis driver, reporting."""

from goimpact.analysis.impact_analyzer import ImpactAnalyzer, analyze_repository
from goimpact.analysis.impact_solver import ImpactSolver
from goimpact.analysis.models import CauseRecord, ImpactResult, PackageImpact
from goimpact.analysis.reporter import render, render_json, render_text

__all__ = [
    "ImpactAnalyzer",
    "ImpactSolver",
    "ImpactResult",
    "PackageImpact",
    "CauseRecord",
    "analyze_repository",
    "render",
    "render_text",
    "render_json",
]
