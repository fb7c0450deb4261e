"""Analysis orchestrator: the single entry point of the engine."""

from dephealth.engines.analysis.analyzer import DependencyHealthAnalyzer, analyze_dependencies
from dephealth.engines.analysis.models import AnalysisResult

__all__ = ["AnalysisResult", "DependencyHealthAnalyzer", "analyze_dependencies"]
