"""dephealth: dependency health and repository activity analysis."""

from dephealth.engines.analysis import AnalysisResult, DependencyHealthAnalyzer, analyze_dependencies

__version__ = "0.1.0"

__all__ = ["AnalysisResult", "DependencyHealthAnalyzer", "analyze_dependencies", "__version__"]
