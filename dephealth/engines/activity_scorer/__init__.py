"""Repository activity scorer engine."""

from dephealth.engines.activity_scorer.models import GitHistoryStats, RepositoryActivity
from dephealth.engines.activity_scorer.scorer import ActivityScorer, compute_activity_score

__all__ = ["ActivityScorer", "GitHistoryStats", "RepositoryActivity", "compute_activity_score"]
