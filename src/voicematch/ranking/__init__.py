"""Quality scoring and ranking of candidate voices."""

from .scorer import QualityScorer, QualityWeights, ScoredCandidate

__all__ = ["QualityScorer", "QualityWeights", "ScoredCandidate"]
