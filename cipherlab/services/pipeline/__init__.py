"""Analysis pipeline."""

from cipherlab.services.pipeline.analyzer import CipherAnalyzer
from cipherlab.services.pipeline.insights import CandidateInsights

__all__ = [
    "CipherAnalyzer",
    "CandidateInsights",
]
