"""Learned corrections: records, lifecycle store and diff-based learning."""

from correction_engine.corrections.learning import (
    LearnedCorrections,
    is_stopword,
    learn_from_diff,
    learn_pipeline_corrections,
)
from correction_engine.corrections.models import (
    CorrectionRecord,
    CorrectionSource,
    CorrectionStatus,
    CorrectionView,
)
from correction_engine.corrections.store import (
    AUTO_APPLY_CONFIDENCE,
    DEPRECATION_THRESHOLD,
    MIN_CONFIRMATIONS,
    CorrectionStore,
    calculate_confidence,
)

__all__ = [
    "AUTO_APPLY_CONFIDENCE",
    "CorrectionRecord",
    "CorrectionSource",
    "CorrectionStatus",
    "CorrectionStore",
    "CorrectionView",
    "DEPRECATION_THRESHOLD",
    "LearnedCorrections",
    "MIN_CONFIRMATIONS",
    "calculate_confidence",
    "is_stopword",
    "learn_from_diff",
    "learn_pipeline_corrections",
]
