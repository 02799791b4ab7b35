"""Focus (aboutness) strategies."""

from .frequency import (  # noqa: F401
    ConfidenceWeightedFocusStrategy,
    FrequencyOfMentionFocusStrategy,
)
