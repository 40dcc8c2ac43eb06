from __future__ import annotations


class ThresholdConfigError(ValueError):
    """Raised when threshold overlay options are malformed."""
