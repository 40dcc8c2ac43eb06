from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when series or label input cannot be charted."""
