from .normalize import normalize_labels, normalize_series

__all__ = ["normalize_labels", "normalize_series"]
