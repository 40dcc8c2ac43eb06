from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SeriesData:
    values: np.ndarray
    mask: np.ndarray
    name: str | None = None
    class_name: str | None = None

    def __len__(self) -> int:
        return int(self.values.size)

    def finite_values(self) -> np.ndarray:
        return self.values[self.mask]
