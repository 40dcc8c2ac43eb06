from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
import numbers
import random
import re
import string
from typing import Any, Mapping

from vectorchart_threshold.errors import ThresholdConfigError


MASK_SUFFIX_LENGTH = 9
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
_CLASS_NAME = re.compile(r"^\S+$")
_NAME_KEYS = {
    "above_threshold": "above_threshold",
    "aboveThreshold": "above_threshold",
    "above": "above_threshold",
    "below_threshold": "below_threshold",
    "belowThreshold": "below_threshold",
    "below": "below_threshold",
}
_DEFAULT_RNG = random.Random()


@dataclass(frozen=True)
class ThresholdNames:
    above_threshold: str
    below_threshold: str


DEFAULT_CLASS_NAMES = ThresholdNames(
    above_threshold="ct-threshold-above",
    below_threshold="ct-threshold-below",
)
DEFAULT_MASK_NAMES = ThresholdNames(
    above_threshold="ct-threshold-mask-above",
    below_threshold="ct-threshold-mask-below",
)


@dataclass(frozen=True)
class ThresholdOptions:
    """Resolved overlay options; mask ids carry a per-instance random suffix."""

    threshold: float
    show_indicator: bool
    class_names: ThresholdNames
    mask_names: ThresholdNames
    above_mask_id: str
    below_mask_id: str

    @property
    def above_mask_url(self) -> str:
        return f"url(#{self.above_mask_id})"

    @property
    def below_mask_url(self) -> str:
        return f"url(#{self.below_mask_id})"


def build_options(
    threshold: Any = 0,
    *,
    show_indicator: bool = False,
    class_names: Mapping[str, Any] | None = None,
    mask_names: Mapping[str, Any] | None = None,
    rng: random.Random | None = None,
) -> ThresholdOptions:
    value = coerce_threshold(threshold)
    if not isinstance(show_indicator, bool):
        raise ThresholdConfigError(f"show_indicator must be a boolean, got {type(show_indicator).__name__}")
    classes = _merge_names(class_names, DEFAULT_CLASS_NAMES, "class_names", _CLASS_NAME)
    masks = _merge_names(mask_names, DEFAULT_MASK_NAMES, "mask_names", _IDENTIFIER)
    above_id, below_id = unique_mask_ids(masks, rng or _DEFAULT_RNG)
    return ThresholdOptions(
        threshold=value,
        show_indicator=show_indicator,
        class_names=classes,
        mask_names=masks,
        above_mask_id=above_id,
        below_mask_id=below_id,
    )


def coerce_threshold(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise ThresholdConfigError(f"threshold must be a number, got {type(value).__name__}")
    out = float(value)
    if not math.isfinite(out):
        raise ThresholdConfigError(f"threshold must be finite, got {out}")
    return out


def unique_mask_ids(names: ThresholdNames, rng: random.Random) -> tuple[str, str]:
    above = f"{names.above_threshold}-{_suffix(rng)}"
    below = f"{names.below_threshold}-{_suffix(rng)}"
    while below == above:
        below = f"{names.below_threshold}-{_suffix(rng)}"
    return above, below


def _suffix(rng: random.Random) -> str:
    return "".join(rng.choices(_SUFFIX_ALPHABET, k=MASK_SUFFIX_LENGTH))


def _merge_names(
    overrides: Mapping[str, Any] | None,
    defaults: ThresholdNames,
    field_name: str,
    pattern: re.Pattern[str],
) -> ThresholdNames:
    raw = {"above_threshold": defaults.above_threshold, "below_threshold": defaults.below_threshold}
    if overrides is not None:
        if not isinstance(overrides, Mapping):
            raise ThresholdConfigError(f"{field_name} must be a mapping")
        for key, value in overrides.items():
            if key not in _NAME_KEYS:
                raise ThresholdConfigError(f"unknown {field_name} key: {key}")
            raw[_NAME_KEYS[key]] = value
    for key, value in raw.items():
        if not isinstance(value, str) or not pattern.match(value):
            raise ThresholdConfigError(f"{field_name}.{key} is not a valid name: {value!r}")
    return ThresholdNames(above_threshold=raw["above_threshold"], below_threshold=raw["below_threshold"])
