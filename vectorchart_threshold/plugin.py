from __future__ import annotations

import logging
import random
from typing import Any, Mapping, Protocol

from vectorchart.events import BUILT_EVENT, DRAW_EVENT
from vectorchart_threshold.binder import apply_threshold_style, create_masks
from vectorchart_threshold.options import ThresholdOptions, build_options


LOGGER = logging.getLogger(__name__)


class ThresholdOverlayHost(Protocol):
    supports_threshold_overlay: bool

    def on(self, event: str, handler: Any) -> None:
        ...


class ThresholdPlugin:
    """Installable overlay handle; call it with a chart to subscribe."""

    def __init__(self, options: ThresholdOptions) -> None:
        self.options = options

    def __call__(self, chart: ThresholdOverlayHost) -> bool:
        if not getattr(chart, "supports_threshold_overlay", False):
            LOGGER.debug("threshold overlay not installed on %s", type(chart).__name__)
            return False
        chart.on(DRAW_EVENT, self.on_draw)
        chart.on(BUILT_EVENT, self.on_built)
        LOGGER.debug(
            "threshold overlay installed on %s (threshold=%s, masks=%s/%s)",
            type(chart).__name__,
            self.options.threshold,
            self.options.above_mask_id,
            self.options.below_mask_id,
        )
        return True

    def on_draw(self, event: Any) -> None:
        apply_threshold_style(event, self.options)

    def on_built(self, event: Any) -> None:
        create_masks(event, self.options)


def ct_threshold(
    threshold: Any = 0,
    *,
    show_indicator: bool = False,
    class_names: Mapping[str, Any] | None = None,
    mask_names: Mapping[str, Any] | None = None,
    rng: random.Random | None = None,
) -> ThresholdPlugin:
    options = build_options(
        threshold,
        show_indicator=show_indicator,
        class_names=class_names,
        mask_names=mask_names,
        rng=rng,
    )
    return ThresholdPlugin(options)
