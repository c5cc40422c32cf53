"""Scale fitting: find the largest scale at which a document fits one page.

The search assumes the page count never decreases as the scale grows. Each
probe is a full render plus a page count, so both are injectable and tests can
run against a fake oracle.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from cvpress.config import FitConfig
from cvpress.errors import FitCancelled
from cvpress.export.pdf_backend import count_pages, render_to_bytes
from cvpress.layout.document import LayoutDocument

logger = logging.getLogger(__name__)

# Bisection stops once the interval is narrower than this.
TOLERANCE = 0.01

BuildFn = Callable[[float], LayoutDocument]
RenderFn = Callable[[LayoutDocument], bytes]
CountFn = Callable[[bytes], int]


@dataclass(frozen=True)
class FitOptions:
    min_scale: float = 0.8
    max_scale: float = 1.6
    iterations: int = 8
    initial: float = 1.0

    def __post_init__(self):
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )
        if self.iterations < 0:
            raise ValueError("iterations must be >= 0")

    @property
    def start(self) -> float:
        """``initial`` clamped to the search range."""
        return min(max(self.initial, self.min_scale), self.max_scale)

    @classmethod
    def from_config(cls, config: FitConfig) -> FitOptions:
        return cls(
            min_scale=config.min_scale,
            max_scale=config.max_scale,
            iterations=config.iterations,
            initial=config.initial,
        )


LETTER_FIT = FitOptions(min_scale=0.85, iterations=6)


@dataclass(frozen=True)
class FitTrial:
    scale: float
    pages: int


@dataclass(frozen=True)
class FittedArtifact:
    """Result of a fitting search.

    ``trials`` lists every oracle call in order, including the fallback
    render at ``min_scale`` when nothing fit.
    """

    data: bytes
    scale: float
    pages: int
    trials: tuple[FitTrial, ...] = ()


def fit_one_page(
    build: BuildFn,
    options: FitOptions = FitOptions(),
    *,
    render: RenderFn = render_to_bytes,
    count: CountFn = count_pages,
    cancel: threading.Event | None = None,
) -> FittedArtifact:
    """Bisect the scale passed to ``build`` against the page-count oracle.

    The initial scale, clamped to the range, is probed first. When it overflows, the upper bound
    drops to it; otherwise it becomes the current best and the lower bound.
    Each further step probes the rounded midpoint and moves the failing
    bound one tolerance step past it. When no probe fits, the document is
    rendered at ``min_scale`` and returned as is.

    Raises:
        FitCancelled: ``cancel`` was set before an oracle call.
    """
    trials: list[FitTrial] = []

    def probe(scale: float) -> tuple[bytes, int]:
        if cancel is not None and cancel.is_set():
            raise FitCancelled(f"Fitting cancelled before rendering at scale {scale}")
        data = render(build(scale))
        pages = count(data)
        trials.append(FitTrial(scale, pages))
        logger.debug("Fit probe scale=%.3f pages=%d", scale, pages)
        return data, pages

    low, high = options.min_scale, options.max_scale
    best: tuple[bytes, float, int] | None = None

    start = options.start
    data, pages = probe(start)
    if pages > 1:
        high = start
    else:
        best = (data, start, pages)
        low = start

    for _ in range(options.iterations):
        mid = round((low + high) / 2, 3)
        data, pages = probe(mid)
        if pages > 1:
            high = mid - TOLERANCE
        else:
            best = (data, mid, pages)
            low = mid + TOLERANCE
        if high - low < TOLERANCE:
            break

    if best is None:
        logger.warning(
            "No scale fit on one page after %d probe(s); falling back to %.3f",
            len(trials),
            options.min_scale,
        )
        data, pages = probe(options.min_scale)
        best = (data, options.min_scale, pages)
    else:
        logger.info("Accepted scale %.3f after %d probe(s)", best[1], len(trials))

    data, scale, pages = best
    return FittedArtifact(data=data, scale=scale, pages=pages, trials=tuple(trials))
