"""Tests for the scale-fitting search."""

import logging
import threading

import pytest

from cvpress.config import FitConfig
from cvpress.errors import FitCancelled
from cvpress.export import count_pages
from cvpress.pipeline.fitting import LETTER_FIT, FitOptions, FitTrial, fit_one_page
from cvpress.templates.letter import build_letter_document
from cvpress.templates.registry import build_cv_document

THRESHOLDS = [0.5, 0.79, 0.8, 0.85, 0.9, 0.97, 1.0, 1.05, 1.2, 1.37, 1.59, 1.6, 2.0]


class FakeOracle:
    """Monotonic oracle: one page up to ``threshold``, two pages above it.

    The "document" is the scale itself and the rendered bytes are its text.
    """

    def __init__(self, threshold: float):
        self.threshold = threshold
        self.renders = 0

    @staticmethod
    def build(scale: float) -> float:
        return scale

    def render(self, doc: float) -> bytes:
        self.renders += 1
        return repr(doc).encode()

    def count(self, data: bytes) -> int:
        return 1 if float(data) <= self.threshold else 2

    def fit(self, options: FitOptions = FitOptions(), **kwargs):
        return fit_one_page(
            self.build, options, render=self.render, count=self.count, **kwargs
        )


class TestFitOptions:
    def test_defaults(self):
        options = FitOptions()
        assert (options.min_scale, options.max_scale) == (0.8, 1.6)
        assert options.iterations == 8
        assert options.initial == 1.0

    def test_letter_defaults(self):
        assert LETTER_FIT.min_scale == 0.85
        assert LETTER_FIT.max_scale == 1.6
        assert LETTER_FIT.iterations == 6

    def test_from_config(self):
        options = FitOptions.from_config(FitConfig(min_scale=0.7, iterations=3))
        assert options == FitOptions(min_scale=0.7, iterations=3)

    def test_inverted_range(self):
        with pytest.raises(ValueError):
            FitOptions(min_scale=1.7)

    def test_negative_iterations(self):
        with pytest.raises(ValueError):
            FitOptions(iterations=-1)

    @pytest.mark.parametrize(
        "options, expected",
        [
            (FitOptions(), 1.0),
            (FitOptions(min_scale=1.2), 1.2),
            (FitOptions(initial=2.0), 1.6),
            (FitOptions(min_scale=0.85, initial=0.5), 0.85),
        ],
    )
    def test_start_is_clamped_to_range(self, options, expected):
        assert options.start == expected

    @pytest.mark.parametrize("threshold", [1.05, 1.3, 2.0])
    def test_initial_below_range_keeps_scale_in_range(self, threshold):
        result = FakeOracle(threshold).fit(FitOptions(min_scale=1.2))
        assert 1.2 <= result.scale <= 1.6
        assert result.trials[0].scale == 1.2
        assert all(1.2 <= t.scale <= 1.6 for t in result.trials)

    def test_initial_above_range_keeps_scale_in_range(self):
        result = FakeOracle(2.0).fit(FitOptions(initial=3.0))
        assert result.trials[0].scale == 1.6
        assert result.scale == 1.6


class TestFitWithFakeOracle:
    @pytest.mark.parametrize("threshold", THRESHOLDS)
    def test_scale_in_range(self, threshold):
        result = FakeOracle(threshold).fit()
        assert 0.8 <= result.scale <= 1.6

    @pytest.mark.parametrize("threshold", [t for t in THRESHOLDS if t >= 0.8])
    def test_result_fits(self, threshold):
        result = FakeOracle(threshold).fit()
        assert result.pages == 1
        assert result.scale <= threshold

    @pytest.mark.parametrize("threshold", THRESHOLDS)
    def test_no_larger_tested_scale_fits(self, threshold):
        result = FakeOracle(threshold).fit()
        fitting = [t.scale for t in result.trials if t.pages <= 1]
        if fitting:
            assert max(fitting) == result.scale

    @pytest.mark.parametrize("threshold", [0.85, 0.9, 0.97, 1.05, 1.2, 1.37, 1.59])
    def test_converges_near_threshold(self, threshold):
        result = FakeOracle(threshold).fit()
        assert threshold - result.scale < 0.03

    @pytest.mark.parametrize("threshold", THRESHOLDS)
    def test_bounded_probes(self, threshold):
        oracle = FakeOracle(threshold)
        result = oracle.fit()
        assert oracle.renders == len(result.trials)
        assert len(result.trials) <= FitOptions().iterations + 2

    def test_bytes_match_accepted_scale(self):
        result = FakeOracle(1.2).fit()
        assert float(result.data) == result.scale

    def test_initial_fit_is_kept_when_nothing_larger_fits(self):
        result = FakeOracle(1.0).fit()
        assert result.scale == 1.0
        assert result.trials[0] == FitTrial(1.0, 1)

    @pytest.mark.parametrize("threshold", [0.5, 0.79])
    def test_falls_back_to_minimum(self, threshold, caplog):
        with caplog.at_level(logging.WARNING, logger="cvpress.pipeline.fitting"):
            result = FakeOracle(threshold).fit()
        assert result.scale == 0.8
        assert result.pages == 2
        assert result.trials[-1] == FitTrial(0.8, 2)
        assert "falling back" in caplog.text

    def test_zero_iterations_probes_initial_only(self):
        result = FakeOracle(2.0).fit(FitOptions(iterations=0))
        assert result.scale == 1.0
        assert len(result.trials) == 1

    def test_custom_range(self):
        result = FakeOracle(0.9).fit(FitOptions(min_scale=0.85, iterations=6))
        assert 0.85 <= result.scale <= 0.9

    def test_accepted_scale_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="cvpress.pipeline.fitting"):
            FakeOracle(1.2).fit()
        assert "Accepted scale" in caplog.text

    def test_cancel_before_first_render(self):
        oracle = FakeOracle(1.2)
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(FitCancelled):
            oracle.fit(cancel=cancel)
        assert oracle.renders == 0

    def test_cancel_between_renders(self):
        oracle = FakeOracle(1.2)
        cancel = threading.Event()

        def count(data: bytes) -> int:
            cancel.set()
            return oracle.count(data)

        with pytest.raises(FitCancelled):
            fit_one_page(oracle.build, render=oracle.render, count=count, cancel=cancel)
        assert oracle.renders == 1


class TestFitEndToEnd:
    def test_ats_cv_fits_one_page(self, sample_cv, colors):
        result = fit_one_page(
            lambda s: build_cv_document("ats", sample_cv, "fr", colors, "auto", s)
        )
        assert 0.8 <= result.scale <= 1.6
        assert result.pages == 1
        assert count_pages(result.data) == 1

    def test_dense_cv_still_one_page(self, heavy_cv, colors):
        result = fit_one_page(
            lambda s: build_cv_document("ats", heavy_cv, "fr", colors, "auto", s)
        )
        assert 0.8 <= result.scale <= 1.6
        assert count_pages(result.data) == 1

    def test_letter_fits_one_page(self, sample_letter, colors):
        result = fit_one_page(
            lambda s: build_letter_document(sample_letter, colors, s), LETTER_FIT
        )
        assert 0.85 <= result.scale <= 1.6
        assert count_pages(result.data) == 1
