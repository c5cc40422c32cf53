"""Tests for the CV + cover letter generation flow."""

import threading

import pytest

from cvpress.errors import FitCancelled
from cvpress.export import count_pages
from cvpress.pipeline import FitOptions, generate_cv_and_letter


class TestGenerate:
    def test_cv_and_letter_merge_to_two_pages(self, sample_cv, sample_letter):
        bundle = generate_cv_and_letter(
            sample_cv, brand_hex="#2563eb", template_id="modern", letter=sample_letter
        )
        assert bundle.cv.pages == 1
        assert bundle.letter is not None
        assert bundle.letter.pages == 1
        assert bundle.pages == 2
        assert count_pages(bundle.data) == 2

    def test_plain_text_letter(self, sample_cv):
        bundle = generate_cv_and_letter(
            sample_cv,
            template_id="classic",
            letter_text="Madame, Monsieur,\n\nJe vous propose ma candidature.\n\nCordialement",
        )
        assert count_pages(bundle.data) == 2
        assert 0.85 <= bundle.letter.scale <= 1.6

    def test_cv_only(self, sample_cv):
        bundle = generate_cv_and_letter(sample_cv, lang="en")
        assert bundle.letter is None
        assert bundle.data == bundle.cv.data
        assert bundle.pages == 1

    def test_model_letter_wins_over_text(self, sample_cv, sample_letter):
        with_both = generate_cv_and_letter(
            sample_cv, letter=sample_letter, letter_text="ignored"
        )
        model_only = generate_cv_and_letter(sample_cv, letter=sample_letter)
        assert with_both.letter.data == model_only.letter.data

    def test_fit_options_are_used(self, sample_cv):
        bundle = generate_cv_and_letter(
            sample_cv, cv_options=FitOptions(iterations=0, initial=0.9)
        )
        assert bundle.cv.scale == 0.9
        assert len(bundle.cv.trials) == 1

    def test_deterministic(self, sample_cv, sample_letter):
        a = generate_cv_and_letter(sample_cv, template_id="elegant", letter=sample_letter)
        b = generate_cv_and_letter(sample_cv, template_id="elegant", letter=sample_letter)
        assert a.data == b.data

    def test_cancelled(self, sample_cv):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(FitCancelled):
            generate_cv_and_letter(sample_cv, cancel=cancel)

    def test_unknown_template(self, sample_cv):
        with pytest.raises(ValueError):
            generate_cv_and_letter(sample_cv, template_id="fancy")
