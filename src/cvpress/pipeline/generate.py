"""CV + cover letter generation: fit each document, then merge them."""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass

from cvpress.export.fonts import FontTable
from cvpress.export.merge import merge_documents
from cvpress.export.pdf_backend import PRODUCER, count_pages, render_to_bytes
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import LmModel
from cvpress.models.normalize import normalize_lang
from cvpress.pipeline.fitting import LETTER_FIT, FitOptions, FittedArtifact, fit_one_page
from cvpress.templates.letter import build_letter_document
from cvpress.templates.registry import LayoutHint, TemplateId, build_cv_document
from cvpress.theme import make_colors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedBundle:
    """Merged output plus the fitted parts it was built from."""

    data: bytes
    cv: FittedArtifact
    letter: FittedArtifact | None = None

    @property
    def pages(self) -> int:
        return self.cv.pages + (self.letter.pages if self.letter else 0)


def generate_cv_and_letter(
    cv: CvDocModel,
    *,
    brand_hex: str | None = None,
    lang: str = "fr",
    template_id: TemplateId | str = TemplateId.ATS,
    layout_hint: LayoutHint | str = LayoutHint.AUTO,
    letter: LmModel | None = None,
    letter_text: str | None = None,
    cv_options: FitOptions = FitOptions(),
    letter_options: FitOptions = LETTER_FIT,
    fonts: FontTable | None = None,
    producer: str = PRODUCER,
    author: str | None = None,
    cancel: threading.Event | None = None,
) -> GeneratedBundle:
    """Fit the CV and, when given, the letter to one page each and merge them.

    ``letter`` takes precedence over ``letter_text``. Without either, the
    bundle holds the fitted CV alone.
    """
    colors = make_colors(brand_hex)
    cv_lang = normalize_lang(lang)
    render = functools.partial(
        render_to_bytes, fonts=fonts, producer=producer, author=author
    )

    cv_fit = fit_one_page(
        lambda scale: build_cv_document(template_id, cv, cv_lang, colors, layout_hint, scale),
        cv_options,
        render=render,
        count=count_pages,
        cancel=cancel,
    )
    logger.info("CV fitted at scale %.3f (%s)", cv_fit.scale, TemplateId(template_id).value)

    if letter is None and letter_text is None:
        return GeneratedBundle(data=cv_fit.data, cv=cv_fit)

    source: LmModel | str = letter if letter is not None else letter_text or ""
    letter_fit = fit_one_page(
        lambda scale: build_letter_document(source, colors, scale),
        letter_options,
        render=render,
        count=count_pages,
        cancel=cancel,
    )
    logger.info("Letter fitted at scale %.3f", letter_fit.scale)

    merged = merge_documents([cv_fit.data, letter_fit.data])
    return GeneratedBundle(data=merged, cv=cv_fit, letter=letter_fit)
