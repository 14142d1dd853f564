"""Template confidence scoring.

Slides are matched against templates by shared words: a template's use cases
count double, its description counts once, and the score is the matched share
of the template's total weight.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Sequence

from slide_catalog.catalog.plan import slide_intent
from slide_catalog.constants import ScoreWeights

from .models import ScoreTier, TemplateCatalogEntry, TemplateScore

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> list[str]:
    """Lowercase words with punctuation removed. Single characters are dropped."""
    return [t for t in _NON_WORD.sub(" ", text.lower()).split() if len(t) > 1]


def tier_for(score: int) -> ScoreTier:
    if score >= ScoreWeights.HIGH_TIER:
        return "high"
    if score >= ScoreWeights.MEDIUM_TIER:
        return "medium"
    return "low"


def slide_text(slide: Mapping[str, Any]) -> str:
    key_points = slide.get("key_points") or []
    if not isinstance(key_points, list):
        key_points = []
    return " ".join([slide_intent(dict(slide)), *(str(k) for k in key_points)])


def _score_one(slide_tokens: set[str], template: TemplateCatalogEntry) -> int:
    awarded = possible = 0.0
    weighted: Iterable[tuple[list[str], float]] = (
        (tokenize(" ".join(template.use_cases)), ScoreWeights.USE_CASE),
        (tokenize(template.description), ScoreWeights.DESCRIPTION),
    )
    for tokens, weight in weighted:
        for token in tokens:
            possible += weight
            if token in slide_tokens:
                awarded += weight
    if not possible:
        return 0
    return int(math.floor(awarded / possible * 100 + 0.5))


def score_templates(
    slide: Mapping[str, Any], catalog: Sequence[TemplateCatalogEntry]
) -> list[TemplateScore]:
    """Rank every template for one slide, best first. Ties keep catalog order."""
    tokens = set(tokenize(slide_text(slide)))
    scores = []
    for template in catalog:
        score = _score_one(tokens, template) if tokens else 0
        scores.append(
            TemplateScore(
                template_id=template.id,
                template_name=template.name,
                score=score,
                tier=tier_for(score),
                description=template.description,
            )
        )
    scores.sort(key=lambda s: s.score, reverse=True)
    return scores


def score_all(
    slides: Sequence[Mapping[str, Any]], catalog: Sequence[TemplateCatalogEntry]
) -> dict[int, list[TemplateScore]]:
    """Scores keyed by slide number (explicit, else 1-based position)."""
    result: dict[int, list[TemplateScore]] = {}
    for index, slide in enumerate(slides):
        number = slide.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            number = index + 1
        result[number] = score_templates(slide, catalog)
    return result
