# services/assessment_engine/scorer.py
# Handles scoring for the pillar assessment: pillar scores, archetype scores and consistency.

import logging
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .definitions import (
    ARCHETYPE_KEYS,
    ARCHETYPE_QUESTION_COUNT,
    ARCHETYPE_TRAIT_TEMPLATES,
    FORCED_CHOICE_ARCHETYPES,
    TRAIT_SCALE_SPAN,
)
from .models import (
    AnswerValue,
    Archetype,
    ArchetypeDetermination,
    ArchetypeScores,
    Level,
    Pillar,
    PillarScore,
    Question,
    Section,
    TraitDimension,
)

logger = logging.getLogger(__name__)

# --- Constants ---

LOW_LEVEL_MAX = 3.5       # raw <= 3.5 is low
MODERATE_LEVEL_MAX = 5.5  # 3.5 < raw <= 5.5 is moderate, above is high
LIKERT_MIN = 1.0
LIKERT_SPAN = 6.0         # 1-7 scale

EMPTY_PILLAR_SCORE = PillarScore(raw=0, level=Level.LOW, percentage=0)

# Enough digits to quantize any finite float to a few decimal places.
DECIMAL_PRECISION = 400


def round_half_up(value: float, places: int = 0) -> float:
    """Rounds like Math.round does for the non-negative values the engine produces.

    NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def answer_as_number(value: object) -> Optional[float]:
    """Numeric view of an answer, or None for free text, NaN, infinities and other non-numeric values."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


# --- Pillar Scoring ---

def level_for_raw(raw: float) -> Level:
    if raw <= LOW_LEVEL_MAX:
        return Level.LOW
    if raw <= MODERATE_LEVEL_MAX:
        return Level.MODERATE
    return Level.HIGH


def score_pillar(likert_values: Sequence[float]) -> PillarScore:
    """
    Scores one pillar from its Likert answers (1-7).

    An empty list is a valid input and scores as raw 0, level low, 0%.
    NaN and infinite values are dropped before averaging.
    Values are not range-checked; out-of-range answers give out-of-range output.
    """
    values = [v for v in likert_values if math.isfinite(v)]
    if not values:
        return EMPTY_PILLAR_SCORE

    mean = sum(values) / len(values)
    raw = round_half_up(mean, 1)
    percentage = round_half_up((raw - LIKERT_MIN) / LIKERT_SPAN * 100)
    if not math.isfinite(percentage):
        logger.debug(f"Pillar answers overflow the float range; scoring as empty: {values}")
        return EMPTY_PILLAR_SCORE

    return PillarScore(raw=raw, level=level_for_raw(raw), percentage=int(percentage))


def collect_pillar_answers(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> Dict[Pillar, List[float]]:
    """Groups numeric answers to pillar questions by pillar, in catalog order."""
    pillar_answers: Dict[Pillar, List[float]] = {pillar: [] for pillar in Pillar}

    for question in questions:
        if question.section != Section.PILLAR or question.pillar is None:
            continue
        if question.id not in answers:
            continue
        value = answer_as_number(answers[question.id])
        if value is None:
            logger.debug(f"Ignoring non-numeric answer for pillar question '{question.id}'")
            continue
        pillar_answers[question.pillar].append(value)

    return pillar_answers


def calculate_pillar_scores(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> Dict[Pillar, PillarScore]:
    """Scores all five pillars; pillars without answers get the empty score."""
    pillar_answers = collect_pillar_answers(answers, questions)
    scores = {pillar: score_pillar(values) for pillar, values in pillar_answers.items()}
    raw_scores = {pillar.value: score.raw for pillar, score in scores.items()}
    logger.debug(f"Calculated pillar scores: {raw_scores}")
    return scores


# --- Archetype Scoring ---

def resolve_forced_choice(value: AnswerValue) -> Optional[Archetype]:
    """
    Maps a forced-choice answer to an archetype.

    Accepts an archetype key ("optimizer"), a display name ("The Optimizer"),
    or the legacy 1-based option index.
    """
    if isinstance(value, str):
        key = value.strip().lower()
        archetype = ARCHETYPE_KEYS.get(key)
        if archetype is None:
            archetype = next((a for a in FORCED_CHOICE_ARCHETYPES if a.value.lower() == key), None)
        if archetype is not None:
            return archetype if archetype in FORCED_CHOICE_ARCHETYPES else None

    number = answer_as_number(value)
    if number is None or number != int(number):
        return None
    index = int(number)
    if 1 <= index <= len(FORCED_CHOICE_ARCHETYPES):
        return FORCED_CHOICE_ARCHETYPES[index - 1]
    return None


def calculate_archetype_scores(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> ArchetypeScores:
    """Forced-choice mode: one point per answered archetype question to the chosen archetype."""
    scores: ArchetypeScores = {archetype.value: 0 for archetype in FORCED_CHOICE_ARCHETYPES}

    for question in questions:
        if question.section != Section.ARCHETYPE or question.trait is not None:
            continue
        if question.id not in answers:
            continue
        archetype = resolve_forced_choice(answers[question.id])
        if archetype is None:
            logger.debug(f"Unrecognised archetype answer for '{question.id}': {answers[question.id]!r}")
            continue
        scores[archetype.value] += 1

    logger.debug(f"Calculated forced-choice archetype scores: {scores}")
    return scores


def aggregate_trait_scores(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> Dict[TraitDimension, float]:
    """Trait-aggregate mode: mean Likert answer per trait dimension."""
    trait_answers: Dict[TraitDimension, List[float]] = {}

    for question in questions:
        if question.section != Section.ARCHETYPE or question.trait is None:
            continue
        value = answer_as_number(answers.get(question.id))
        if value is None:
            continue
        trait_answers.setdefault(question.trait, []).append(value)

    return {
        trait: round_half_up(sum(values) / len(values), 2)
        for trait, values in trait_answers.items()
    }


def score_trait_archetypes(trait_means: Mapping[TraitDimension, float]) -> ArchetypeScores:
    """
    Scores each archetype by how closely the member's trait means match its template.

    Similarity = 6 - mean absolute distance over the measured traits, so scores
    share the 0-6 range of the forced-choice scale.
    """
    scores: ArchetypeScores = {}
    for archetype, template in ARCHETYPE_TRAIT_TEMPLATES.items():
        distances = [
            abs(mean - template[trait])
            for trait, mean in trait_means.items()
            if trait in template
        ]
        if not distances:
            scores[archetype.value] = 0.0
            continue
        similarity = TRAIT_SCALE_SPAN - sum(distances) / len(distances)
        scores[archetype.value] = round_half_up(similarity, 2)

    logger.debug(f"Calculated trait-aggregate archetype scores: {scores}")
    return scores


def determine_archetypes(archetype_scores: Mapping[str, float]) -> ArchetypeDetermination:
    """
    Picks primary and secondary archetypes from the highest scores.

    Ties keep insertion order. The secondary is only reported when its score
    is above zero. An empty map yields no archetypes rather than an error.
    """
    if not archetype_scores:
        logger.warning("No archetype scores provided; cannot determine archetypes.")
        return ArchetypeDetermination()

    ranked = sorted(archetype_scores.items(), key=lambda item: item[1], reverse=True)
    primary = ranked[0][0]
    secondary = ranked[1][0] if len(ranked) > 1 and ranked[1][1] > 0 else None

    return ArchetypeDetermination(primary=primary, secondary=secondary)


# --- Consistency ---

def calculate_consistency_score(archetype_scores: Mapping[str, float]) -> float:
    """1 - (max - min) / 6 over the archetype scores, to 2 decimals. Empty scores give 0.0."""
    if not archetype_scores:
        return 0.0

    values = list(archetype_scores.values())
    spread = max(values) - min(values)
    consistency = 1 - spread / ARCHETYPE_QUESTION_COUNT
    return round_half_up(consistency, 2)
