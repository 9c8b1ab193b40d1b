# services/assessment_engine/percentage_scorer.py
# Simplified percentage-scale scoring, used where a lightweight summary is
# needed instead of the full scored result. Thresholds here are independent
# of the raw-score bands in scorer.py.

import logging
import math
from typing import Dict, Iterable, List, Mapping, Sequence

from .definitions import DEFAULT_ARCHETYPE, pillar_name
from .models import AnswerValue, Pillar, Question, Section
from .scorer import answer_as_number, calculate_archetype_scores, round_half_up

logger = logging.getLogger(__name__)

LIKERT_MAX = 7.0

STRENGTH_MIN_PERCENT = 75
GROWTH_MIN_PERCENT = 42
GAP_MIN_PERCENT = 30
SOLID_AVERAGE_MIN_PERCENT = 60


def pillar_percentages(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> Dict[Pillar, int]:
    """
    Scores each pillar as round(mean / 7 * 100).

    Only pillars that have questions in the catalog appear. A pillar whose
    questions were all left unanswered, or whose answers overflow the float
    range, scores 0.
    """
    pillar_answers: Dict[Pillar, List[float]] = {}
    for question in questions:
        if question.section != Section.PILLAR or question.pillar is None:
            continue
        values = pillar_answers.setdefault(question.pillar, [])
        value = answer_as_number(answers.get(question.id))
        if value is not None:
            values.append(value)

    percentages: Dict[Pillar, int] = {}
    for pillar, values in pillar_answers.items():
        if not values:
            percentages[pillar] = 0
            continue
        percentage = round_half_up(sum(values) / len(values) / LIKERT_MAX * 100)
        percentages[pillar] = int(percentage) if math.isfinite(percentage) else 0

    logged = {pillar.value: score for pillar, score in percentages.items()}
    logger.debug(f"Calculated pillar percentages: {logged}")
    return percentages


def rank_archetypes(
    answers: Mapping[str, AnswerValue],
    questions: Iterable[Question],
) -> List[str]:
    """Archetype names with at least one vote, most votes first. Defaults to the Achiever."""
    scores = calculate_archetype_scores(answers, questions)
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    names = [name for name, score in ranked if score > 0]
    return names or [DEFAULT_ARCHETYPE.value]


def generate_simple_micro_insights(percentages: Mapping[str, int]) -> Dict[str, str]:
    """One sentence per pillar, banded at 75% and 42%."""
    insights: Dict[str, str] = {}
    for pillar, score in percentages.items():
        name = pillar_name(pillar)
        if score >= STRENGTH_MIN_PERCENT:
            insights[pillar] = f"Strong foundation in {name}. Continue leveraging this strength to support other areas."
        elif score >= GROWTH_MIN_PERCENT:
            insights[pillar] = f"{name} shows room for growth. Consider focused protocols to strengthen this area."
        else:
            insights[pillar] = f"{name} is a key growth opportunity. Prioritize development here for maximum impact."
    return insights


def generate_simple_integration_insights(
    percentages: Mapping[str, int],
    archetypes: Sequence[str],
) -> List[str]:
    insights: List[str] = []

    if percentages:
        ranked = sorted(percentages.items(), key=lambda item: item[1], reverse=True)
        strongest_pillar, strongest = ranked[0]
        weakest_pillar, weakest = ranked[-1]
        if strongest - weakest >= GAP_MIN_PERCENT:
            insights.append(
                f"Your strength in {pillar_name(strongest_pillar)} ({strongest}%) can be leveraged "
                f"to develop {pillar_name(weakest_pillar)} ({weakest}%)."
            )

    if archetypes:
        insights.append(
            f"As {archetypes[0]}, focus on approaches that align with your natural tendencies for sustainable growth."
        )

    values = list(percentages.values())
    average = sum(values) / len(values) if values else 0
    if average >= SOLID_AVERAGE_MIN_PERCENT:
        insights.append(
            "Your overall scores indicate a solid foundation. Focus on integration and synergy between pillars."
        )
    else:
        insights.append(
            "Building foundational habits in your growth areas will create momentum across all pillars."
        )

    return insights
