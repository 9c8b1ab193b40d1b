# services/assessment_engine/results_generator.py
# Generates coaching insights from scored assessment results.

import logging
import math
from typing import Dict, List, Mapping, Optional

from .definitions import ARCHETYPE_QUESTION_COUNT, pillar_name
from .models import Archetype, Insight, Level, Pillar, PillarScore, Priority
from .scorer import round_half_up

logger = logging.getLogger(__name__)

MAX_MICRO_INSIGHTS = 3
MAX_INTEGRATION_INSIGHTS = 5

# Pillar gap analysis (1-7 scale)
GAP_MIN_SPREAD = 2.5
GAP_STRONG_PILLAR_MIN = 5.0
GAP_WEAK_PILLAR_MAX = 4.0

DOMINANCE_MIN_PERCENT = 70

PRIORITY_BY_LEVEL: Dict[Level, Priority] = {
    Level.LOW: Priority.HIGH,
    Level.MODERATE: Priority.MEDIUM,
    Level.HIGH: Priority.LOW,
}

# --- Insight text ---

ARCHETYPE_PILLAR_INSIGHTS: Dict[Archetype, Dict[Pillar, Dict[Level, str]]] = {
    Archetype.ACHIEVER: {
        Pillar.IDENTITY: {
            Level.LOW: "As an Achiever, your drive for results is strong, but clarity on your core values will help direct that energy more purposefully.",
            Level.MODERATE: "Your achievement orientation is well-established. Deepening your purpose clarity will amplify your impact.",
            Level.HIGH: "Your clear sense of purpose fuels your achievements effectively.",
        },
        Pillar.EMOTIONAL: {
            Level.LOW: "High achievers often neglect emotional processing. Building stress resilience will prevent burnout.",
            Level.MODERATE: "Your emotional awareness is developing. Continue building resilience practices.",
            Level.HIGH: "Strong emotional regulation supports your ambitious goals.",
        },
        Pillar.PHYSICAL: {
            Level.LOW: "Your achievement drive may be outpacing your physical foundation. Optimize sleep and recovery.",
            Level.MODERATE: "Good physical awareness. Fine-tune your energy management for peak performance.",
            Level.HIGH: "Your physical optimization supports sustained high performance.",
        },
        Pillar.CONNECTION: {
            Level.LOW: "Achievers can become isolated. Intentional relationship building will expand your impact.",
            Level.MODERATE: "Your connections are growing. Deepen key relationships strategically.",
            Level.HIGH: "Strong relationships amplify your ability to achieve meaningful goals.",
        },
        Pillar.MISSION: {
            Level.LOW: "Channel your achievement energy into deliberate skill development.",
            Level.MODERATE: "Your mastery path is progressing. Focus on flow state cultivation.",
            Level.HIGH: "Your pursuit of mastery aligns well with your achievement orientation.",
        },
    },
}

# {pillar_name} is filled in at lookup time.
DEFAULT_PILLAR_INSIGHTS: Dict[Pillar, Dict[Level, str]] = {
    Pillar.IDENTITY: {
        Level.LOW: "Your {pillar_name} foundation needs attention. Start with values clarification exercises.",
        Level.MODERATE: "Your {pillar_name} is developing well. Continue deepening your understanding.",
        Level.HIGH: "Strong {pillar_name} foundation. Leverage this strength in other areas.",
    },
    Pillar.EMOTIONAL: {
        Level.LOW: "Building emotional resilience will support all other areas of development.",
        Level.MODERATE: "Continue developing your emotional regulation practices.",
        Level.HIGH: "Your emotional intelligence is a significant asset.",
    },
    Pillar.PHYSICAL: {
        Level.LOW: "Physical optimization is foundational. Prioritize sleep and nutrition protocols.",
        Level.MODERATE: "Good physical awareness. Fine-tune for optimal performance.",
        Level.HIGH: "Your physical foundation supports sustained excellence.",
    },
    Pillar.CONNECTION: {
        Level.LOW: "Intentional relationship development will multiply your effectiveness.",
        Level.MODERATE: "Your relationship skills are growing. Deepen key connections.",
        Level.HIGH: "Strong connections provide support and opportunities.",
    },
    Pillar.MISSION: {
        Level.LOW: "Focus on skill development and deliberate practice foundations.",
        Level.MODERATE: "Continue building mastery through structured practice.",
        Level.HIGH: "Your mastery orientation drives continuous improvement.",
    },
}

STRONG_FOUNDATION_TEXT = (
    "Your assessment shows solid development across all key areas. "
    "Focus on integration and leveraging your strengths for maximum impact."
)


def get_pillar_insight(archetype: Optional[str], pillar: str, level: str) -> str:
    """
    Looks up insight text for an archetype/pillar/level.

    Tries the archetype-specific table, then the default pillar table, and
    returns an empty string when neither has an entry.
    """
    text = ARCHETYPE_PILLAR_INSIGHTS.get(archetype, {}).get(pillar, {}).get(level)
    if not text:
        text = DEFAULT_PILLAR_INSIGHTS.get(pillar, {}).get(level)
    if not text:
        logger.debug(f"No insight text for archetype={archetype!r} pillar={pillar!r} level={level!r}")
        return ""
    return text.format(pillar_name=pillar_name(pillar))


# --- Micro Insights ---

def generate_micro_insights(
    primary: Optional[str],
    pillar_scores: Mapping[str, PillarScore],
) -> List[Insight]:
    """
    Generates up to three pillar insights, weakest pillars first.

    A high-scoring pillar is never the first insight when other pillars exist.
    When nothing qualifies a single "Strong Foundation" insight is returned.
    """
    ranked = sorted(pillar_scores.items(), key=lambda item: item[1].raw)
    insights: List[Insight] = []

    for pillar, score in ranked:
        if len(insights) >= MAX_MICRO_INSIGHTS:
            break
        if score.level == Level.HIGH and not insights and len(ranked) > 1:
            continue

        insights.append(Insight(
            type="pillar_analysis",
            title=f"{pillar_name(pillar)} Development Focus",
            insight=get_pillar_insight(primary, pillar, score.level),
            priority=PRIORITY_BY_LEVEL[score.level],
            pillar=pillar,
            archetype=primary,
            score=score.raw,
            level=score.level,
        ))

    if not insights:
        insights.append(Insight(
            type="general",
            title="Strong Foundation",
            insight=STRONG_FOUNDATION_TEXT,
            priority=Priority.MEDIUM,
        ))

    return insights


# --- Integration Insights ---

def _format_raw(raw: float) -> str:
    return f"{raw:g}"


def _pillar_gap_insight(pillar_scores: Mapping[str, PillarScore]) -> Optional[Insight]:
    if not pillar_scores:
        return None

    ranked = sorted(pillar_scores.items(), key=lambda item: item[1].raw, reverse=True)
    highest_pillar, highest = ranked[0]
    lowest_pillar, lowest = ranked[-1]
    gap = highest.raw - lowest.raw

    if gap >= GAP_MIN_SPREAD and highest.raw >= GAP_STRONG_PILLAR_MIN and lowest.raw <= GAP_WEAK_PILLAR_MAX:
        return Insight(
            type="pillar_synergy",
            title="Pillar Gap Analysis",
            insight=(
                f"Your strength in {pillar_name(highest_pillar)} ({_format_raw(highest.raw)}/7) can be "
                f"leveraged to develop {pillar_name(lowest_pillar)} ({_format_raw(lowest.raw)}/7). "
                "Apply the same systematic approach that created your strength."
            ),
            priority=Priority.HIGH,
        )
    return None


def generate_integration_insights(
    primary: Optional[str],
    secondary: Optional[str],
    archetype_scores: Mapping[str, float],
    pillar_scores: Mapping[str, PillarScore],
) -> List[Insight]:
    """
    Generates cross-cutting insights in a fixed order: pillar gap, dual
    archetype synergy, archetype dominance. Checks are independent and the
    output is truncated to the first five in generation order.
    """
    insights: List[Insight] = []

    gap_insight = _pillar_gap_insight(pillar_scores)
    if gap_insight is not None:
        insights.append(gap_insight)

    if secondary:
        insights.append(Insight(
            type="dual_integration",
            title=f"{primary} + {secondary} Synergy",
            insight=(
                f"Your combination of {primary} and {secondary} traits creates unique strengths. "
                "Learn to integrate both approaches situationally for maximum effectiveness."
            ),
        ))

    primary_score = archetype_scores.get(primary, 0) if primary is not None else 0
    if not math.isfinite(primary_score):
        primary_score = 0
    primary_percent = int(round_half_up(primary_score / ARCHETYPE_QUESTION_COUNT * 100))
    if primary_percent >= DOMINANCE_MIN_PERCENT:
        insights.append(Insight(
            type="archetype_dominance",
            title="Strong Archetype Focus",
            insight=(
                f"Your {primary} dominance ({primary_percent}%) creates clear directional focus. "
                "This concentrated identity allows for deep mastery but consider developing "
                "complementary traits to avoid rigidity."
            ),
        ))

    return insights[:MAX_INTEGRATION_INSIGHTS]
