# services/assessment_engine/definitions.py
# Static definitions for the pillar assessment: pillars, archetypes and trait templates.

from typing import Dict, List

from .models import Archetype, Pillar, TraitDimension

# --- Pillars ---
PILLAR_INFO: Dict[Pillar, Dict[str, str]] = {
    Pillar.IDENTITY: {
        "name": "Identity & Purpose",
        "description": "Clarify your values, purpose, and strategic life direction",
    },
    Pillar.EMOTIONAL: {
        "name": "Emotional & Mental",
        "description": "Build stress resilience, emotional regulation, and mental clarity",
    },
    Pillar.PHYSICAL: {
        "name": "Physical & Vital",
        "description": "Optimize sleep, nutrition, and physical performance",
    },
    Pillar.CONNECTION: {
        "name": "Connection & Leadership",
        "description": "Develop meaningful relationships and leadership presence",
    },
    Pillar.MISSION: {
        "name": "Mission & Mastery",
        "description": "Achieve flow states, deliberate practice, and mastery tracking",
    },
}


def pillar_name(pillar: Pillar) -> str:
    """Display name for a pillar, falling back to the capitalised id."""
    info = PILLAR_INFO.get(pillar)
    if info:
        return info["name"]
    value = getattr(pillar, "value", str(pillar))
    return value[:1].upper() + value[1:]


# --- Archetypes ---
ARCHETYPE_KEYS: Dict[str, Archetype] = {
    "achiever": Archetype.ACHIEVER,
    "optimizer": Archetype.OPTIMIZER,
    "networker": Archetype.NETWORKER,
    "grinder": Archetype.GRINDER,
    "philosopher": Archetype.PHILOSOPHER,
    "integrator": Archetype.INTEGRATOR,
}

# Option value N on a forced-choice question selects FORCED_CHOICE_ARCHETYPES[N - 1].
FORCED_CHOICE_ARCHETYPES: List[Archetype] = [
    Archetype.ACHIEVER,
    Archetype.OPTIMIZER,
    Archetype.NETWORKER,
    Archetype.GRINDER,
    Archetype.PHILOSOPHER,
]

DEFAULT_ARCHETYPE = Archetype.ACHIEVER

# Maximum spread of the forced-choice scale: all six archetype questions answered alike.
ARCHETYPE_QUESTION_COUNT = 6

# --- Trait-aggregate mode ---
# Target Big Five profile per archetype on the 1-7 Likert scale.
ARCHETYPE_TRAIT_TEMPLATES: Dict[Archetype, Dict[TraitDimension, float]] = {
    Archetype.ACHIEVER: {
        TraitDimension.CONSCIENTIOUSNESS: 6.0, TraitDimension.EXTRAVERSION: 6.0,
        TraitDimension.OPENNESS: 2.0, TraitDimension.AGREEABLENESS: 2.0, TraitDimension.NEUROTICISM: 2.0,
    },
    Archetype.OPTIMIZER: {
        TraitDimension.CONSCIENTIOUSNESS: 6.0, TraitDimension.EXTRAVERSION: 2.0,
        TraitDimension.OPENNESS: 2.0, TraitDimension.AGREEABLENESS: 4.0, TraitDimension.NEUROTICISM: 2.0,
    },
    Archetype.NETWORKER: {
        TraitDimension.CONSCIENTIOUSNESS: 4.0, TraitDimension.EXTRAVERSION: 6.0,
        TraitDimension.OPENNESS: 2.0, TraitDimension.AGREEABLENESS: 6.0, TraitDimension.NEUROTICISM: 6.0,
    },
    Archetype.GRINDER: {
        TraitDimension.CONSCIENTIOUSNESS: 2.0, TraitDimension.EXTRAVERSION: 6.0,
        TraitDimension.OPENNESS: 6.0, TraitDimension.AGREEABLENESS: 2.0, TraitDimension.NEUROTICISM: 4.0,
    },
    Archetype.PHILOSOPHER: {
        TraitDimension.CONSCIENTIOUSNESS: 2.0, TraitDimension.EXTRAVERSION: 2.0,
        TraitDimension.OPENNESS: 6.0, TraitDimension.AGREEABLENESS: 6.0, TraitDimension.NEUROTICISM: 2.0,
    },
    Archetype.INTEGRATOR: {
        TraitDimension.CONSCIENTIOUSNESS: 5.0, TraitDimension.EXTRAVERSION: 5.0,
        TraitDimension.OPENNESS: 5.0, TraitDimension.AGREEABLENESS: 5.0, TraitDimension.NEUROTICISM: 2.0,
    },
}

# Largest possible distance between two points on the 1-7 scale.
TRAIT_SCALE_SPAN = 6.0
