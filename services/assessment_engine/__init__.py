from .engine import AssessmentEngine
from .loader import CatalogValidationError, load_catalog_data, load_catalog_from_file
from .models import (
    Archetype,
    ArchetypeDetermination,
    ArchetypeMode,
    AssessmentResult,
    Insight,
    Level,
    Pillar,
    PillarScore,
    Priority,
)
from .percentage_scorer import (
    generate_simple_integration_insights,
    generate_simple_micro_insights,
    pillar_percentages,
    rank_archetypes,
)
from .results_generator import generate_integration_insights, generate_micro_insights
from .scorer import calculate_consistency_score, determine_archetypes, score_pillar
