from datetime import datetime, timezone

import pytest

from services.assessment_engine.config import EngineSettings
from services.assessment_engine.engine import AssessmentEngine
from services.assessment_engine.loader import load_catalog_data
from services.assessment_engine.models import ArchetypeMode, Level, Pillar, Priority

FIXED_TIME = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)

SAMPLE_ANSWERS = {
    "bg-1": 2, "bg-2": 3, "bg-3": 1, "bg-4": 4,
    "arch-1": "achiever", "arch-2": 1, "arch-3": "achiever", "arch-4": 1,
    "arch-5": "optimizer", "arch-6": 2,
    "id-1": 7, "id-2": 7, "id-3": 6,
    "em-1": 3, "em-2": 3, "em-3": 4,
    "ph-1": 5, "ph-2": 5, "ph-3": 5,
    "cn-1": 4, "cn-2": 5, "cn-3": 6,
    "ms-1": 6, "ms-2": 6, "ms-3": 6,
}

TRAIT_CATALOG = {
    "version": "traits-1",
    "questions": [
        {"id": "t-c", "section": "archetype", "trait": "conscientiousness"},
        {"id": "t-e", "section": "archetype", "trait": "extraversion"},
        {"id": "t-o", "section": "archetype", "trait": "openness"},
        {"id": "t-a", "section": "archetype", "trait": "agreeableness"},
        {"id": "t-n", "section": "archetype", "trait": "neuroticism"},
        {"id": "id-1", "section": "pillar", "pillar": "identity"},
    ],
}


@pytest.fixture(scope="module")
def engine():
    """Provides an AssessmentEngine loaded with the packaged catalog."""
    return AssessmentEngine.from_file()


def test_engine_loads_packaged_catalog(engine):
    assert len(engine.questions) == 25
    assert engine.default_mode == ArchetypeMode.FORCED_CHOICE
    assert engine.get_question("ms-2").pillar == Pillar.MISSION
    assert engine.get_question("nope") is None


def test_score_full_assessment(engine):
    result = engine.score(SAMPLE_ANSWERS, result_id="assessment-1", created_at=FIXED_TIME)

    assert result.id == "assessment-1"
    assert result.created_at == FIXED_TIME
    assert result.primary_archetype == "The Achiever"
    assert result.secondary_archetype == "The Optimizer"
    assert result.archetype_scores == {
        "The Achiever": 4,
        "The Optimizer": 2,
        "The Networker": 0,
        "The Grinder": 0,
        "The Philosopher": 0,
    }
    assert result.consistency_score == pytest.approx(0.33)

    assert set(result.pillar_scores) == set(Pillar)
    assert result.pillar_scores[Pillar.IDENTITY].raw == pytest.approx(6.7)
    assert result.pillar_scores[Pillar.IDENTITY].level == Level.HIGH
    assert result.pillar_scores[Pillar.EMOTIONAL].raw == pytest.approx(3.3)
    assert result.pillar_scores[Pillar.EMOTIONAL].level == Level.LOW
    assert result.pillar_scores[Pillar.PHYSICAL].percentage == 67


def test_score_insights(engine):
    result = engine.score(SAMPLE_ANSWERS)

    micro = result.micro_insights
    assert [i.pillar for i in micro] == [Pillar.EMOTIONAL, Pillar.PHYSICAL, Pillar.CONNECTION]
    assert micro[0].priority == Priority.HIGH
    assert micro[0].insight.startswith("High achievers often neglect emotional processing.")

    integration = result.integration_insights
    assert [i.type for i in integration] == ["pillar_synergy", "dual_integration"]
    assert "Identity & Purpose (6.7/7)" in integration[0].insight
    assert "Emotional & Mental (3.3/7)" in integration[0].insight


def test_score_generates_provenance(engine):
    first = engine.score(SAMPLE_ANSWERS)
    second = engine.score(SAMPLE_ANSWERS)
    assert first.id != second.id
    assert first.created_at.tzinfo is not None


def test_score_is_deterministic(engine):
    first = engine.score(SAMPLE_ANSWERS, result_id="r", created_at=FIXED_TIME)
    second = engine.score(dict(SAMPLE_ANSWERS), result_id="r", created_at=FIXED_TIME)
    assert first.model_dump() == second.model_dump()


def test_score_empty_answers(engine):
    result = engine.score({})

    assert result.primary_archetype == "The Achiever"
    assert result.secondary_archetype is None
    assert result.consistency_score == 1.0
    assert all(score.raw == 0 for score in result.pillar_scores.values())
    # five empty (low) pillars: the weakest three get insights
    assert len(result.micro_insights) == 3
    assert result.integration_insights == []


def test_score_ignores_unknown_question_ids(engine):
    with_extra = dict(SAMPLE_ANSWERS, **{"xx-1": 7})
    assert (
        engine.score(with_extra, result_id="r", created_at=FIXED_TIME).model_dump()
        == engine.score(SAMPLE_ANSWERS, result_id="r", created_at=FIXED_TIME).model_dump()
    )


def test_score_unknown_mode_raises(engine):
    with pytest.raises(ValueError):
        engine.score(SAMPLE_ANSWERS, mode="astrology")


def test_trait_aggregate_mode():
    engine = AssessmentEngine(load_catalog_data(TRAIT_CATALOG))
    answers = {"t-c": 2, "t-e": 2, "t-o": 6, "t-a": 6, "t-n": 2}

    result = engine.score(answers, mode=ArchetypeMode.TRAIT_AGGREGATE)

    assert result.primary_archetype == "The Philosopher"
    assert result.secondary_archetype == "The Integrator"
    assert result.archetype_scores["The Philosopher"] == 6.0
    assert [i.type for i in result.integration_insights] == ["dual_integration", "archetype_dominance"]
    assert "The Philosopher dominance (100%)" in result.integration_insights[1].insight


def test_trait_aggregate_mode_by_string():
    engine = AssessmentEngine(load_catalog_data(TRAIT_CATALOG), default_mode="trait_aggregate")
    result = engine.score({"t-c": 6, "t-e": 6, "t-o": 2, "t-a": 2, "t-n": 2})
    assert result.primary_archetype == "The Achiever"
    assert "The Integrator" in result.archetype_scores


def test_engine_from_settings(monkeypatch):
    monkeypatch.setenv("ASSESSMENT_ARCHETYPE_MODE", "trait_aggregate")
    engine = AssessmentEngine.from_settings(EngineSettings())
    assert engine.default_mode == ArchetypeMode.TRAIT_AGGREGATE
    assert len(engine.questions) == 25


@pytest.mark.parametrize("question_id, value", [
    ("id-1", "nan"),
    ("id-1", "inf"),
    ("id-1", float("nan")),
    ("arch-1", "inf"),
    ("arch-1", "nan"),
])
def test_score_non_finite_answer_is_treated_as_unanswered(engine, question_id, value):
    result = engine.score({question_id: value}, result_id="r", created_at=FIXED_TIME)
    assert result.model_dump() == engine.score({}, result_id="r", created_at=FIXED_TIME).model_dump()
