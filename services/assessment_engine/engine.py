import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .config import EngineSettings
from .loader import DEFAULT_CATALOG_PATH, load_catalog_from_file
from .models import (
    AnswerValue,
    ArchetypeMode,
    ArchetypeScores,
    AssessmentResult,
    Question,
    QuestionCatalog,
    Section,
)
from .results_generator import generate_integration_insights, generate_micro_insights
from .scorer import (
    aggregate_trait_scores,
    calculate_archetype_scores,
    calculate_consistency_score,
    calculate_pillar_scores,
    determine_archetypes,
    score_trait_archetypes,
)

logger = logging.getLogger(__name__)


class AssessmentEngine:
    """
    Scores completed assessments against a question catalog.

    The engine holds no per-member state; one instance can score any number
    of response sets.
    """
    def __init__(self, catalog: QuestionCatalog, default_mode: ArchetypeMode = ArchetypeMode.FORCED_CHOICE):
        self.catalog = catalog
        self.default_mode = ArchetypeMode(default_mode)
        self._questions: Dict[str, Question] = {q.id: q for q in catalog.questions}

    @classmethod
    def from_file(cls, catalog_path: Union[str, Path] = DEFAULT_CATALOG_PATH,
                  default_mode: ArchetypeMode = ArchetypeMode.FORCED_CHOICE) -> "AssessmentEngine":
        return cls(load_catalog_from_file(catalog_path), default_mode=default_mode)

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> "AssessmentEngine":
        return cls.from_file(settings.catalog_path, default_mode=settings.archetype_mode)

    @property
    def questions(self) -> List[Question]:
        return self.catalog.questions

    def get_question(self, question_id: str) -> Optional[Question]:
        return self._questions.get(question_id)

    def archetype_scores(self, answers: Mapping[str, AnswerValue],
                         mode: Union[ArchetypeMode, str, None] = None) -> ArchetypeScores:
        """
        Scores archetypes in the requested mode.

        Raises:
            ValueError: if `mode` is not a known archetype mode.
        """
        mode = ArchetypeMode(mode) if mode is not None else self.default_mode
        if mode == ArchetypeMode.TRAIT_AGGREGATE:
            trait_means = aggregate_trait_scores(answers, self.catalog.questions)
            return score_trait_archetypes(trait_means)
        return calculate_archetype_scores(answers, self.catalog.questions)

    def score(
        self,
        answers: Mapping[str, AnswerValue],
        mode: Union[ArchetypeMode, str, None] = None,
        result_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> AssessmentResult:
        """
        Runs the full scoring pipeline for one response set.

        Args:
            answers: Question ID to answer value. Unknown IDs and background
                     answers are ignored.
            mode: Archetype scoring mode; defaults to the engine's mode.
            result_id: Identifier for the result; generated when omitted.
            created_at: Timestamp for the result; the current UTC time when omitted.

        Returns:
            The scored AssessmentResult.
        """
        unknown = [qid for qid in answers if qid not in self._questions]
        if unknown:
            logger.debug(f"Ignoring answers to unknown questions: {unknown}")

        archetype_scores = self.archetype_scores(answers, mode)
        determination = determine_archetypes(archetype_scores)
        pillar_scores = calculate_pillar_scores(answers, self.catalog.questions)
        consistency = calculate_consistency_score(archetype_scores)

        micro_insights = generate_micro_insights(determination.primary, pillar_scores)
        integration_insights = generate_integration_insights(
            determination.primary,
            determination.secondary,
            archetype_scores,
            pillar_scores,
        )

        provenance = {}
        if result_id is not None:
            provenance["id"] = result_id
        if created_at is not None:
            provenance["created_at"] = created_at

        result = AssessmentResult(
            **provenance,
            primary_archetype=determination.primary,
            secondary_archetype=determination.secondary,
            archetype_scores=archetype_scores,
            pillar_scores=pillar_scores,
            consistency_score=consistency,
            micro_insights=micro_insights,
            integration_insights=integration_insights,
        )
        answered = sum(1 for q in self.catalog.by_section(Section.PILLAR) if q.id in answers)
        logger.info(
            f"Scored assessment {result.id}: primary={result.primary_archetype}, "
            f"secondary={result.secondary_archetype}, pillar answers={answered}"
        )
        return result
