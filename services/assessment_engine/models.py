from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Pillar(str, Enum):
    IDENTITY = "identity"
    EMOTIONAL = "emotional"
    PHYSICAL = "physical"
    CONNECTION = "connection"
    MISSION = "mission"


class Level(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Section(str, Enum):
    BACKGROUND = "background"
    ARCHETYPE = "archetype"
    PILLAR = "pillar"


class Archetype(str, Enum):
    ACHIEVER = "The Achiever"
    OPTIMIZER = "The Optimizer"
    NETWORKER = "The Networker"
    GRINDER = "The Grinder"
    PHILOSOPHER = "The Philosopher"
    INTEGRATOR = "The Integrator"


class TraitDimension(str, Enum):
    CONSCIENTIOUSNESS = "conscientiousness"
    EXTRAVERSION = "extraversion"
    OPENNESS = "openness"
    AGREEABLENESS = "agreeableness"
    NEUROTICISM = "neuroticism"


class ArchetypeMode(str, Enum):
    FORCED_CHOICE = "forced_choice"
    TRAIT_AGGREGATE = "trait_aggregate"


# Raw answer values as they arrive from the client: Likert/option integers,
# archetype keys or free text for background questions.
AnswerValue = Union[int, str]
ArchetypeScores = Dict[str, float]


# --- Question catalog ---

class QuestionOption(BaseModel):
    value: int
    label: str


class Question(BaseModel):
    id: str
    section: Section
    text: str = ""
    pillar: Optional[Pillar] = None
    trait: Optional[TraitDimension] = None  # trait-aggregate mode only
    options: List[QuestionOption] = Field(default_factory=list)


class QuestionCatalog(BaseModel):
    version: str
    questions: List[Question]

    def by_section(self, section: Section) -> List[Question]:
        return [q for q in self.questions if q.section == section]


# --- Scoring output ---

class PillarScore(BaseModel):
    """Mean Likert score for one pillar, with its band and 0-100 position."""
    model_config = ConfigDict(frozen=True)

    raw: float
    level: Level
    percentage: int


class ArchetypeDetermination(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: Optional[str] = None
    secondary: Optional[str] = None


class Insight(BaseModel):
    type: str
    title: str
    insight: str
    priority: Optional[Priority] = None
    pillar: Optional[str] = None  # unvalidated: callers may score unknown pillar ids
    archetype: Optional[str] = None
    score: Optional[float] = None
    level: Optional[Level] = None

    def to_dict(self) -> Dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)


class AssessmentResult(BaseModel):
    """
    Scored assessment. `id` and `created_at` are provenance owned by the caller;
    every other field is derived from the answers alone.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    primary_archetype: Optional[str] = None
    secondary_archetype: Optional[str] = None
    archetype_scores: ArchetypeScores = Field(default_factory=dict)
    pillar_scores: Dict[Pillar, PillarScore]
    consistency_score: float
    micro_insights: List[Insight] = Field(default_factory=list)
    integration_insights: List[Insight] = Field(default_factory=list)
