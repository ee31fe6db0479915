"""Scoring components, evidence references and evaluator personas."""

from pydantic import Field, model_validator

from roster_consensus.models.base import BaseSchema, FrozenSchema
from roster_consensus.models.enums import AgentRole, EvidenceImpact, EvidenceType

__all__ = [
    "AgentPersona",
    "EvidenceReference",
    "ScoringComponent",
]


class EvidenceReference(FrozenSchema):
    """A piece of evidence that moved a component score.

    Attributes:
        type: Source category of the evidence.
        source: Short label naming where the evidence comes from.
        description: Human-readable explanation.
        value: Optional figure or label backing the description.
        impact: Direction in which the evidence moved the score.
        weight: Relative strength of the evidence, 0-1.

    """

    type: EvidenceType
    source: str
    description: str
    value: str | float | int | None = None
    impact: EvidenceImpact
    weight: float = Field(default=1.0, ge=0.0, le=1.0)

    def as_reference(self) -> str:
        """Render the evidence as a one-line "source: description" string."""
        return f"{self.source}: {self.description}"


class ScoringComponent(FrozenSchema):
    """One named, weighted sub-score produced by an evaluator.

    Attributes:
        name: Display name; also used to flag critical components.
        score: Score in [0, max_score].
        max_score: Upper bound of the score.
        weight: Relative weight within the evaluator.
        reasoning: Explanation of the score.
        evidence: Evidence supporting the score.
        is_editable: Whether a human reviewer may override the score.

    """

    name: str
    score: float = Field(..., ge=0.0)
    max_score: float = Field(default=100.0, gt=0.0)
    weight: float = Field(..., ge=0.0)
    reasoning: str
    evidence: list[EvidenceReference] = Field(default_factory=list)
    is_editable: bool = True

    @model_validator(mode="after")
    def validate_score_range(self) -> "ScoringComponent":
        """Ensure the score does not exceed max_score."""
        if self.score > self.max_score:
            raise ValueError("ScoringComponent.score must not exceed max_score")
        return self

    @property
    def ratio(self) -> float:
        """Score as a fraction of max_score."""
        return self.score / self.max_score


class AgentPersona(BaseSchema):
    """Display metadata of an evaluator.

    Attributes:
        role: Evaluator role.
        name: Display name.
        description: One-line description of the evaluator's mandate.
        expertise: Areas of expertise.
        priorities: What the evaluator optimizes for.
        component_weights: Weight of each scoring dimension.
        vote_weight: Weight of the evaluator's vote, when known.

    """

    role: AgentRole
    name: str
    description: str
    expertise: list[str] = Field(default_factory=list)
    priorities: list[str] = Field(default_factory=list)
    component_weights: dict[str, float] = Field(default_factory=dict)
    vote_weight: float | None = None
