"""
Stage gating: decide which validator stages run for a request.

Rules:
- Schema runs whenever it is requested.
- Vocabulary runs unless the objective is the IG-only (structure-only)
  objective, an MU2 objective, or the non-specific C-CDA objective.
  Schema-structural findings do not suppress it.
- Content runs only for unique-content objectives. In the selective shape
  it is nested under Vocabulary: it never runs unless Vocabulary was both
  requested and eligible.

Objectives are compared case-insensitively; unknown objectives are generic.
"""

from dataclasses import dataclass, field
from typing import Iterable

from ccda_validation.config import Settings
from ccda_validation.models.enums import RequestShape, StageName
from ccda_validation.models.request import ValidationRequest


@dataclass(frozen=True)
class StagePlan:
    """Which stages will run, and why the others will not."""

    run: dict[StageName, bool]
    skip_reasons: dict[StageName, str] = field(default_factory=dict)

    def should_run(self, stage: StageName) -> bool:
        return self.run.get(stage, False)


def _normalize(objectives: Iterable[str]) -> frozenset[str]:
    return frozenset(objective.casefold() for objective in objectives)


class StageGate:
    """Pure eligibility decisions over the configured objective vocabularies."""

    def __init__(
        self,
        ig_only_objectives: Iterable[str],
        non_specific_objectives: Iterable[str],
        mu2_objectives: Iterable[str],
        unique_content_objectives: Iterable[str],
    ):
        self.ig_only_objectives = _normalize(ig_only_objectives)
        self.non_specific_objectives = _normalize(non_specific_objectives)
        self.mu2_objectives = _normalize(mu2_objectives)
        self.unique_content_objectives = _normalize(unique_content_objectives)

    @classmethod
    def from_settings(cls, settings: Settings) -> "StageGate":
        return cls(
            ig_only_objectives=settings.IG_ONLY_OBJECTIVES,
            non_specific_objectives=settings.NON_SPECIFIC_OBJECTIVES,
            mu2_objectives=settings.MU2_OBJECTIVES,
            unique_content_objectives=settings.UNIQUE_CONTENT_OBJECTIVES,
        )

    def is_mu2_objective(self, validation_objective: str) -> bool:
        return validation_objective.casefold() in self.mu2_objectives

    def allows_vocabulary(self, validation_objective: str) -> bool:
        objective = validation_objective.casefold()
        return (
            objective not in self.ig_only_objectives
            and not self.is_mu2_objective(validation_objective)
            and objective not in self.non_specific_objectives
        )

    def allows_content(self, validation_objective: str) -> bool:
        return validation_objective.casefold() in self.unique_content_objectives

    def plan(self, request: ValidationRequest) -> StagePlan:
        """
        Decide stage execution for a request.

        Args:
            request: Validation request (objective, shape, per-stage flags)

        Returns:
            StagePlan with a run decision per stage and skip reasons
        """
        objective = request.validation_objective
        skip_reasons: dict[StageName, str] = {}

        run_schema = request.requests_stage(StageName.SCHEMA)
        if not run_schema:
            skip_reasons[StageName.SCHEMA] = "not requested"

        vocabulary_requested = request.requests_stage(StageName.VOCABULARY)
        vocabulary_allowed = self.allows_vocabulary(objective)
        run_vocabulary = vocabulary_requested and vocabulary_allowed
        if not vocabulary_requested:
            skip_reasons[StageName.VOCABULARY] = "not requested"
        elif not vocabulary_allowed:
            skip_reasons[StageName.VOCABULARY] = (
                f"validation objective {objective!r} is not relevant or valid for vocabulary validation"
            )

        content_requested = request.requests_stage(StageName.CONTENT)
        content_allowed = self.allows_content(objective)
        if request.shape is RequestShape.SELECTIVE:
            run_content = run_vocabulary and content_requested and content_allowed
        else:
            run_content = content_allowed

        if not run_content:
            if request.shape is RequestShape.SELECTIVE and not run_vocabulary:
                skip_reasons[StageName.CONTENT] = "vocabulary validation is not running"
            elif not content_requested:
                skip_reasons[StageName.CONTENT] = "not requested"
            else:
                skip_reasons[StageName.CONTENT] = (
                    f"validation objective {objective!r} is not relevant or valid for content validation"
                )

        return StagePlan(
            run={
                StageName.SCHEMA: run_schema,
                StageName.VOCABULARY: run_vocabulary,
                StageName.CONTENT: run_content,
            },
            skip_reasons=skip_reasons,
        )
