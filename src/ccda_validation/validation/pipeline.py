"""
Validation Pipeline: multi-stage validation orchestrator.

Coordinates document acquisition and the 3 validator stages:
- Schema: structural / conformance validation (always eligible)
- Vocabulary: value-set validation (gated by objective)
- Content: reference content matching (gated by objective family)

Stages run strictly in order, one request at a time per call. Each step
yields a StageOutcome; the first failed step ends the run and is
translated into the response instead of being raised.
"""

import time
from typing import Optional

import structlog

from ccda_validation.config import Settings
from ccda_validation.models.enums import FailureKind, StageName
from ccda_validation.models.findings import Finding
from ccda_validation.models.request import ValidationRequest
from ccda_validation.models.results import ResultMetadata, ValidationOutcome
from ccda_validation.monitoring.metrics import (
    stage_duration_seconds,
    stage_executions_total,
    validation_requests_total,
)
from ccda_validation.sources.document_source import DocumentSource
from ccda_validation.validation.aggregator import ResultAggregator
from ccda_validation.sources.exceptions import DocumentAcquisitionError
from ccda_validation.validation.gate import StageGate
from ccda_validation.validation.severity import filter_results_on_severity
from ccda_validation.validation.stages import (
    StageFailed,
    StageOutcome,
    StageSucceeded,
    ValidationStage,
    load_stage,
)
from ccda_validation.validation.translator import ExceptionTranslator, classify_failure
from ccda_validation.validation.validity import set_document_validity

logger = structlog.get_logger(__name__)

STAGE_ORDER = (StageName.SCHEMA, StageName.VOCABULARY, StageName.CONTENT)


class ValidationPipeline:
    """
    Multi-stage validation pipeline orchestrator.

    Holds only the injected validators and pure helpers, so a single
    instance is safe to share across concurrent requests.
    """

    def __init__(
        self,
        schema_validator: ValidationStage,
        vocabulary_validator: ValidationStage,
        content_validator: ValidationStage,
        gate: StageGate,
        aggregator: Optional[ResultAggregator] = None,
        translator: Optional[ExceptionTranslator] = None,
    ):
        """
        Initialize validation pipeline.

        Args:
            schema_validator: Schema / structural validator
            vocabulary_validator: Vocabulary validator
            content_validator: Reference content validator
            gate: Stage eligibility rules
            aggregator: Result aggregator (default instance if omitted)
            translator: Exception translator (default instance if omitted)
        """
        self.stages: dict[StageName, ValidationStage] = {
            StageName.SCHEMA: schema_validator,
            StageName.VOCABULARY: vocabulary_validator,
            StageName.CONTENT: content_validator,
        }
        self.gate = gate
        self.aggregator = aggregator or ResultAggregator()
        self.translator = translator or ExceptionTranslator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationPipeline":
        """Build a pipeline with validators loaded from configured import paths."""
        pipeline = cls(
            schema_validator=load_stage(settings.SCHEMA_VALIDATOR, StageName.SCHEMA),
            vocabulary_validator=load_stage(settings.VOCABULARY_VALIDATOR, StageName.VOCABULARY),
            content_validator=load_stage(settings.CONTENT_VALIDATOR, StageName.CONTENT),
            gate=StageGate.from_settings(settings),
        )
        logger.info("ValidationPipeline initialized")
        return pipeline

    def validate(
        self,
        source: DocumentSource,
        request: ValidationRequest,
    ) -> tuple[ValidationOutcome, dict[str, float]]:
        """
        Run the pipeline for one request.

        Args:
            source: Where to read the document from
            request: Objective, stage selection, severity and failure policy

        Returns:
            Tuple of (ValidationOutcome, step timings in milliseconds)
        """
        timings: dict[str, float] = {}
        objective = request.validation_objective

        logger.info(
            "Starting validation pipeline",
            validation_objective=objective,
            reference_file_name=request.reference_file_name,
            shape=request.shape.value,
            source=source.name,
        )

        text, failure = self._read_document(source, timings)
        outcomes: list[StageSucceeded] = []

        if failure is None:
            plan = self.gate.plan(request)
            for stage_name in STAGE_ORDER:
                if not plan.should_run(stage_name):
                    logger.info(
                        "Skipping stage",
                        stage=stage_name.value,
                        reason=plan.skip_reasons.get(stage_name),
                    )
                    continue

                outcome = self._run_stage(stage_name, request, text, timings)
                if isinstance(outcome, StageFailed):
                    failure = outcome
                    break

                outcomes.append(outcome)
                if outcome.findings:
                    logger.info(f"Adding {stage_name.value} results", count=len(outcome.findings))
                if stage_name is StageName.SCHEMA and outcome.has_schema_error:
                    logger.warning("Document has schema error(s), vocabulary validation still runs")

        if failure is not None:
            validation_outcome = self._failed_outcome(failure, request)
        else:
            validation_outcome = self._completed_outcome(outcomes, request, source.name, text, timings)

        validation_requests_total.labels(
            shape=request.shape.value,
            outcome=self._outcome_label(validation_outcome),
        ).inc()

        logger.info(
            "Validation pipeline finished",
            validation_objective=objective,
            valid=validation_outcome.results_metadata.valid,
            service_error=validation_outcome.results_metadata.service_error,
            findings=len(validation_outcome.ccda_validation_results),
            timings_ms=timings,
        )
        return validation_outcome, timings

    def _read_document(
        self,
        source: DocumentSource,
        timings: dict[str, float],
    ) -> tuple[str, Optional[StageFailed]]:
        start = time.perf_counter()
        try:
            text = source.read_text()
        except DocumentAcquisitionError as e:
            self._record("document", start, timings, FailureKind.IO.value)
            return "", StageFailed(stage=None, kind=FailureKind.IO, error=e)

        self._record("document", start, timings, "ok")
        return text, None

    def _run_stage(
        self,
        stage_name: StageName,
        request: ValidationRequest,
        text: str,
        timings: dict[str, float],
    ) -> StageOutcome:
        logger.info(f"Attempting {stage_name.value} validation...")
        start = time.perf_counter()
        try:
            findings = self.stages[stage_name].validate_file(
                request.validation_objective,
                request.reference_file_name,
                text,
                request.severity_level,
            )
        except Exception as e:
            kind = classify_failure(e)
            self._record(stage_name.value, start, timings, kind.value)
            return StageFailed(stage=stage_name, kind=kind, error=e)

        self._record(stage_name.value, start, timings, "ok")
        return StageSucceeded(stage=stage_name, findings=list(findings or []))

    def _completed_outcome(
        self,
        outcomes: list[StageSucceeded],
        request: ValidationRequest,
        source_name: str,
        text: str,
        timings: dict[str, float],
    ) -> ValidationOutcome:
        start = time.perf_counter()
        results, metadata = self.aggregator.aggregate(outcomes, request.validation_objective)
        metadata.ccda_file_name = source_name
        metadata.ccda_file_contents = text
        set_document_validity(metadata)
        self._record("aggregate", start, timings)

        if request.applies_severity_filter:
            start = time.perf_counter()
            results = filter_results_on_severity(results, request.severity_level)
            self._record("filter", start, timings)

        return ValidationOutcome(results_metadata=metadata, ccda_validation_results=results)

    def _failed_outcome(self, failure: StageFailed, request: ValidationRequest) -> ValidationOutcome:
        metadata = self.translator.translate(
            ResultMetadata(),
            failure,
            request.validation_objective,
            request.failure_policy,
        )
        results: list[Finding] = []
        return ValidationOutcome(results_metadata=metadata, ccda_validation_results=results)

    @staticmethod
    def _record(step: str, start: float, timings: dict[str, float], result: Optional[str] = None) -> None:
        elapsed = time.perf_counter() - start
        timings[step] = round(elapsed * 1000, 3)
        stage_duration_seconds.labels(stage=step).observe(elapsed)
        if result is not None:
            stage_executions_total.labels(stage=step, result=result).inc()

    @staticmethod
    def _outcome_label(outcome: ValidationOutcome) -> str:
        metadata = outcome.results_metadata
        if metadata.service_error:
            return "service_error"
        if metadata.cda_schema_validation_error_message is not None:
            return "document_error"
        return "valid" if metadata.valid else "invalid"
