"""
Validation API routes.

Thin transport over ValidationPipeline. Handlers are plain (non-async)
functions so FastAPI runs each pipeline call on its worker thread pool;
validators block while they work.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from ccda_validation.api.dependencies import get_settings, get_validation_pipeline
from ccda_validation.api.models import ErrorResponse, FileValidationRequest, HealthResponse
from ccda_validation.config import Settings
from ccda_validation.models.request import ValidationRequest
from ccda_validation.models.results import ValidationOutcome
from ccda_validation.sources.document_source import PathDocument, from_upload
from ccda_validation.validation.pipeline import ValidationPipeline
from ccda_validation.validation.stages import UnavailableStage

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request format"},
    500: {"model": ErrorResponse, "description": "Unexpected transport-level error"},
}


@router.post(
    "/referenceccdaservice/",
    response_model=ValidationOutcome,
    status_code=status.HTTP_200_OK,
    summary="Validate an uploaded C-CDA document",
    description="""
    Run every validator stage the validation objective allows against an
    uploaded document. Findings are returned unfiltered.

    Service failures are reported in the response metadata
    (service_error / service_error_message), never as HTTP errors.
    """,
    responses=ERROR_RESPONSES,
)
def validate_document(
    validation_objective: str = Form(..., alias="validationObjective"),
    reference_file_name: str = Form("", alias="referenceFileName"),
    severity_level: Optional[str] = Form(None, alias="severityLevel"),
    ccda_file: UploadFile = File(..., alias="ccdaFile"),
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    settings: Settings = Depends(get_settings),
) -> ValidationOutcome:
    source = from_upload(ccda_file.filename, ccda_file.file, settings.MAX_UPLOAD_BYTES)
    request = ValidationRequest.run_everything(
        validation_objective=validation_objective,
        reference_file_name=reference_file_name,
        severity_level=severity_level,
    )
    outcome, _ = pipeline.validate(source, request)
    return outcome


@router.post(
    "/referenceccdaservice/file",
    response_model=ValidationOutcome,
    status_code=status.HTTP_200_OK,
    summary="Validate a C-CDA document from the shared document cache",
    description="""
    The path is resolved inside the configured shared document cache. When
    no cache is configured the request is reported as an input/output
    service error and nothing is read.
    """,
    responses=ERROR_RESPONSES,
)
def validate_cached_document(
    body: FileValidationRequest,
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    settings: Settings = Depends(get_settings),
) -> ValidationOutcome:
    source = PathDocument.from_cache(
        body.ccda_reference_file_name,
        cache_dir=settings.DOCUMENT_CACHE_DIR,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
    request = ValidationRequest.run_everything(
        validation_objective=body.validation_objective,
        reference_file_name=body.reference_file_name,
        severity_level=body.severity_level,
    )
    outcome, _ = pipeline.validate(source, request)
    return outcome


@router.post(
    "/referenceccdaservice/selective",
    response_model=ValidationOutcome,
    status_code=status.HTTP_200_OK,
    summary="Validate an uploaded C-CDA document with selected stages",
    description="""
    Run only the requested validator stages and filter the returned findings
    by severityLevel ("Error" or "Warning"; anything else returns all).

    Content validation only runs when vocabulary validation runs. A document
    that cannot be processed is reported as invalid, with the failure in
    cda_schema_validation_error_message; service_error stays false.
    Uploads named *.zip are read as archives.
    """,
    responses=ERROR_RESPONSES,
)
def validate_document_selective(
    validation_objective: str = Form(..., alias="validationObjective"),
    reference_file_name: str = Form("", alias="referenceFileName"),
    severity_level: Optional[str] = Form(None, alias="severityLevel"),
    perform_schema_validation: bool = Form(True, alias="performSchemaValidation"),
    perform_vocabulary_validation: bool = Form(True, alias="performVocabularyValidation"),
    perform_content_validation: bool = Form(True, alias="performContentValidation"),
    ccda_file: UploadFile = File(..., alias="ccdaFile"),
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    settings: Settings = Depends(get_settings),
) -> ValidationOutcome:
    source = from_upload(ccda_file.filename, ccda_file.file, settings.MAX_UPLOAD_BYTES)
    request = ValidationRequest.selective(
        validation_objective=validation_objective,
        reference_file_name=reference_file_name,
        severity_level=severity_level,
        run_schema=perform_schema_validation,
        run_vocabulary=perform_vocabulary_validation,
        run_content=perform_content_validation,
    )
    outcome, _ = pipeline.validate(source, request)
    return outcome


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports which validator stages have an implementation configured.",
)
def health_check(
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    stages = {
        stage.value: "not_configured" if isinstance(validator, UnavailableStage) else "configured"
        for stage, validator in pipeline.stages.items()
    }
    health_status = "healthy" if all(v == "configured" for v in stages.values()) else "degraded"

    logger.info("Health check", status=health_status, stages=stages)

    return HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        stages=stages,
    )
