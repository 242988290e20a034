"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import io
import zipfile
from typing import Optional

import pytest

from ccda_validation.config import Settings
from ccda_validation.models.enums import ValidationResultType
from ccda_validation.models.findings import Finding
from ccda_validation.validation.gate import StageGate
from ccda_validation.validation.pipeline import ValidationPipeline

SAMPLE_CCDA = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<ClinicalDocument xmlns="urn:hl7-org:v3">'
    '<templateId root="2.16.840.1.113883.10.20.22.1.1"/>'
    "</ClinicalDocument>"
)


class FakeStage:
    """Validator stage double that records its calls.

    Returns a fixed list of findings, or raises the configured error.
    """

    def __init__(self, findings: Optional[list[Finding]] = None, error: Optional[BaseException] = None):
        self.findings = findings
        self.error = error
        self.calls: list[tuple] = []

    @property
    def called(self) -> bool:
        return bool(self.calls)

    def validate_file(self, validation_objective, reference_file_name, ccda_file_contents, severity_level):
        self.calls.append((validation_objective, reference_file_name, ccda_file_contents, severity_level))
        if self.error is not None:
            raise self.error
        return self.findings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        # === Application ===
        APP_NAME="Reference C-CDA Validation Service (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Validators ===
        SCHEMA_VALIDATOR=None,
        VOCABULARY_VALIDATOR=None,
        CONTENT_VALIDATOR=None,

        # === Objectives ===
        IG_ONLY_OBJECTIVES=["C-CDA_IG_Only"],
        NON_SPECIFIC_OBJECTIVES=["NonSpecificCCDA"],
        MU2_OBJECTIVES=["TransitionsOfCareAmbulatorySummary"],
        UNIQUE_CONTENT_OBJECTIVES=["170.315_b1_ToC_Amb", "170.315_b2_CIRI_Amb"],

        # === Acquisition ===
        DOCUMENT_CACHE_DIR=None,
        MAX_UPLOAD_BYTES=1024 * 1024,

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def stage_gate(test_settings: Settings) -> StageGate:
    """StageGate built from test settings."""
    return StageGate.from_settings(test_settings)


@pytest.fixture
def create_finding():
    """Factory fixture to create Finding with custom values.

    Usage:
        def test_something(create_finding):
            finding = create_finding(ValidationResultType.REF_CCDA_WARN, "message")
    """
    def _create(
        result_type: ValidationResultType = ValidationResultType.CCDA_MDHT_CONFORMANCE_ERROR,
        description: str = "Test finding",
        is_schema_error: bool = False,
    ) -> Finding:
        return Finding(type=result_type, description=description, is_schema_error=is_schema_error)

    return _create


@pytest.fixture
def fake_stage():
    """Factory fixture for FakeStage validator doubles."""
    def _create(findings: Optional[list[Finding]] = None, error: Optional[BaseException] = None) -> FakeStage:
        return FakeStage(findings=findings, error=error)

    return _create


@pytest.fixture
def build_pipeline(stage_gate: StageGate, fake_stage):
    """Factory fixture wiring a ValidationPipeline over FakeStage doubles.

    Unspecified stages return no findings.
    """
    def _build(schema=None, vocabulary=None, content=None) -> ValidationPipeline:
        return ValidationPipeline(
            schema_validator=schema or fake_stage([]),
            vocabulary_validator=vocabulary or fake_stage([]),
            content_validator=content or fake_stage([]),
            gate=stage_gate,
        )

    return _build


@pytest.fixture
def sample_ccda() -> str:
    """Minimal C-CDA document text."""
    return SAMPLE_CCDA


@pytest.fixture
def make_zip():
    """Factory fixture building zip archive bytes from (name, content) pairs, in order."""
    def _make(entries: list[tuple[str, bytes]]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, content in entries:
                archive.writestr(name, content)
        return buffer.getvalue()

    return _make
