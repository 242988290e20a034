"""
Integration tests for FastAPI application.

These tests use TestClient to test the full API without requiring
running validator services (stages are stubbed).
"""

from fastapi.testclient import TestClient

from ccda_validation.main import app
from ccda_validation.models.enums import StageName, ValidationResultType
from ccda_validation.validation.stages import UnavailableStage
from ccda_validation.validation.translator import ERROR_GENERIC_EXCEPTION

CONTENT_OBJECTIVE = "170.315_b1_ToC_Amb"


def upload(content: bytes, filename: str = "ccda.xml"):
    return {"ccdaFile": (filename, content, "application/xml")}


def test_root_endpoint():
    """Test root endpoint returns service info."""
    client = TestClient(app)
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Reference C-CDA Validation Service"
    assert data["version"] == "0.1.0"
    assert data["docs"] == "/docs"
    assert data["health"] == "/health"


def test_health_all_stages_configured(api_client, build_pipeline):
    """Test health check with every stage configured."""
    client = api_client(build_pipeline())

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["stages"] == {"schema": "configured", "vocabulary": "configured", "content": "configured"}
    assert "timestamp" in data


def test_health_degraded_without_content_validator(api_client, build_pipeline):
    """Test health check reports unconfigured stages."""
    client = api_client(build_pipeline(content=UnavailableStage(StageName.CONTENT)))

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["stages"]["content"] == "not_configured"


def test_validate_upload(api_client, build_pipeline, fake_stage, create_finding, sample_ccda):
    """Test the run-everything upload endpoint."""
    schema = fake_stage([create_finding(ValidationResultType.CCDA_MDHT_CONFORMANCE_ERROR, "bad code")])
    content = fake_stage([create_finding(ValidationResultType.REF_CCDA_INFO, "matched")])
    client = api_client(build_pipeline(schema=schema, content=content))

    response = client.post(
        "/referenceccdaservice/",
        data={
            "validationObjective": CONTENT_OBJECTIVE,
            "referenceFileName": "ref.xml",
            "severityLevel": "Error",
        },
        files=upload(sample_ccda.encode("utf-8")),
    )

    assert response.status_code == 200
    data = response.json()
    metadata = data["results_metadata"]
    assert metadata["ccda_document_type"] == CONTENT_OBJECTIVE
    assert metadata["valid"] is False
    assert metadata["service_error"] is False
    assert metadata["ccda_file_name"] == "ccda.xml"
    assert [r["description"] for r in data["ccda_validation_results"]] == ["bad code", "matched"]
    assert schema.calls == [(CONTENT_OBJECTIVE, "ref.xml", sample_ccda, "Error")]


def test_validate_upload_service_error(api_client, build_pipeline, fake_stage, sample_ccda):
    """Stage failures are reported in the body, not as HTTP errors."""
    client = api_client(build_pipeline(vocabulary=fake_stage(error=RuntimeError("terminology server down"))))

    response = client.post(
        "/referenceccdaservice/",
        data={"validationObjective": CONTENT_OBJECTIVE},
        files=upload(sample_ccda.encode("utf-8")),
    )

    assert response.status_code == 200
    metadata = response.json()["results_metadata"]
    assert metadata["service_error"] is True
    assert metadata["service_error_message"] == ERROR_GENERIC_EXCEPTION + "terminology server down"
    assert response.json()["ccda_validation_results"] == []


def test_validate_upload_missing_fields(api_client, build_pipeline):
    """Test upload endpoint with invalid request."""
    client = api_client(build_pipeline())

    response = client.post("/referenceccdaservice/", data={"referenceFileName": "ref.xml"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "invalid_request"
    assert data["message"] == "Request validation failed"
    assert data["details"]
    assert "timestamp" in data


def test_selective_filters_and_nests_content(api_client, build_pipeline, fake_stage, create_finding, sample_ccda):
    """Test the selective endpoint: stage flags and severity filter."""
    schema = fake_stage([
        create_finding(ValidationResultType.CCDA_MDHT_CONFORMANCE_WARN, "warn"),
        create_finding(ValidationResultType.CCDA_MDHT_CONFORMANCE_INFO, "info"),
    ])
    vocabulary = fake_stage([])
    content = fake_stage([])
    client = api_client(build_pipeline(schema, vocabulary, content))

    response = client.post(
        "/referenceccdaservice/selective",
        data={
            "validationObjective": CONTENT_OBJECTIVE,
            "severityLevel": "warning",
            "performVocabularyValidation": "false",
            "performContentValidation": "true",
        },
        files=upload(sample_ccda.encode("utf-8")),
    )

    assert response.status_code == 200
    data = response.json()
    assert [r["description"] for r in data["ccda_validation_results"]] == ["warn"]
    assert data["results_metadata"]["valid"] is True
    assert vocabulary.called is False
    assert content.called is False


def test_selective_zip_upload(api_client, build_pipeline, fake_stage, make_zip, sample_ccda):
    """Zip uploads resolve to their first non-empty entry."""
    schema = fake_stage([])
    client = api_client(build_pipeline(schema=schema))
    archive = make_zip([("empty.xml", b""), ("doc.xml", sample_ccda.encode("utf-8"))])

    response = client.post(
        "/referenceccdaservice/selective",
        data={"validationObjective": CONTENT_OBJECTIVE},
        files={"ccdaFile": ("bundle.zip", archive, "application/zip")},
    )

    assert response.status_code == 200
    assert response.json()["results_metadata"]["ccda_file_contents"] == sample_ccda
    assert schema.calls[0][2] == sample_ccda


def test_selective_failure_marks_document_invalid(api_client, build_pipeline, fake_stage, sample_ccda):
    """Selective failures read as an invalid document."""
    client = api_client(build_pipeline(schema=fake_stage(error=RuntimeError("not a C-CDA"))))

    response = client.post(
        "/referenceccdaservice/selective",
        data={"validationObjective": CONTENT_OBJECTIVE},
        files=upload(sample_ccda.encode("utf-8")),
    )

    metadata = response.json()["results_metadata"]
    assert metadata["service_error"] is False
    assert metadata["valid"] is False
    assert metadata["cda_schema_validation_error_message"] == "not a C-CDA"


def test_validate_cached_file(api_client, build_pipeline, fake_stage, sample_ccda, tmp_path):
    """Test validating a document from the shared document cache."""
    (tmp_path / "ccda.xml").write_text(sample_ccda, encoding="utf-8")
    schema = fake_stage([])
    client = api_client(build_pipeline(schema=schema))

    response = client.post(
        "/referenceccdaservice/file",
        json={"validation_objective": "C-CDA_IG_Only", "ccda_reference_file_name": "ccda.xml"},
    )

    assert response.status_code == 200
    metadata = response.json()["results_metadata"]
    assert metadata["valid"] is True
    assert metadata["ccda_file_name"] == "ccda.xml"
    assert schema.calls[0][2] == sample_ccda


def test_validate_cached_file_missing(api_client, build_pipeline):
    """A missing cached file is an input/output service error."""
    client = api_client(build_pipeline())

    response = client.post(
        "/referenceccdaservice/file",
        json={"validation_objective": "C-CDA_IG_Only", "ccda_reference_file_name": "missing.xml"},
    )

    assert response.status_code == 200
    metadata = response.json()["results_metadata"]
    assert metadata["service_error"] is True
    assert "input/output error" in metadata["service_error_message"]


def test_cached_file_disabled_without_cache_dir(api_client, build_pipeline, fake_stage, tmp_path):
    """Without a configured cache, caller-supplied paths are never opened."""
    secret = tmp_path / "secret.xml"
    secret.write_text("TOP-SECRET", encoding="utf-8")
    schema = fake_stage([])
    client = api_client(build_pipeline(schema=schema), DOCUMENT_CACHE_DIR=None)

    response = client.post(
        "/referenceccdaservice/file",
        json={"validation_objective": "C-CDA_IG_Only", "ccda_reference_file_name": str(secret)},
    )

    assert response.status_code == 200
    metadata = response.json()["results_metadata"]
    assert metadata["service_error"] is True
    assert "No shared document cache is configured" in metadata["service_error_message"]
    assert metadata["ccda_file_contents"] is None
    assert "TOP-SECRET" not in response.text
    assert schema.called is False


def test_cached_file_absolute_path_outside_cache(api_client, build_pipeline, tmp_path):
    """Absolute paths outside the cache are rejected."""
    (tmp_path / "cache").mkdir()
    secret = tmp_path / "secret.xml"
    secret.write_text("TOP-SECRET", encoding="utf-8")
    client = api_client(build_pipeline(), DOCUMENT_CACHE_DIR=str(tmp_path / "cache"))

    response = client.post(
        "/referenceccdaservice/file",
        json={"validation_objective": "C-CDA_IG_Only", "ccda_reference_file_name": str(secret)},
    )

    metadata = response.json()["results_metadata"]
    assert metadata["service_error"] is True
    assert "outside the shared document cache" in metadata["service_error_message"]
    assert "TOP-SECRET" not in response.text


def test_request_id_echoed(api_client, build_pipeline):
    """Test request tracing header."""
    client = api_client(build_pipeline())

    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_api_documentation():
    """Test that OpenAPI documentation is accessible."""
    client = TestClient(app)

    response = client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/referenceccdaservice/" in paths
    assert "/referenceccdaservice/selective" in paths
    assert "/referenceccdaservice/file" in paths
    error_schema = paths["/referenceccdaservice/"]["post"]["responses"]["400"]["content"]["application/json"]["schema"]
    assert error_schema["$ref"].endswith("/ErrorResponse")


def test_prometheus_metrics(api_client, build_pipeline, sample_ccda):
    """Test that Prometheus metrics are exposed."""
    client = api_client(build_pipeline())
    client.post(
        "/referenceccdaservice/",
        data={"validationObjective": CONTENT_OBJECTIVE},
        files=upload(sample_ccda.encode("utf-8")),
    )

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "ccda_validation_requests_total" in response.text
