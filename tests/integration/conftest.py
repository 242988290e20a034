"""Integration test fixtures (application client with stubbed validators).

The FastAPI app is exercised end to end through TestClient. Validator
stages are replaced with FakeStage doubles via dependency overrides, so
no external validator services are needed.
"""

import pytest
from fastapi.testclient import TestClient

from ccda_validation.api.dependencies import get_settings, get_validation_pipeline
from ccda_validation.main import app


@pytest.fixture
def api_client(test_settings, tmp_path):
    """TestClient factory with the given pipeline injected.

    The shared document cache points at tmp_path unless overridden.
    """

    def _create(pipeline, **setting_overrides) -> TestClient:
        settings = test_settings.model_copy(
            update={"DOCUMENT_CACHE_DIR": str(tmp_path), **setting_overrides}
        )
        app.dependency_overrides[get_validation_pipeline] = lambda: pipeline
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    yield _create
    app.dependency_overrides.clear()
