"""
Integration tests for the C-CDA validation service.

Exercise the FastAPI application end to end with TestClient:
- Upload, zip upload, cached-file and selective endpoints
- Failure reporting inside the response body
- Health, request tracing and Prometheus metrics
"""
