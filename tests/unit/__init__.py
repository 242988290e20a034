"""
Unit tests for the C-CDA validation service.

Test individual components in isolation:
- Document sources (upload, cached path, zip archive, handle release)
- Stage gating (objective families, selective nesting)
- Aggregation, validity and severity filtering
- Exception translation
- Validation pipeline orchestration with validator doubles
"""
