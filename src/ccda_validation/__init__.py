"""
Reference C-CDA Validation Service.

Runs a clinical document through the schema, vocabulary and content
validators selected by its validation objective and returns:
- Merged findings from every stage that ran (optionally severity-filtered)
- Per-type finding counts
- An overall document validity verdict

Architecture: FastAPI transport + sequential stage orchestration + pluggable validators
"""

__version__ = "0.1.0"
