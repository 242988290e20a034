"""
FastAPI dependency injection for the C-CDA validation service.

Provides singleton instances of the settings and the validation pipeline.
Validators are loaded once and shared by all requests.
"""

from functools import lru_cache

from ccda_validation.config import Settings, settings
from ccda_validation.validation.pipeline import ValidationPipeline


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_validation_pipeline() -> ValidationPipeline:
    """
    Get singleton validation pipeline.

    Loads the configured schema, vocabulary and content validators once
    and reuses them across requests.

    Returns:
        ValidationPipeline instance
    """
    return ValidationPipeline.from_settings(get_settings())
