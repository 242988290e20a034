"""
Configuration settings for the Reference C-CDA Validation Service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Reference C-CDA Validation Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Validator Stages ===
    # "module:attribute" import paths; the attribute is a class or factory
    # called with no arguments. Unset stages fail when invoked.
    SCHEMA_VALIDATOR: Optional[str] = None
    VOCABULARY_VALIDATOR: Optional[str] = None
    CONTENT_VALIDATOR: Optional[str] = None

    # === Validation Objectives ===
    IG_ONLY_OBJECTIVES: list[str] = ["C-CDA_IG_Only"]
    NON_SPECIFIC_OBJECTIVES: list[str] = ["NonSpecificCCDA"]
    MU2_OBJECTIVES: list[str] = [
        "ClinicalOfficeVisitSummary",
        "TransitionsOfCareAmbulatorySummary",
        "TransitionsOfCareInpatientSummary",
        "VDTAmbulatorySummary",
        "VDTInpatientSummary",
    ]
    UNIQUE_CONTENT_OBJECTIVES: list[str] = [
        "170.315_b1_ToC_Amb",
        "170.315_b1_ToC_Inp",
        "170.315_b2_CIRI_Amb",
        "170.315_b2_CIRI_Inp",
        "170.315_b9_CP_Amb",
        "170.315_b9_CP_Inp",
        "170.315_e1_VDT_Amb",
        "170.315_e1_VDT_Inp",
        "170.315_g9_APIAccess_Amb",
        "170.315_g9_APIAccess_Inp",
    ]

    # === Document Acquisition ===
    DOCUMENT_CACHE_DIR: Optional[str] = None  # Shared cache for path-based requests
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
