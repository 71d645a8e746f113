"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class CategorizationConfig(BaseModel):
    """Skill categorization settings."""

    acceptance_threshold: Optional[float] = Field(
        None,
        gt=0.0,
        le=1.0,
        description="Minimum category score to accept; overrides the lexicon's own threshold",
    )
    lexicon_path: Optional[str] = Field(
        None, description="Path to a YAML lexicon file (built-in lexicon when unset)"
    )

    @field_validator("lexicon_path")
    @classmethod
    def validate_lexicon_path(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank paths as unset."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class MatchingConfig(BaseModel):
    """Candidate ranking settings."""

    candidate_limit: int = Field(
        20, ge=0, description="Maximum candidates shown by the CLI (0 = unlimited)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the skill matching engine.

    Every section is optional so an empty mapping yields the defaults.
    """

    categorization: CategorizationConfig = Field(
        default_factory=CategorizationConfig, description="Categorization settings"
    )
    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Ranking settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = {"extra": "forbid"}
