"""Application settings and record configuration.

Manages:
- Per-record behaviour (which edge attributes feed the record hash,
  which aggregator closes the provenance chain)
- Biolink model cache location and version pinning
- Default log level
"""

from pathlib import Path
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from biograph_records.utils.validators import ValidationError


class RecordConfig(BaseModel):
    """Configuration consumed by ``Record``.

    Accepts the wire keys used by callers (``EDGE_ATTRIBUTES_USED_IN_RECORD_HASH``,
    ``provenanceUsesServiceProvider``) as well as the snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    edge_attributes_used_in_record_hash: List[StrictStr] = Field(
        default_factory=list,
        alias="EDGE_ATTRIBUTES_USED_IN_RECORD_HASH",
        description="attribute_type_ids whose values participate in the record hash",
    )
    provenance_uses_service_provider: bool = Field(
        default=False,
        alias="provenanceUsesServiceProvider",
        description="Close provenance chains with the Service Provider instead of BTE",
    )

    @classmethod
    def coerce(cls, value: Union["RecordConfig", dict, None]) -> "RecordConfig":
        """Build a RecordConfig from None, a dict, or an existing instance.

        Raises:
            ValidationError: If the configuration is malformed
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            raise ValidationError(f"Record config must be a dict, got {type(value).__name__}")
        try:
            return cls.model_validate(value)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid record config: {e}") from e

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Settings(BaseModel):
    """Application configuration settings."""

    # Biolink model cache
    biolink_cache_dir: Path = Field(default=Path("data/biolink"), description="Biolink model cache")
    biolink_version: Optional[str] = Field(
        default=None, description="Pin a biolink-model release tag (default: latest)"
    )
    biolink_timeout: int = Field(default=60, description="Biolink download timeout in seconds")

    # Record settings
    edge_attributes_used_in_record_hash: List[str] = Field(
        default_factory=list, description="Edge attribute types included in record hashes"
    )
    provenance_uses_service_provider: bool = Field(
        default=False, description="Use the Service Provider infores as final provenance link"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Default log level")

    def to_record_config(self) -> RecordConfig:
        """Project the record-related settings onto a RecordConfig."""
        return RecordConfig(
            edge_attributes_used_in_record_hash=self.edge_attributes_used_in_record_hash,
            provenance_uses_service_provider=self.provenance_uses_service_provider,
        )


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the application settings singleton.

    Returns:
        Settings instance with default values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_settings(**kwargs: Any) -> Settings:
    """Replace the settings singleton with one built from keyword overrides."""
    global _settings
    _settings = Settings(**kwargs)
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
