"""Direction-independent edge metadata shared by records from one API edge."""

import json
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from biograph_records.utils.biolink_predicates import BIOLINK_PREFIX, canonical_predicate
from biograph_records.utils.hashing import hash_string


def strip_biolink_prefix(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.replace(BIOLINK_PREFIX, "")


class Association(BaseModel):
    """API meta-edge metadata for a record.

    Predicate and qualifier types are stored without the biolink prefix; the
    record re-adds it on read. Unknown keys from the API's meta-edge are kept.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    input_id: Optional[str] = None
    input_type: Optional[str] = None
    output_id: Optional[str] = None
    output_type: Optional[str] = None
    predicate: str = Field(description="Unprefixed biolink predicate")
    source: Optional[str] = Field(default=None, description="Meta-edge source infores")
    api_name: Optional[str] = None
    x_translator: Optional[Dict[str, Any]] = Field(default=None, alias="x-translator")
    qualifiers: Optional[Dict[str, str]] = None
    api_is_primary_knowledge_source: bool = Field(default=False, alias="apiIsPrimaryKnowledgeSource")

    @field_validator("predicate", mode="before")
    @classmethod
    def _strip_predicate(cls, value: Any) -> Any:
        return canonical_predicate(value) if isinstance(value, str) else value

    @field_validator("qualifiers", mode="before")
    @classmethod
    def _strip_qualifier_types(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {strip_biolink_prefix(k): v for k, v in value.items()}
        return value

    @classmethod
    def from_dict(cls, data: Any) -> "Association":
        if isinstance(data, cls):
            return data
        return cls.model_validate(data)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Association":
        """Synthesize an Association from a raw or frozen record's own fields."""
        return cls(
            predicate=record.get("predicate"),
            qualifiers=record.get("qualifiers") or None,
            api_name=record.get("api"),
            source=record.get("metaEdgeSource"),
            x_translator={"infores": record.get("apiInforesCurie")},
            api_is_primary_knowledge_source=False,
        )

    @property
    def infores(self) -> Optional[str]:
        if self.x_translator:
            return self.x_translator.get("infores") or None
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def content_hash(self) -> str:
        """Digest of the serialized association, independent of key order."""
        return hash_string(json.dumps(self.to_dict(), sort_keys=True, default=str))

    def reversed(self, predicate: str, qualifiers: Optional[Dict[str, str]] = None) -> "Association":
        """Copy with input/output swapped and the given (inverse) predicate."""
        update = {
            "input_id": self.output_id,
            "input_type": self.output_type,
            "output_id": self.input_id,
            "output_type": self.input_type,
            "predicate": strip_biolink_prefix(predicate),
        }
        if qualifiers is not None:
            update["qualifiers"] = {strip_biolink_prefix(k): v for k, v in qualifiers.items()}
        return self.model_copy(update=update)
