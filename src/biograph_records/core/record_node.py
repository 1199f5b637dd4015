"""Record endpoint (subject/object) nodes.

A RecordNode wraps the identifier an API returned, the node normalizer's
equivalence result for it, and the query node it is bound to. All identity
views (curie, UMLS ids, types, label) are computed from the normalizer
result on every read.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from biograph_records.utils.biolink_predicates import BIOLINK_PREFIX
from .query_graph import QueryNode


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _bare_type(semantic_type: str) -> str:
    if isinstance(semantic_type, str) and semantic_type.startswith(BIOLINK_PREFIX):
        return semantic_type[len(BIOLINK_PREFIX):]
    return semantic_type


def _prefixed_type(semantic_type: str) -> str:
    if semantic_type.startswith(BIOLINK_PREFIX):
        return semantic_type
    return f"{BIOLINK_PREFIX}{semantic_type}"


class NodeNormalizerResult(BaseModel):
    """Equivalence set for one identifier, as resolved by the node normalizer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    primary_id: Optional[str] = Field(default=None, alias="primaryID", description="Canonical CURIE")
    equivalent_ids: List[str] = Field(default_factory=list, alias="equivalentIDs")
    label: Optional[str] = Field(default=None, description="Preferred label")
    label_aliases: List[str] = Field(default_factory=list, alias="labelAliases")
    primary_types: List[str] = Field(default_factory=list, alias="primaryTypes")
    semantic_types: List[str] = Field(default_factory=list, alias="semanticTypes")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("equivalent_ids", "label_aliases", "primary_types", "semantic_types", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> List[Any]:
        return _as_list(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def _none_to_dict(cls, value: Any) -> Dict[str, Any]:
        return value if value is not None else {}

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class RecordNode:
    """One endpoint of a Record.

    Constructed from a verbose frozen node, a compact frozen node, a minimal
    frozen node, or a raw API node. When ``normalizedInfo`` is missing it is
    synthesized from the frozen fields, so every property is always defined.

    Example:
        >>> node = RecordNode({"original": "NCBIGene:1017", "curie": "NCBIGene:1017",
        ...                    "semanticType": "Gene", "label": "CDK2"}, q_node)
        >>> node.semantic_type
        ['biolink:Gene']
    """

    def __init__(self, node: Dict[str, Any], q_node: QueryNode):
        self.original: Optional[str] = node.get("original")
        normalized = node.get("normalizedInfo")
        if isinstance(normalized, NodeNormalizerResult):
            self.normalized_info = normalized
        elif normalized:
            self.normalized_info = NodeNormalizerResult.model_validate(normalized)
        else:
            self.normalized_info = self._make_fake_info(node)
        self._q_node = q_node
        self._api_label: Optional[str] = node.get("apiLabel")

    @staticmethod
    def _make_fake_info(node: Dict[str, Any]) -> NodeNormalizerResult:
        """Synthesize a normalizer result from a frozen node's own fields."""
        equivalent_ids = node.get("equivalentCuries")
        if equivalent_ids is None:
            # compact nodes keep only the UMLS slice of the equivalence set
            equivalent_ids = [
                umls if umls.startswith("UMLS:") else f"UMLS:{umls}"
                for umls in _as_list(node.get("UMLS"))
                if isinstance(umls, str)
            ]
        return NodeNormalizerResult(
            primary_id=node.get("curie") or node.get("original"),
            equivalent_ids=equivalent_ids,
            label=node.get("label"),
            label_aliases=_as_list(node.get("names")),
            primary_types=[_bare_type(t) for t in _as_list(node.get("semanticType"))],
            semantic_types=[_bare_type(t) for t in _as_list(node.get("semanticTypes"))],
            attributes=node.get("attributes") or {},
        )

    def to_json(self) -> Dict[str, Any]:
        """Full (verbose) serialization."""
        return {
            "original": self.original,
            "normalizedInfo": self.normalized_info.to_dict(),
            "qNodeID": self.q_node_id,
            "isSet": self.is_set,
            "curie": self.curie,
            "UMLS": self.umls,
            "semanticType": self.semantic_type,
            "semanticTypes": self.semantic_types,
            "label": self.label,
            "apiLabel": self._api_label,
            "equivalentCuries": self.equivalent_curies,
            "names": self.names,
            "attributes": self.attributes,
        }

    def freeze(self) -> Dict[str, Any]:
        """Compact serialization; drops the equivalence breadth."""
        node = self.to_json()
        del node["normalizedInfo"]
        del node["equivalentCuries"]
        del node["names"]
        return node

    def freeze_verbose(self) -> Dict[str, Any]:
        return self.to_json()

    def freeze_minimal(self) -> Dict[str, Any]:
        """Minimal serialization; query-node binding is supplied on reload."""
        return {
            "original": self.original,
            "normalizedInfo": self.normalized_info.to_dict(),
            "apiLabel": self._api_label,
        }

    @property
    def q_node_id(self) -> Optional[str]:
        return self._q_node.get_id()

    @property
    def is_set(self) -> bool:
        return bool(self._q_node.is_set())

    @property
    def curie(self) -> Optional[str]:
        return self.normalized_info.primary_id

    @property
    def umls(self) -> List[str]:
        """UMLS ids among the equivalent curies, without the namespace."""
        return [
            curie.replace("UMLS:", "")
            for curie in self.normalized_info.equivalent_ids
            if "UMLS" in curie
        ]

    @property
    def semantic_type(self) -> List[str]:
        return [_prefixed_type(t) for t in self.normalized_info.primary_types]

    @property
    def semantic_types(self) -> List[str]:
        return [_prefixed_type(t) for t in self.normalized_info.semantic_types]

    @property
    def label(self) -> Optional[str]:
        """Normalized label, unless normalization only echoed the curie back."""
        normalized_label = self.normalized_info.label
        if normalized_label is None or normalized_label == self.curie:
            return self._api_label if self._api_label is not None else normalized_label
        return normalized_label

    @property
    def api_label(self) -> Optional[str]:
        return self._api_label

    @property
    def equivalent_curies(self) -> List[str]:
        return list(self.normalized_info.equivalent_ids)

    @property
    def names(self) -> List[str]:
        return list(self.normalized_info.label_aliases)

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self.normalized_info.attributes)
