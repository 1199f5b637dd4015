"""Knowledge graph edge records.

A Record is one directed edge returned by an external API: two RecordNodes,
the API's Association (meta-edge metadata), and a mapped-response bag with
publications and edge attributes.

Handles:
- Content-based record hashing (order-independent over qualifiers)
- Three serialization tiers (verbose, compact, minimal)
- Reversal to the opposite direction, re-deriving predicate and qualifiers
- Provenance chain derivation
- Batch pack/unpack with deduplicated Associations
"""

import json
import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from biograph_records.config.settings import RecordConfig
from biograph_records.utils.biolink_predicates import BIOLINK_PREFIX
from biograph_records.utils.hashing import hash_string
from biograph_records.utils.infores_utils import build_source_chain, final_aggregator_item
from biograph_records.utils.validators import (
    ValidationError,
    validate_record_package,
    validate_record_shape,
)
from .association import Association, strip_biolink_prefix
from .query_graph import QueryEdge, make_fake_query_edge
from .record_node import RecordNode

logger = logging.getLogger(__name__)

EDGE_ATTRIBUTES_KEY = "edge-attributes"
TRAPI_SOURCES_KEY = "trapi_sources"

# [associations, frozen_record_0, frozen_record_1, ...]
RecordPackage = List[Any]


def flatten_edge_attributes(attributes: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Flatten a nested attribute tree, depth-first, parents before children.

    Every attribute is included, not only the leaves.
    """
    flattened: List[Dict[str, Any]] = []
    for attribute in attributes or []:
        flattened.append(attribute)
        if attribute.get("attributes"):
            flattened.extend(flatten_edge_attributes(attribute["attributes"]))
    return flattened


def _format_attribute_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, default=str)


class Record:
    """One edge of the knowledge graph, with its supporting metadata.

    Example:
        >>> record = Record({
        ...     "subject": {"original": "NCBIGene:1017", "curie": "NCBIGene:1017", "qNodeID": "n0"},
        ...     "object": {"original": "MONDO:0005148", "curie": "MONDO:0005148", "qNodeID": "n1"},
        ...     "predicate": "biolink:related_to",
        ...     "api": "Example API",
        ...     "apiInforesCurie": "infores:example",
        ...     "metaEdgeSource": "infores:upstream",
        ... })
        >>> frozen = record.freeze()
        >>> Record(frozen).record_hash == record.record_hash
        True
    """

    def __init__(
        self,
        record: Mapping[str, Any],
        config: Union[RecordConfig, dict, None] = None,
        association: Union[Association, dict, None] = None,
        q_edge: Optional[QueryEdge] = None,
        reverse: bool = False,
    ):
        """Initialize a record from a raw API record or any frozen tier.

        Args:
            record: Raw, verbose, compact, or minimal record mapping
            config: Record configuration (dict with wire keys, or RecordConfig)
            association: Explicit Association; otherwise taken from the record's
                own ``association`` or synthesized from its top-level fields
            q_edge: Query edge the record was retrieved for; otherwise a fake
                edge is synthesized from the record's node bindings
            reverse: Whether this instance is the execution-reversed view

        Raises:
            ValidationError: If the record or config is malformed
        """
        if association is None and isinstance(record, Mapping):
            association = record.get("association")
        validate_record_shape(record, has_association=association is not None)

        try:
            self.association = (
                Association.from_dict(association)
                if association is not None
                else Association.from_record(record)
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid association: {e}") from e

        self.q_edge: QueryEdge = q_edge if q_edge is not None else make_fake_query_edge(record)
        self.config = RecordConfig.coerce(config)
        self.reverse_to_execution = bool(reverse)

        if not self.reverse_to_execution:
            self.subject = RecordNode(record["subject"], self.q_edge.get_input_node())
            self.object = RecordNode(record["object"], self.q_edge.get_output_node())
        else:
            self.subject = RecordNode(record["subject"], self.q_edge.get_output_node())
            self.object = RecordNode(record["object"], self.q_edge.get_input_node())

        own_qualifiers = record.get("qualifiers")
        if own_qualifiers is None:
            own_qualifiers = self.association.qualifiers
        self._qualifiers: Dict[str, str] = dict(own_qualifiers or {})

        self.mapped_response: Dict[str, Any] = deepcopy(record.get("mappedResponse") or {})
        if not self.mapped_response.get("publications") and record.get("publications"):
            self.mapped_response["publications"] = list(record["publications"])

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    def _reverse_qualifiers(self, qualifiers: Mapping[str, str]) -> Dict[str, str]:
        reversed_qualifiers = {}
        for qualifier_type, qualifier in qualifiers.items():
            new_type = qualifier_type
            new_qualifier = qualifier
            if "predicate" in qualifier_type and isinstance(qualifier, str):
                inverse = self.q_edge.get_reversed_predicate(strip_biolink_prefix(qualifier))
                new_qualifier = f"{BIOLINK_PREFIX}{strip_biolink_prefix(inverse)}"
            if "subject" in qualifier_type:
                new_type = qualifier_type.replace("subject", "object")
            elif "object" in qualifier_type:
                new_type = qualifier_type.replace("object", "subject")
            reversed_qualifiers[new_type] = new_qualifier
        return reversed_qualifiers

    def reverse(self) -> "Record":
        """Return a new Record for the same assertion in the opposite direction."""
        frozen = self.freeze_verbose()
        predicate = strip_biolink_prefix(self.q_edge.get_reversed_predicate(self.association.predicate))

        association_qualifiers = None
        if self.association.qualifiers:
            association_qualifiers = self._reverse_qualifiers(self.association.qualifiers)
        if frozen["qualifiers"]:
            frozen["qualifiers"] = self._reverse_qualifiers(frozen["qualifiers"])

        association = self.association.reversed(predicate, association_qualifiers)
        frozen["association"] = association.to_dict()
        frozen["predicate"] = f"{BIOLINK_PREFIX}{predicate}"
        frozen["subject"], frozen["object"] = frozen["object"], frozen["subject"]

        logger.debug(f"Reversed record {self.record_hash}: {self.predicate} -> {frozen['predicate']}")
        return Record(frozen, self.config, association, self.q_edge, not self.reverse_to_execution)

    def query_direction(self) -> "Record":
        """This record oriented to match the query edge's subject -> object direction."""
        if not self.q_edge.is_reversed():
            return self
        return self.reverse()

    # ------------------------------------------------------------------
    # Batch helpers
    # ------------------------------------------------------------------

    @staticmethod
    def freeze_records(records: Sequence["Record"]) -> List[Dict[str, Any]]:
        return [record.freeze() for record in records]

    @staticmethod
    def unfreeze_records(
        records: Sequence[Mapping[str, Any]],
        config: Union[RecordConfig, dict, None] = None,
    ) -> List["Record"]:
        return [Record(record, config) for record in records]

    @staticmethod
    def pack_records(records: Sequence["Record"]) -> RecordPackage:
        """Pack records, storing each distinct Association once.

        Returns:
            ``[associations, *minimal_records]`` where each minimal record
            carries an ``apiEdge`` index into ``associations``
        """
        associations: List[Dict[str, Any]] = []
        association_indices: Dict[str, int] = {}
        frozen_records: List[Dict[str, Any]] = []

        for record in records:
            association_hash = record.association.content_hash()
            index = association_indices.get(association_hash)
            if index is None:
                index = len(associations)
                association_indices[association_hash] = index
                associations.append(record.association.to_dict())

            frozen_records.append({**record.freeze_minimal(), "apiEdge": index})

        logger.info(f"Packed {len(frozen_records)} records with {len(associations)} distinct associations")
        return [associations, *frozen_records]

    @staticmethod
    def unpack_records(
        package: RecordPackage,
        q_edge: QueryEdge,
        config: Union[RecordConfig, dict, None] = None,
    ) -> List["Record"]:
        """Rebuild records from ``pack_records`` output.

        Raises:
            ValidationError: If the package is malformed
        """
        validate_record_package(package)
        raw_associations, *frozen_records = package
        try:
            associations = [Association.from_dict(a) for a in raw_associations]
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid association in record package: {e}") from e

        records = [
            Record(frozen, config, associations[frozen["apiEdge"]], q_edge)
            for frozen in frozen_records
        ]
        logger.info(f"Unpacked {len(records)} records from {len(associations)} associations")
        return records

    # ------------------------------------------------------------------
    # Serialization tiers
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """Verbose serialization (lossless)."""
        return {
            "subject": self.subject.freeze_verbose(),
            "object": self.object.freeze_verbose(),
            "association": self.association.to_dict(),
            "predicate": self.predicate,
            "qualifiers": self.qualifiers,
            "publications": list(self.publications),
            "recordHash": self.record_hash,
            "api": self.api,
            "apiInforesCurie": self.api_infores_curie,
            "metaEdgeSource": self.meta_edge_source,
            "mappedResponse": deepcopy(self.mapped_response),
        }

    def freeze(self) -> Dict[str, Any]:
        """Compact serialization.

        Nodes lose their equivalence breadth and the Association is dropped
        (it is re-synthesized from the top-level fields on reload).
        Publications travel in the top-level field only.
        """
        record = self.to_json()
        record["subject"] = self.subject.freeze()
        record["object"] = self.object.freeze()
        del record["association"]
        record["mappedResponse"].pop("publications", None)
        return record

    def freeze_verbose(self) -> Dict[str, Any]:
        return self.to_json()

    def freeze_minimal(self) -> Dict[str, Any]:
        """Minimal serialization; Association and query edge are supplied on reload."""
        return {
            "subject": self.subject.freeze_minimal(),
            "object": self.object.freeze_minimal(),
            "qualifiers": self.qualifiers,
            "publications": list(self.publications),
            "mappedResponse": deepcopy(self.mapped_response),
        }

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------

    @property
    def _configured_edge_attributes_for_hash(self) -> str:
        allowed = self.config.edge_attributes_used_in_record_hash
        if not allowed:
            return ""
        return ",".join(
            f"{attribute.get('attribute_type_id')}:{_format_attribute_value(attribute.get('value'))}"
            for attribute in flatten_edge_attributes(self.mapped_response.get(EDGE_ATTRIBUTES_KEY))
            if attribute.get("attribute_type_id") in allowed
        )

    @property
    def _record_hash_content(self) -> str:
        qualifier_string = "".join(
            f";{qualifier_type}:{qualifier}"
            for qualifier_type, qualifier in sorted(self.qualifiers.items(), key=lambda item: item[0])
        )
        parts = [
            self.subject.curie,
            self.predicate,
            self.object.curie,
            qualifier_string,
            self.api,
            self.meta_edge_source,
            self._configured_edge_attributes_for_hash,
        ]
        return "-".join("" if part is None else str(part) for part in parts)

    @property
    def record_hash(self) -> str:
        return hash_string(self._record_hash_content)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def predicate(self) -> str:
        return f"{BIOLINK_PREFIX}{self.association.predicate}"

    @property
    def qualifiers(self) -> Dict[str, str]:
        """Qualifiers with biolink-prefixed types (and predicate values)."""
        qualifiers = {}
        for qualifier_type, qualifier in self._qualifiers.items():
            new_qualifier = qualifier
            if "predicate" in qualifier_type and isinstance(qualifier, str):
                new_qualifier = f"{BIOLINK_PREFIX}{strip_biolink_prefix(qualifier)}"
            qualifiers[f"{BIOLINK_PREFIX}{strip_biolink_prefix(qualifier_type)}"] = new_qualifier
        return qualifiers

    @property
    def api(self) -> Optional[str]:
        return self.association.api_name

    @property
    def api_infores_curie(self) -> Optional[str]:
        return self.association.infores

    @property
    def meta_edge_source(self) -> Optional[str]:
        return self.association.source

    @property
    def publications(self) -> List[str]:
        return self.mapped_response.get("publications") or []

    @property
    def provenance_chain(self) -> List[Dict[str, Any]]:
        """Ordered knowledge-source attributions for this record."""
        if self.mapped_response.get(TRAPI_SOURCES_KEY):
            chain = deepcopy(self.mapped_response[TRAPI_SOURCES_KEY])
        else:
            chain = build_source_chain(
                self.api_infores_curie,
                self.meta_edge_source,
                self.association.api_is_primary_knowledge_source,
            )
        chain.append(
            final_aggregator_item(self.api_infores_curie, self.config.provenance_uses_service_provider)
        )
        return chain

    def __repr__(self) -> str:
        return f"Record({self.subject.curie} {self.predicate} {self.object.curie}, api={self.api!r})"
