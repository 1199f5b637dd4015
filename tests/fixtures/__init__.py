"""Test fixtures for BioGraph Records tests.

Contains:
- BIOLINK_TEST_MODEL: a small biolink model with directional, one-sided,
  and symmetric predicates
- Builders for raw records in the shapes external APIs hand to Record
"""

from copy import deepcopy

from biograph_records.utils.biolink_predicates import get_reversed_predicate

BIOLINK_TEST_MODEL = {
    "slots": {
        "related to": {"description": "root predicate", "symmetric": True},
        "related to at instance level": {"is_a": "related to", "symmetric": True},
        "affects": {"is_a": "related to at instance level", "inverse": "affected by"},
        "affected by": {"is_a": "related to at instance level", "inverse": "affects"},
        "causes": {"is_a": "affects", "inverse": "caused by"},
        "caused by": {"is_a": "affected by", "inverse": "causes"},
        # inverse declared on one side only
        "treats": {"is_a": "related to at instance level", "inverse": "treated by"},
        "treated by": {"is_a": "related to at instance level"},
        "interacts with": {"is_a": "related to at instance level", "symmetric": True},
        "subclass of": {"is_a": "related to at instance level"},
        "name": {"description": "node property, not a predicate"},
        "has attribute": {"is_a": "node property"},
        "node property": None,
    }
}

_SCENARIO_RECORD = {
    "subject": {
        "original": "originalThing0",
        "qNodeID": "n0",
        "isSet": False,
        "curie": "prefix:1",
        "UMLS": "UMLSstring0",
        "semanticType": "gene",
        "label": "someLabel0",
        "names": ["someName0"],
        "attributes": {},
    },
    "object": {
        "original": "originalThing1",
        "qNodeID": "n1",
        "isSet": False,
        "curie": "prefix:2",
        "UMLS": "UMLSstring1",
        "semanticType": "gene",
        "label": "someLabel1",
        "names": ["someName1"],
        "attributes": {},
    },
    "predicate": "somePredicate",
    "publications": ["PMID:nopenotreal"],
    "mappedResponse": {
        "edge-attributes": [
            {
                "attribute_source": "someSource",
                "attribute_type_id": "someID",
                "value": False,
                "value_type_id": "boolean",
            }
        ],
    },
    "api": "someAPI",
    "apiInforesCurie": "infores:something",
    "metaEdgeSource": "infores:somethingElse",
}


def make_scenario_record() -> dict:
    """Hand-built record with compact-style nodes and no qualifiers."""
    return deepcopy(_SCENARIO_RECORD)


def make_normalized_node(curie: str, label: str, q_node_id: str, semantic_type: str = "Gene") -> dict:
    """Raw API node carrying a full node normalizer result."""
    return {
        "original": curie,
        "qNodeID": q_node_id,
        "isSet": False,
        "apiLabel": f"{label} (api)",
        "normalizedInfo": {
            "primaryID": curie,
            "equivalentIDs": [curie, "UMLS:C0000001", "MESH:D000001"],
            "label": label,
            "labelAliases": [label, label.lower()],
            "primaryTypes": [semantic_type],
            "semanticTypes": [semantic_type, "NamedThing"],
            "attributes": {"information_content": 80.1},
        },
    }


def make_api_record(
    subject: str = "CHEBI:6801",
    obj: str = "MONDO:0005148",
    predicate: str = "biolink:treats",
    qualifiers: dict = None,
    api: str = "MyChem.info API",
    infores: str = "infores:mychem-info",
    source: str = "infores:chembl",
    publications: list = None,
    edge_attributes: list = None,
) -> dict:
    """Raw record shaped the way an API transformer emits it."""
    record = {
        "subject": make_normalized_node(subject, "metformin", "n0", "SmallMolecule"),
        "object": make_normalized_node(obj, "type 2 diabetes mellitus", "n1", "Disease"),
        "predicate": predicate,
        "publications": publications if publications is not None else ["PMID:123456"],
        "api": api,
        "apiInforesCurie": infores,
        "metaEdgeSource": source,
        "mappedResponse": {},
    }
    if qualifiers is not None:
        record["qualifiers"] = qualifiers
    if edge_attributes is not None:
        record["mappedResponse"]["edge-attributes"] = edge_attributes
    return record


class StubQueryNode:
    """Minimal query node satisfying the QueryNode protocol."""

    def __init__(self, node_id: str, is_set: bool = False):
        self._id = node_id
        self._is_set = is_set

    def get_id(self):
        return self._id

    def is_set(self):
        return self._is_set


class StubQueryEdge:
    """Minimal query edge satisfying the QueryEdge protocol."""

    def __init__(self, reversed_: bool = False, input_set: bool = False):
        self._reversed = reversed_
        self._input = StubQueryNode("n0", is_set=input_set)
        self._output = StubQueryNode("n1")

    def get_input_node(self):
        return self._input

    def get_output_node(self):
        return self._output

    def is_reversed(self):
        return self._reversed

    def get_hashed_edge_representation(self):
        return "stub-edge"

    def get_reversed_predicate(self, predicate):
        return get_reversed_predicate(predicate)
