"""Core modules for BioGraph Records.

Contains the record data model:
- RecordNode for subject/object endpoints
- Association for direction-independent API edge metadata
- Query graph protocols and their stand-in implementations
- Record with hashing, freezing, reversal, provenance, and pack/unpack
- Graph builder for NetworkX export
"""

from .association import Association
from .query_graph import QueryEdge, QueryNode, FakeQueryEdge, FakeQueryNode, make_fake_query_edge
from .record_node import NodeNormalizerResult, RecordNode
from .record import Record, RecordPackage, flatten_edge_attributes
from .graph_builder import RecordGraph, RecordGraphBuilder

__all__ = [
    "Association",
    "QueryEdge",
    "QueryNode",
    "FakeQueryEdge",
    "FakeQueryNode",
    "make_fake_query_edge",
    "NodeNormalizerResult",
    "RecordNode",
    "Record",
    "RecordPackage",
    "flatten_edge_attributes",
    "RecordGraph",
    "RecordGraphBuilder",
]
