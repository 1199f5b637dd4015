"""NetworkX graph builder from Records.

Handles:
- Conversion from Records to a NetworkX MultiDiGraph keyed by record hash
- Node attributes (labels, categories, synonyms, UMLS ids)
- Edge attributes (predicate, qualifiers, publications, provenance sources)
- Collapsing records that share a record hash onto one edge
"""

from typing import Any, Dict, List, Sequence
import logging

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field

from biograph_records.utils.biolink_predicates import BIOLINK_PREFIX
from biograph_records.utils.publication_utils import normalize_publications
from .record import Record
from .record_node import RecordNode

logger = logging.getLogger(__name__)


class RecordGraph(BaseModel):
    """Wrapper for NetworkX graph with metadata."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    graph: Any = Field(description="NetworkX MultiDiGraph (excluded from serialization)")
    num_nodes: int = Field(description="Number of nodes")
    num_edges: int = Field(description="Number of edges")
    num_records: int = Field(description="Number of input records")
    num_duplicate_records: int = Field(default=0, description="Records collapsed onto an existing edge")
    node_categories: Dict[str, int] = Field(default_factory=dict, description="Node category counts")


class RecordGraphBuilder:
    """Builds NetworkX graphs from Records.

    Example:
        >>> builder = RecordGraphBuilder()
        >>> rg = builder.build(records)
        >>> print(f"Built graph: {rg.num_nodes} nodes, {rg.num_edges} edges")
    """

    def build(self, records: Sequence[Record]) -> RecordGraph:
        """Build a MultiDiGraph with one edge per distinct record hash.

        Args:
            records: Records to add, in any direction

        Returns:
            RecordGraph with the NetworkX MultiDiGraph and summary counts
        """
        graph = nx.MultiDiGraph()
        if not records:
            logger.warning("No records provided - returning empty graph")
            return RecordGraph(graph=graph, num_nodes=0, num_edges=0, num_records=0)

        logger.info(f"Building graph from {len(records)} records...")
        duplicates = 0

        for record in records:
            subj = record.subject.curie
            obj = record.object.curie
            if not subj or not obj:
                logger.debug(f"Skipping record without endpoint curies: {record!r}")
                continue

            self._add_node(graph, record.subject)
            self._add_node(graph, record.object)

            key = record.record_hash
            publications = normalize_publications(record.publications)

            if graph.has_edge(subj, obj, key=key):
                duplicates += 1
                edge = graph.edges[subj, obj, key]
                edge["publications"] = normalize_publications(edge["publications"] + publications)
                continue

            graph.add_edge(
                subj,
                obj,
                key=key,
                record_hash=key,
                predicate=record.predicate,
                qualifiers=record.qualifiers,
                publications=publications,
                sources=record.provenance_chain,
                api=record.api,
            )

        node_categories: Dict[str, int] = {}
        for node in graph.nodes():
            cat = graph.nodes[node].get("category", "Unknown")
            node_categories[cat] = node_categories.get(cat, 0) + 1

        logger.info(
            f"Created graph: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges "
            f"({duplicates} duplicate records collapsed)"
        )

        return RecordGraph(
            graph=graph,
            num_nodes=graph.number_of_nodes(),
            num_edges=graph.number_of_edges(),
            num_records=len(records),
            num_duplicate_records=duplicates,
            node_categories=node_categories,
        )

    @staticmethod
    def _add_node(graph: nx.MultiDiGraph, node: RecordNode) -> None:
        if graph.has_node(node.curie):
            return
        semantic_types: List[str] = node.semantic_type
        category = semantic_types[0].replace(BIOLINK_PREFIX, "") if semantic_types else "Unknown"
        graph.add_node(
            node.curie,
            label=node.label or node.curie,
            category=category,
            names=node.names,
            umls=node.umls,
        )
