"""Knowledge source (infores) helpers for record provenance.

Records describe the chain of knowledge sources an assertion passed through
as a list of ``{resource_id, resource_role, upstream_resource_ids}`` items.
This module defines the terminal aggregator identities and builds/inspects
those chains.
"""

import logging
from typing import Any, Dict, List, Optional, Set

import networkx as nx

logger = logging.getLogger(__name__)

BIOTHINGS_EXPLORER_INFORES = "infores:biothings-explorer"
SERVICE_PROVIDER_INFORES = "infores:service-provider-trapi"

PRIMARY_KNOWLEDGE_SOURCE = "primary_knowledge_source"
AGGREGATOR_KNOWLEDGE_SOURCE = "aggregator_knowledge_source"


def build_source_chain(
    api_infores: Optional[str],
    meta_edge_source: Optional[str],
    api_is_primary: bool,
) -> List[Dict[str, Any]]:
    """Build the API-level part of a provenance chain.

    An API that is itself the primary knowledge source yields a single
    primary item. An aggregator API yields the upstream source as primary,
    followed by the API as aggregator.
    """
    chain: List[Dict[str, Any]] = [{
        "resource_id": api_infores if api_is_primary else meta_edge_source,
        "resource_role": PRIMARY_KNOWLEDGE_SOURCE,
    }]
    if not api_is_primary:
        chain.append({
            "resource_id": api_infores,
            "resource_role": AGGREGATOR_KNOWLEDGE_SOURCE,
            "upstream_resource_ids": [meta_edge_source],
        })
    return chain


def final_aggregator_item(api_infores: Optional[str], uses_service_provider: bool) -> Dict[str, Any]:
    """Terminal aggregator link appended to every provenance chain."""
    return {
        "resource_id": SERVICE_PROVIDER_INFORES if uses_service_provider else BIOTHINGS_EXPLORER_INFORES,
        "resource_role": AGGREGATOR_KNOWLEDGE_SOURCE,
        "upstream_resource_ids": [api_infores],
    }


def extract_unique_sources(graph: nx.MultiDiGraph) -> Set[str]:
    """Extract unique infores source IDs from graph edges.

    Args:
        graph: Record graph whose edges carry a 'sources' provenance chain

    Returns:
        Set of unique infores:* IDs
    """
    sources = set()

    for u, v, key, data in graph.edges(keys=True, data=True):
        for source in data.get('sources', []):
            if isinstance(source, dict):
                resource_id = source.get('resource_id') or ''
                if resource_id.startswith('infores:'):
                    sources.add(resource_id)
            elif isinstance(source, str) and source.startswith('infores:'):
                sources.add(source)

    logger.info(f"Extracted {len(sources)} unique information resources from graph")
    return sources
