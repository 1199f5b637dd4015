"""Publication id utilities for BioGraph Records."""
import re
from typing import Dict, Iterable, List, Optional
import networkx as nx

# Regex patterns for publication IDs
PMC_PATTERN = re.compile(r'(?:PMC|PMCID):?\s*(PMC)?(\d+)', re.IGNORECASE)


def normalize_publication_id(pub_id: str) -> Optional[str]:
    """Normalize publication ID format for consistent grouping.

    Args:
        pub_id: Raw publication ID string

    Returns:
        Normalized publication ID or None if invalid
    """
    if not pub_id or not isinstance(pub_id, str):
        return None
    pub_id = pub_id.strip()

    if not pub_id:
        return None

    # Already normalized PMID format
    if pub_id.upper().startswith('PMID:'):
        return pub_id.upper()

    # PMC/PMCID formats - normalize to PMC:XXXXXXX
    if pub_id.upper().startswith(('PMC:', 'PMCID:')):
        match = PMC_PATTERN.match(pub_id)
        if match:
            return f"PMC:{match.group(2)}"
        return pub_id.upper()

    # URLs - keep as-is
    return pub_id


def normalize_publications(pub_ids: Iterable[str]) -> List[str]:
    """Normalize and deduplicate publication ids, preserving first-seen order."""
    seen = set()
    result = []
    for pub in pub_ids or []:
        normalized = normalize_publication_id(pub)
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def get_publication_frequency(graph: nx.MultiDiGraph) -> Dict[str, int]:
    """Count publication occurrences across all edges.

    Args:
        graph: Record graph with edge 'publications' attributes

    Returns:
        Dictionary mapping normalized publication ID to edge count
    """
    pub_counts: Dict[str, int] = {}
    for u, v, data in graph.edges(data=True):
        for pub in data.get('publications', []):
            normalized = normalize_publication_id(pub)
            if normalized:
                pub_counts[normalized] = pub_counts.get(normalized, 0) + 1
    return pub_counts
