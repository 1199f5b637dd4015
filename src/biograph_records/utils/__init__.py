"""Utility modules for BioGraph Records.

Provides:
- Deterministic hashing
- Input validation for records, packages, and CURIEs
- Publication id normalization
- Knowledge source (infores) provenance helpers

The biolink predicate lookup lives in ``biograph_records.utils.biolink_predicates``
and is imported directly (it depends on the config package).
"""

from .hashing import hash_string
from .validators import (
    ValidationError,
    validate_curie,
    validate_record_shape,
    validate_record_package,
)
from .publication_utils import (
    get_publication_frequency,
    normalize_publication_id,
    normalize_publications,
)
from .infores_utils import (
    BIOTHINGS_EXPLORER_INFORES,
    SERVICE_PROVIDER_INFORES,
    build_source_chain,
    extract_unique_sources,
)

__all__ = [
    "hash_string",
    "ValidationError",
    "validate_curie",
    "validate_record_shape",
    "validate_record_package",
    "get_publication_frequency",
    "normalize_publication_id",
    "normalize_publications",
    "BIOTHINGS_EXPLORER_INFORES",
    "SERVICE_PROVIDER_INFORES",
    "build_source_chain",
    "extract_unique_sources",
]
