"""BioGraph Records: knowledge graph edge records for federated biomedical APIs."""

__version__ = "0.1.0"

from .core import Association, Record, RecordNode, RecordGraphBuilder
from .config import RecordConfig

__all__ = [
    "__version__",
    "Association",
    "Record",
    "RecordNode",
    "RecordGraphBuilder",
    "RecordConfig",
]
