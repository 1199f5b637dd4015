"""Query graph bindings consumed by records.

Records bind their subject/object to query nodes and ask their query edge for
direction and predicate inversion. The real query graph lives in the
orchestration layer; these protocols describe the capabilities a record uses,
and the fake implementations stand in for records built by hand or thawed
from a frozen form without any query context.
"""

from copy import deepcopy
from typing import Any, Dict, Optional
from typing import Protocol, runtime_checkable

from biograph_records.utils.biolink_predicates import get_reversed_predicate
from biograph_records.utils.hashing import hash_string

FAKE_EDGE_ID = "fakeEdge"


@runtime_checkable
class QueryNode(Protocol):
    """Query node a record endpoint is bound to."""

    def get_id(self) -> Optional[str]:
        ...

    def is_set(self) -> bool:
        ...


@runtime_checkable
class QueryEdge(Protocol):
    """Query edge a record was retrieved for."""

    def get_input_node(self) -> QueryNode:
        ...

    def get_output_node(self) -> QueryNode:
        ...

    def is_reversed(self) -> bool:
        ...

    def get_hashed_edge_representation(self) -> str:
        ...

    def get_reversed_predicate(self, predicate: str) -> str:
        ...


class FakeQueryNode:
    """Query node projected from a frozen record endpoint."""

    def __init__(self, node: Dict[str, Any]):
        self._node = node

    def get_id(self) -> Optional[str]:
        return self._node.get("qNodeID")

    def is_set(self) -> bool:
        return bool(self._node.get("isSet", False))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class FakeQueryEdge:
    """Query edge synthesized for records that were not retrieved by a query.

    The hashed representation only gives ad-hoc records some identity; it is
    not comparable with a real query edge's representation.
    """

    def __init__(self, record: Dict[str, Any]):
        # private copy of the bindings this edge reads back
        self._record = {
            key: deepcopy(record.get(key)) for key in ("subject", "object", "predicate")
        }
        self._input_node = FakeQueryNode(self._record.get("subject") or {})
        self._output_node = FakeQueryNode(self._record.get("object") or {})

    def get_id(self) -> str:
        return FAKE_EDGE_ID

    def get_input_node(self) -> FakeQueryNode:
        return self._input_node

    def get_output_node(self) -> FakeQueryNode:
        return self._output_node

    def is_reversed(self) -> bool:
        return False

    def get_hashed_edge_representation(self) -> str:
        subject = self._record.get("subject") or {}
        obj = self._record.get("object") or {}
        return hash_string(
            _as_text(subject.get("semanticType"))
            + _as_text(self._record.get("predicate"))
            + _as_text(obj.get("semanticType"))
            + _as_text(subject.get("equivalentCuries") or obj.get("equivalentCuries"))
        )

    def get_reversed_predicate(self, predicate: str) -> str:
        return get_reversed_predicate(predicate)


def make_fake_query_edge(record: Dict[str, Any]) -> FakeQueryEdge:
    """Build a stand-in query edge from a raw or frozen record."""
    return FakeQueryEdge(record)
