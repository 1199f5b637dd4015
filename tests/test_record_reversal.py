"""Tests for record reversal and query-direction orientation."""

from biograph_records.core.association import Association
from biograph_records.core.record import Record
from fixtures import StubQueryEdge, make_api_record, make_scenario_record


class TestReverse:
    """Reversal re-derives direction-dependent fields."""

    def test_predicate_inverted_and_nodes_swapped(self):
        """Reversed record uses the biolink inverse and swapped endpoints."""
        record = Record(make_api_record(predicate="biolink:treats"))
        reversed_record = record.reverse()

        assert reversed_record.predicate == "biolink:treated_by"
        assert reversed_record.subject.curie == "MONDO:0005148"
        assert reversed_record.object.curie == "CHEBI:6801"
        assert reversed_record.reverse_to_execution is True

    def test_query_node_binding_follows_nodes(self):
        """Swapped endpoints keep their original query nodes."""
        record = Record(make_api_record())
        reversed_record = record.reverse()

        assert reversed_record.subject.q_node_id == "n1"
        assert reversed_record.object.q_node_id == "n0"

    def test_involution(self):
        """Reversing twice restores the original record."""
        record = Record(make_api_record(predicate="biolink:treats"))
        restored = record.reverse().reverse()

        assert restored.record_hash == record.record_hash
        assert restored.predicate == record.predicate
        assert restored.qualifiers == record.qualifiers
        assert restored.subject.curie == record.subject.curie
        assert restored.object.curie == record.object.curie
        assert restored.subject.q_node_id == record.subject.q_node_id
        assert restored.reverse_to_execution is False

    def test_mixed_case_known_predicate_involution(self):
        """Known predicates are spelled canonically, so reversing twice keeps the hash."""
        record = Record(make_api_record(predicate="biolink:Treats"))
        assert record.predicate == "biolink:treats"

        reversed_record = record.reverse()
        assert reversed_record.predicate == "biolink:treated_by"

        restored = reversed_record.reverse()
        assert restored.predicate == record.predicate
        assert restored.record_hash == record.record_hash

    def test_non_string_predicate_qualifier(self):
        """A predicate qualifier without a string value is carried through reversal."""
        record = Record(
            make_api_record(qualifiers={"qualified_predicate": None}),
            association=Association(predicate="affects"),
        )
        reversed_record = record.reverse()

        assert reversed_record.predicate == "biolink:affected_by"
        assert reversed_record.qualifiers == {"biolink:qualified_predicate": None}
        assert reversed_record.reverse().record_hash == record.record_hash

    def test_scenario_reversal(self):
        """An unknown predicate is kept, and reversal still round-trips."""
        record = Record(make_scenario_record())
        reversed_record = record.reverse()

        assert reversed_record.predicate == "biolink:somePredicate"
        assert reversed_record.subject.curie == "prefix:2"
        assert reversed_record.object.curie == "prefix:1"

        restored = reversed_record.reverse()
        assert restored.subject.curie == "prefix:1"
        assert restored.record_hash == record.record_hash

    def test_symmetric_predicate(self):
        """Symmetric predicates are their own inverse."""
        record = Record(make_api_record(predicate="biolink:interacts_with"))
        assert record.reverse().predicate == "biolink:interacts_with"

    def test_reverse_does_not_mutate(self):
        """The receiver keeps its direction and content."""
        record = Record(make_api_record(qualifiers={"object_aspect_qualifier": "activity"}))
        before = record.freeze_verbose()
        record.reverse()
        assert record.freeze_verbose() == before


class TestQualifierReversal:
    """Direction-dependent qualifier rewriting."""

    QUALIFIERS = {
        "biolink:object_aspect_qualifier": "activity",
        "biolink:object_direction_qualifier": "decreased",
        "biolink:qualified_predicate": "biolink:causes",
    }

    def test_roles_swapped_and_predicate_inverted(self):
        """Subject/object qualifier roles swap; qualified predicates invert."""
        record = Record(make_api_record(predicate="biolink:affects", qualifiers=dict(self.QUALIFIERS)))
        reversed_record = record.reverse()

        assert reversed_record.predicate == "biolink:affected_by"
        assert reversed_record.qualifiers == {
            "biolink:subject_aspect_qualifier": "activity",
            "biolink:subject_direction_qualifier": "decreased",
            "biolink:qualified_predicate": "biolink:caused_by",
        }

    def test_qualifier_involution(self):
        """Qualifiers return to their original form after two reversals."""
        record = Record(make_api_record(predicate="biolink:affects", qualifiers=dict(self.QUALIFIERS)))
        restored = record.reverse().reverse()

        assert restored.qualifiers == record.qualifiers
        assert restored.record_hash == record.record_hash

    def test_association_qualifiers_reversed(self):
        """Qualifiers held only by the Association are rewritten too."""
        association = Association(
            predicate="affects",
            qualifiers={"subject_aspect_qualifier": "expression"},
            input_id="NCBIGene",
            input_type="Gene",
            output_id="CHEBI",
            output_type="SmallMolecule",
        )
        record = Record(make_api_record(), association=association)
        reversed_record = record.reverse()

        assert reversed_record.association.qualifiers == {"object_aspect_qualifier": "expression"}
        assert reversed_record.qualifiers == {"biolink:object_aspect_qualifier": "expression"}
        assert reversed_record.association.input_id == "CHEBI"
        assert reversed_record.association.output_type == "Gene"
        assert reversed_record.association.predicate == "affected_by"


class TestQueryDirection:
    """Orientation to the query edge's direction."""

    def test_not_reversed_returns_self(self):
        """Records on a forward query edge are returned unchanged."""
        record = Record(make_api_record(), q_edge=StubQueryEdge(reversed_=False))
        assert record.query_direction() is record

    def test_reversed_edge_returns_reversed_record(self):
        """Records on a reversed query edge are flipped."""
        record = Record(make_api_record(predicate="biolink:treats"), q_edge=StubQueryEdge(reversed_=True))
        oriented = record.query_direction()

        assert oriented is not record
        assert oriented.predicate == "biolink:treated_by"
        assert oriented.subject.curie == record.object.curie
        assert oriented.reverse_to_execution is True

    def test_fake_edge_is_never_reversed(self):
        """Ad-hoc records are already in query direction."""
        record = Record(make_scenario_record())
        assert record.query_direction() is record
