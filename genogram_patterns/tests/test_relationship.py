import pytest

from genogram_patterns.relationship import Relationship, RelationshipType


def test_relationship_coercion():
    """Test that type and dates are coerced."""
    rel = Relationship(type="ex_partner", from_member_id="A", to_member_id="B", start_date="1970", end_date="1980-02")

    assert rel.type is RelationshipType.EX_PARTNER
    assert rel.start_date.year == 1970
    assert not rel.is_active


def test_active_without_end_date():
    """Test that relationships without an end date are active."""
    assert Relationship(type=RelationshipType.PARTNER, from_member_id="A", to_member_id="B").is_active


@pytest.mark.parametrize("rel_type,direct", [
    (RelationshipType.PARENT, True),
    (RelationshipType.GRANDCHILD, True),
    (RelationshipType.COUSIN, False),
    (RelationshipType.PARTNER, False),
])
def test_direct_lineage(rel_type, direct):
    """Test the direct lineage classification."""
    assert rel_type.is_direct_lineage is direct


def test_unknown_type_rejected():
    """Test that an unknown relationship type raises ValueError."""
    with pytest.raises(ValueError):
        Relationship(type="godparent", from_member_id="A", to_member_id="B")


def test_to_dict_from_dict():
    """Test JSON-compatible serialization."""
    rel = Relationship(type=RelationshipType.PARENT, from_member_id="CHILD", to_member_id="PARENT", id="R1")
    data = rel.to_dict()

    assert data == {
        'id': "R1",
        'type': "parent",
        'from_member_id': "CHILD",
        'to_member_id': "PARENT",
        'start_date': None,
        'end_date': None,
        'notes': "",
    }
    assert Relationship.from_dict(data) == rel
