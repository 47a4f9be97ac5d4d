import pytest
from datetime import date

from genogram_patterns.genogram_date import PartialDate
from genogram_patterns.member import FamilyMember, Sex


@pytest.mark.parametrize("value,expected", [
    ("M", Sex.MALE),
    ("f", Sex.FEMALE),
    ("other", Sex.OTHER),
    (None, Sex.UNKNOWN),
    (Sex.FEMALE, Sex.FEMALE),
    ("x", Sex.UNKNOWN),
])
def test_sex_coerce(value, expected):
    """Test coercion of sex values."""
    assert Sex.coerce(value) is expected


def test_member_defaults():
    """Test derived display name and coerced fields."""
    member = FamilyMember(given_name="Juan", family_name="Pérez", sex="M", birth_date="1950-03-04")

    assert member.display_name == "Juan Pérez"
    assert member.sex is Sex.MALE
    assert member.birth_date == PartialDate(1950, 3, 4)
    assert member.is_alive
    assert member.id


def test_member_ids_unique():
    """Test that generated ids differ."""
    assert FamilyMember().id != FamilyMember().id


def test_explicit_display_name_kept():
    """Test that an explicit display name is not overwritten."""
    assert FamilyMember(given_name="Juan", display_name="Abuelo Juan").display_name == "Abuelo Juan"


def test_age_at():
    """Test age at a reference date and at death."""
    living = FamilyMember(birth_date="1950-06-01")
    deceased = FamilyMember(birth_date="1920", death_date="1958", is_alive=False)

    assert living.age_at(date(2000, 5, 31)) == 49
    assert living.age_at("2000-06-01") == 50
    assert deceased.age_at("2020") == 38
    assert FamilyMember().age_at("2000") is None


def test_short_display_name():
    """Test that only the first two words are kept."""
    assert FamilyMember(given_name="Juan Carlos", family_name="Pérez López").short_display_name == "Juan Carlos"


def test_to_dict_from_dict():
    """Test JSON-compatible serialization."""
    member = FamilyMember(id="M1", given_name="Ana", family_name="Ruiz", sex=Sex.FEMALE,
                          birth_date="1960-02", tags=("grandmother",))
    data = member.to_dict()

    assert data['sex'] == "female"
    assert data['birth_date'] == "1960-02"
    assert data['tags'] == ["grandmother"]
    assert FamilyMember.from_dict(data) == member


def test_member_is_immutable():
    """Test that members are frozen."""
    with pytest.raises(AttributeError):
        FamilyMember().given_name = "changed"
