import pytest
from pathlib import Path

from genogram_patterns.places import CountryResolver, default_resolver


@pytest.fixture(scope="module")
def resolver():
    return CountryResolver()


@pytest.mark.parametrize("place,name,code", [
    ("Madrid, Spain", "Spain", "ES"),
    ("Madrid, España", "Spain", "ES"),
    ("New York, USA", "United States", "US"),
    ("London, England", "United Kingdom", "GB"),
    ("Buenos Aires, argentina", "Argentina", "AR"),
    ("Lyon, FR", "France", "FR"),
    ("Porto, PRT", "Portugal", "PT"),
    ("Caracas, Venezuela", "Venezuela, Bolivarian Republic of", "VE"),
    ("Bogota, Colombiaa", "Colombia", "CO"),
])
def test_lookup(resolver, place, name, code):
    """Test substitution, exact, code and fuzzy lookups."""
    assert resolver.lookup(place) == (name, code)
    assert resolver.country_name(place) == name
    assert resolver.country_code(place) == code


@pytest.mark.parametrize("place", [None, "", "   ", "Somewhere far away"])
def test_lookup_unresolvable(resolver, place):
    """Test that unresolvable places return None."""
    assert resolver.lookup(place) is None


def test_extra_substitutions():
    """Test that substitutions passed to the constructor are used."""
    resolver = CountryResolver(substitutions={"Nueva Granada": "Colombia"})

    assert resolver.country_code("Bogota, Nueva Granada") == "CO"


def test_places_path_must_be_path():
    """Test that a str places path is rejected."""
    with pytest.raises(TypeError):
        CountryResolver(places_path="places.yaml")


def test_missing_places_file(tmp_path):
    """Test that a missing places file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        CountryResolver(places_path=tmp_path / "missing.yaml")


def test_invalid_places_file(tmp_path):
    """Test that malformed YAML raises ValueError."""
    path = tmp_path / "places.yaml"
    path.write_text("country_substitutions: [usa\n", encoding='utf-8')
    with pytest.raises(ValueError):
        CountryResolver(places_path=path)


def test_default_resolver_is_shared():
    """Test that the packaged resolver is built once."""
    assert default_resolver() is default_resolver()
    assert isinstance(default_resolver(), CountryResolver)
