import pytest


@pytest.mark.parametrize(
    "symbol_name",
    [
        "FamilyMember",
        "FamilyEvent",
        "Relationship",
        "EventKind",
        "Lineage",
        "PartialDate",
        "CountryResolver",
        "Pattern",
        "PatternEngine",
        "PatternDetection",
        "ContentCatalog",
    ],
)
def test_import_symbol(symbol_name):
    """Test that each key symbol can be imported from genogram_patterns."""
    module = __import__("genogram_patterns", fromlist=[symbol_name])
    symbol = getattr(module, symbol_name, None)
    assert symbol is not None, f"{symbol_name} should be importable from genogram_patterns"


def test_all_exports_resolve():
    """Test that every name in __all__ exists."""
    import genogram_patterns
    for name in genogram_patterns.__all__:
        assert hasattr(genogram_patterns, name)
