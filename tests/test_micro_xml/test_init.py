"""Test module for micro_xml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import micro_xml

    # Assert
    assert micro_xml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import micro_xml

    # Assert
    assert isinstance(micro_xml.__version__, str)
    assert micro_xml.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import micro_xml

    # Assert
    assert micro_xml.__author__ == "Micro XML Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import micro_xml

    # Assert
    for name in micro_xml.__all__:
        assert hasattr(micro_xml, name), name
    assert {"to_document", "Element", "Document", "Translator"} <= set(micro_xml.__all__)
