"""Tests for conversion to lxml elements."""

import pytest

from micro_xml.api import is_lxml_available, to_lxml
from micro_xml.tree import Document, Element

ET = pytest.importorskip("lxml.etree")


@pytest.fixture
def fuc() -> Element:
    root = Element("fuc")
    root.attributes.set("codigo", "M4310")
    Element("nome", root, "Programação Avançada")
    avaliacao = Element("avaliacao", root)
    for nome, peso in (("Quizzes", "20%"), ("Projeto", "80%")):
        componente = Element("componente", avaliacao)
        componente.attributes.set("nome", nome)
        componente.attributes.set("peso", peso)
    return root


class TestLxmlInterop:
    """Test to_lxml conversion."""

    def test_lxml_available(self) -> None:
        """Test availability is reported once lxml imports."""
        assert is_lxml_available()

    def test_convert_document(self, fuc: Element) -> None:
        """Test structure, attributes and text are carried over."""
        converted = to_lxml(Document(fuc))

        assert converted.tag == "fuc"
        assert converted.get("codigo") == "M4310"
        assert converted.find("nome").text == "Programação Avançada"
        assert [c.get("peso") for c in converted.iter("componente")] == ["20%", "80%"]

    def test_attribute_order_preserved(self, fuc: Element) -> None:
        """Test attributes keep their insertion order."""
        componente = to_lxml(fuc).find("avaliacao/componente")
        assert list(componente.attrib.keys()) == ["nome", "peso"]

    def test_convert_subtree(self, fuc: Element) -> None:
        """Test an element other than the root converts on its own."""
        avaliacao = fuc.children[1]
        converted = to_lxml(avaliacao)

        assert converted.tag == "avaliacao"
        assert len(converted) == 2

    def test_serializes_with_lxml(self, fuc: Element) -> None:
        """Test the converted tree is a regular lxml element."""
        rendered = ET.tostring(to_lxml(fuc), encoding="unicode")
        assert rendered.startswith('<fuc codigo="M4310">')
        assert "<componente nome=\"Quizzes\" peso=\"20%\"/>" in rendered
