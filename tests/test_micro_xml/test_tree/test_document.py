"""Tests for Document pretty-printing, bulk edits and micro-XPath queries."""

import logging

import pytest

from micro_xml.shared import DiagnosticSeverity, MicroXMLConfig
from micro_xml.tree import Document, Element


def build_plano() -> Element:
    """Build the course plan tree used across the document tests."""
    plano = Element("plano")
    curso = Element("curso", plano)
    curso.set_text("Mestrado em Engenharia Informática")
    fuc = Element("fuc", plano)
    fuc.attributes.set("codigo", "M4310")
    Element("nome", fuc, "Programação Avançada")
    Element("ects", fuc, "6.0")
    avaliacao = Element("avaliacao", fuc)
    quizzes = Element("componente", avaliacao)
    quizzes.attributes.set("nome", "Quizzes")
    quizzes.attributes.set("peso", "20%")
    projeto = Element("componente", avaliacao)
    projeto.attributes.set("nome", "Projeto")
    projeto.attributes.set("peso", "80%")
    return plano


PLANO_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    "<plano>\n"
    "\t<curso>Mestrado em Engenharia Informática</curso>\n"
    '\t<fuc codigo="M4310">\n'
    "\t\t<nome>Programação Avançada</nome>\n"
    "\t\t<ects>6.0</ects>\n"
    "\t\t<avaliacao>\n"
    '\t\t\t<componente nome="Quizzes" peso="20%"/>\n'
    '\t\t\t<componente nome="Projeto" peso="80%"/>\n'
    "\t\t</avaliacao>\n"
    "\t</fuc>\n"
    "</plano>"
)


@pytest.fixture
def plano() -> Element:
    """plano -> [curso, curso -> [cadeira]]"""
    root = Element("plano")
    Element("curso", root)
    second = Element("curso", root)
    Element("cadeira", second)
    return root


class TestDocumentCreation:
    """Test document construction."""

    def test_defaults(self, plano: Element) -> None:
        """Test the default declaration values."""
        document = Document(plano)
        assert document.root is plano
        assert document.version == 1.0
        assert document.encoding == "UTF-8"

    def test_root_must_be_element(self) -> None:
        """Test a non-element root is rejected."""
        with pytest.raises(TypeError):
            Document("plano")  # type: ignore[arg-type]

    def test_from_config(self, plano: Element) -> None:
        """Test the declaration follows the serialization config."""
        config = MicroXMLConfig().override(
            serialization__version=1.1, serialization__encoding="ISO-8859-1"
        )
        document = Document.from_config(plano, config)

        assert document.pretty_print().splitlines()[0] == (
            '<?xml version="1.1" encoding="ISO-8859-1"?>'
        )

    def test_document_aliases_tree(self, plano: Element) -> None:
        """Test edits made after construction show up in the output."""
        document = Document(plano)
        Element("extra", plano)
        assert "<extra/>" in document.pretty_print()


class TestPrettyPrint:
    """Test the tab-indented serializer."""

    def test_full_document(self) -> None:
        """Test the reference course plan renders exactly."""
        assert Document(build_plano(), 1.0, "UTF-8").pretty_print() == PLANO_XML

    def test_childless_root_self_closes(self) -> None:
        """Test a lone root renders on one line."""
        root = Element("plano")
        root.attributes.set("ano", "2024")
        assert Document(root).pretty_print() == (
            '<?xml version="1.0" encoding="UTF-8"?>\n<plano ano="2024"/>'
        )

    def test_root_with_text(self) -> None:
        """Test a root holding text renders inline."""
        assert Document(Element("nota", text="vinte")).pretty_print().endswith(
            "<nota>vinte</nota>"
        )

    def test_attribute_insertion_order(self) -> None:
        """Test attributes render in the order they were set."""
        root = Element("componente")
        root.attributes.set("peso", "20%")
        root.attributes.set("nome", "Quizzes")
        assert Document(root).pretty_print().endswith(
            '<componente peso="20%" nome="Quizzes"/>'
        )

    def test_no_trailing_newline(self, plano: Element) -> None:
        """Test the output ends with the root's closing tag."""
        assert Document(plano).pretty_print().endswith("</plano>")

    def test_subtree_document_indents_by_absolute_depth(self) -> None:
        """Test a document on a non-root element keeps each element's tree depth."""
        plano = Element("plano")
        fuc = Element("fuc", plano)
        Element("nome", fuc)

        assert Document(fuc).pretty_print() == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<fuc>\n"
            "\t\t<nome/>\n"
            "\t</fuc>"
        )

    def test_nested_subtree_document_lines(self) -> None:
        """Test deeper levels of a subtree document follow the same depths."""
        plano = build_plano()
        fuc = plano.children[1]

        rendered = Document(fuc).pretty_print().splitlines()

        assert rendered[1] == '<fuc codigo="M4310">'
        assert rendered[2] == "\t\t<nome>Programação Avançada</nome>"
        assert rendered[5] == '\t\t\t<componente nome="Quizzes" peso="20%"/>'
        assert rendered[-2] == "\t\t</avaliacao>"
        assert rendered[-1] == "\t</fuc>"


class TestBulkEdits:
    """Test the document-wide editing operations."""

    def test_set_attribute_everywhere(self, plano: Element) -> None:
        """Test every matching element receives the attribute."""
        document = Document(plano, 1.0, "UTF-8")
        document.set_attribute_everywhere("curso", "tipo", "diurno")

        for curso in plano.children:
            assert curso.attributes.names() == {"tipo"}
        assert len(plano.attributes) == 0

    def test_set_attribute_everywhere_overwrites(self, plano: Element) -> None:
        """Test an existing value is replaced."""
        document = Document(plano)
        document.set_attribute_everywhere("curso", "tipo", "diurno")
        document.set_attribute_everywhere("curso", "tipo", "noturno")
        assert plano.children[0].attributes.value("tipo") == "noturno"

    def test_rename_everywhere(self, plano: Element) -> None:
        """Test every matching element is renamed in place."""
        first, second = plano.children
        document = Document(plano)

        document.rename_everywhere("curso", "cadeira")

        assert plano.children == [first, second]
        assert [c.name for c in plano.children] == ["cadeira", "cadeira"]
        assert second.children[0].name == "cadeira"

    def test_remove_everywhere(self) -> None:
        """Test removed elements leave their parents and keep their children."""
        plano = Element("plano")
        curso = Element("curso", plano)
        second = Element("curso", plano)
        cadeira = Element("cadeira", second)
        document = Document(plano, 1.0, "UTF-8")

        document.remove_everywhere("curso")

        assert curso.parent is None
        assert second.children == []
        assert plano.children == [cadeira]
        assert cadeira.parent is plano
        assert document.micro_xpath("plano/cadeira") == ["<cadeira/>"]

    def test_remove_everywhere_nested_matches(self) -> None:
        """Test matches nested inside matches all end up removed."""
        root = Element("a")
        outer = Element("b", root)
        inner = Element("b", outer)
        leaf = Element("c", inner)

        Document(root).remove_everywhere("b")

        assert root.children == [leaf]
        assert leaf.parent is root

    def test_remove_attribute_everywhere(self, plano: Element) -> None:
        """Test the attribute disappears from every matching element."""
        document = Document(plano, 1.0, "UTF-8")
        document.set_attribute_everywhere("curso", "tipo", "diurno")

        document.remove_attribute_everywhere("curso", "tipo")

        assert plano.children[0].attributes.names() == set()
        assert plano.children[1].attributes.names() == set()

    def test_remove_missing_attribute_everywhere_is_noop(self, plano: Element) -> None:
        """Test removing an attribute nobody has changes nothing."""
        Document(plano).remove_attribute_everywhere("curso", "inexistente")
        assert all(len(c.attributes) == 0 for c in plano.children)


class TestMicroXPath:
    """Test the linear path query."""

    def test_matches_render_single_line(self) -> None:
        """Test matching elements are rendered in discovery order."""
        document = Document(build_plano(), 1.0, "UTF-8")
        assert document.micro_xpath("plano/fuc/avaliacao/componente") == [
            '<componente nome="Quizzes" peso="20%"/>',
            '<componente nome="Projeto" peso="80%"/>',
        ]

    def test_text_element_renders_inline(self) -> None:
        """Test a matched element with text is rendered with it."""
        document = Document(build_plano())
        assert document.micro_xpath("plano/fuc/nome") == [
            "<nome>Programação Avançada</nome>"
        ]

    def test_only_full_path_matches(self) -> None:
        """Test same-named elements at other paths are excluded."""
        plano = Element("plano")
        curso = Element("curso", plano)
        cadeira = Element("cadeira", curso)
        cadeira.attributes.set("ano", "2024")
        outra = Element("outra", plano)
        Element("cadeira", outra)

        document = Document(plano)

        assert document.micro_xpath("plano/curso/cadeira") == ['<cadeira ano="2024"/>']

    def test_nested_same_name_matches_once(self) -> None:
        """Test a repeated name along the path yields only the exact match."""
        a = Element("a")
        outer = Element("b", a)
        Element("b", outer)

        assert Document(a).micro_xpath("a/b/b") == ["<b/>"]

    def test_matched_parent_renders_without_children(self, plano: Element) -> None:
        """Test a matched element is rendered on one line even with children."""
        assert Document(plano).micro_xpath("plano/curso") == ["<curso/>", "<curso/>"]

    def test_root_mismatch_returns_empty(self) -> None:
        """Test a path not starting at the root's name yields nothing."""
        document = Document(build_plano())
        assert document.micro_xpath("curso/fuc/nome") == []
        assert document.diagnostics == []

    def test_path_without_separator(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a path without '/' is reported and yields nothing."""
        document = Document(build_plano(), correlation_id="xpath-1")

        with caplog.at_level(logging.WARNING, logger="micro_xml"):
            result = document.micro_xpath("plano")

        assert result == []
        assert "Invalid XPath string: plano. Must contain '/'" in caplog.text
        assert len(document.diagnostics) == 1
        diagnostic = document.diagnostics[0]
        assert diagnostic.severity == DiagnosticSeverity.WARNING
        assert diagnostic.component == "micro_xpath"
        assert diagnostic.correlation_id == "xpath-1"

    def test_no_match_returns_empty(self) -> None:
        """Test a well-formed path with no match yields an empty list."""
        assert Document(build_plano()).micro_xpath("plano/fuc/inexistente") == []


class TestDocumentUtilities:
    """Test iteration and snapshots."""

    def test_iter_elements(self, plano: Element) -> None:
        """Test elements are listed in pre-order."""
        names = [e.name for e in Document(plano).iter_elements()]
        assert names == ["plano", "curso", "curso", "cadeira"]

    def test_to_dict(self, plano: Element) -> None:
        """Test the snapshot includes the declaration and the tree."""
        snapshot = Document(plano, 1.0, "UTF-8").to_dict()
        assert snapshot["version"] == 1.0
        assert snapshot["encoding"] == "UTF-8"
        assert snapshot["root"]["name"] == "plano"
