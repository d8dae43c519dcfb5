import pytest
from graphql import parse
from graphql.utilities import value_from_ast_untyped

from weaviate_query.exceptions import ValidationError
from weaviate_query.graphql import (
    BlockString,
    EnumValue,
    block_string,
    is_name,
    quote_string,
    render_arguments,
    render_document,
    render_value,
    validate_name,
    validate_selection,
)


def _decode(literal):
    """Decode a GraphQL value literal by embedding it as an argument."""
    document = parse("{ f(v: " + literal + ") }")
    return value_from_ast_untyped(document.definitions[0].selection_set.selections[0].arguments[0].value)


class TestQuoteString:
    @pytest.mark.parametrize("text", [
        'he said "hi"',
        "back\\slash",
        "line one\nline two",
        "tab\there",
        "ünïcödé and emoji 🚀",
        '"}) { __typename } x(a: "',
    ])
    def test_round_trips_through_parser(self, text):
        assert _decode(quote_string(text)) == text

    def test_escapes_quotes(self):
        assert quote_string('he said "hi"') == '"he said \\"hi\\""'

    def test_keeps_unicode_unescaped(self):
        assert quote_string("café") == '"café"'


class TestBlockString:
    @pytest.mark.parametrize("text", [
        "Summarize {title}",
        'Say """hi""" politely',
        'Ends with a quote "',
        "Ends with a backslash \\",
    ])
    def test_round_trips_through_parser(self, text):
        assert _decode(block_string(text)) == text

    def test_escapes_triple_quotes(self):
        assert block_string('a """ b') == '"""a \\""" b"""'

    def test_control_characters_fall_back_to_quoted_string(self):
        assert block_string("bell\x07") == quote_string("bell\x07")

    @pytest.mark.parametrize("text", [
        "Summarize:\n    {title}\n    {content}\n",
        "\nStarts with a blank line",
        "Ends with a blank line\n\n",
        "Windows\r\nline endings",
        "\tTabbed first line\n\tand second",
    ])
    def test_text_the_parser_would_change_round_trips(self, text):
        assert _decode(block_string(text)) == text

    def test_indented_lines_fall_back_to_quoted_string(self):
        text = "Summarize:\n    {title}\n    {content}\n"
        assert block_string(text) == quote_string(text)

    def test_plain_multi_line_text_stays_a_block_string(self):
        assert block_string("Line one\nLine two") == '"""Line one\nLine two"""'


class TestRenderValue:
    def test_scalars(self):
        assert render_value(None) == "null"
        assert render_value(True) == "true"
        assert render_value(False) == "false"
        assert render_value(42) == "42"
        assert render_value(0.5) == "0.5"
        assert render_value("x") == '"x"'

    def test_enum_value_is_bare(self):
        assert render_value(EnumValue("Equal")) == "Equal"

    def test_block_string_value(self):
        assert render_value(BlockString("hi")) == '"""hi"""'

    def test_nested_mapping_and_list(self):
        value = {"path": ["status"], "operator": EnumValue("Equal"), "valueText": "published"}
        assert render_value(value) == '{path: ["status"], operator: Equal, valueText: "published"}'

    def test_non_finite_float_rejected(self):
        with pytest.raises(ValidationError):
            render_value(float("nan"))
        with pytest.raises(ValidationError):
            render_value(float("inf"))

    def test_invalid_mapping_key_rejected(self):
        with pytest.raises(ValidationError):
            render_value({"bad-key": 1})

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            render_value(object())


def test_names():
    assert is_name("Article")
    assert is_name("_additional")
    assert not is_name("1abc")
    assert not is_name("bad-name")
    assert not is_name("")
    assert validate_name("Article", "collection name") == "Article"
    with pytest.raises(ValidationError, match="Invalid collection name"):
        validate_name("Art icle", "collection name")


def test_render_arguments():
    assert render_arguments([]) == ""
    assert render_arguments([("limit", 5), ("tenant", "t1")]) == '(limit: 5, tenant: "t1")'


def test_render_document_layout():
    text = render_document("Get", "Article", "(limit: 1)", ["title", ("_additional", ["id"])])
    assert text == (
        "{\n"
        "  Get {\n"
        "    Article(limit: 1) {\n"
        "      title\n"
        "      _additional {\n"
        "        id\n"
        "      }\n"
        "    }\n"
        "  }\n"
        "}\n"
    )
    parse(text)


def test_render_document_custom_indent():
    text = render_document("Aggregate", "Article", "", [("meta", ["count"])], indent="\t")
    assert "\tAggregate {\n\t\tArticle {\n\t\t\tmeta {\n\t\t\t\tcount\n" in text


class TestValidateSelection:
    @pytest.mark.parametrize("text", [
        "title",
        "  title  ",
        "_additional { id certainty }",
        "hasAuthor { ... on Author { name } }",
        'hasAuthor { name(arg: "}") }',
        'hasAuthor { name(arg: """ { """) }',
    ])
    def test_accepts_single_selection(self, text):
        assert validate_selection(text, "field") == text

    @pytest.mark.parametrize("text", [
        "",
        None,
        "1title",
        "title name",
        "title } Secret { password",
        "title { name } other { name }",
        "title { name",
        "title { name } }",
        "title # comment",
        "title { name # }\n}",
        'title { name(arg: "}) }',
        'title { name(arg: "a\n}") }',
    ])
    def test_rejects_anything_else(self, text):
        with pytest.raises(ValidationError, match="Invalid field"):
            validate_selection(text, "field")
