import logging
from datetime import datetime, timedelta, timezone

import pytest

from weaviate_query.exceptions import ValidationError
from weaviate_query.filter import (
    Boolean,
    BooleanList,
    Combinator,
    CombinatorKind,
    Date,
    GeoRange,
    Integer,
    IntegerList,
    Number,
    NumberList,
    Operator,
    Predicate,
    Text,
    TextList,
    all_of,
    any_of,
    by_id,
    by_property,
    by_ref,
    compile_filter,
    contains_any,
    equal,
    greater_or_equal,
    greater_than,
    is_null,
    less_or_equal,
    like,
    not_,
    operator_name,
    render_where,
    text_list,
    to_path,
    within_geo_range,
)
from weaviate_query.query import get, render_query


class TestValues:
    def test_wire_fields(self):
        assert Text("a").WIRE_FIELD == "valueText"
        assert Integer(1).WIRE_FIELD == "valueInt"
        assert Number(1.5).WIRE_FIELD == "valueNumber"
        assert Boolean(True).WIRE_FIELD == "valueBoolean"
        assert Date("2024-01-01T00:00:00Z").WIRE_FIELD == "valueDate"
        assert TextList(["a"]).WIRE_FIELD == "valueTextArray"
        assert IntegerList([1]).WIRE_FIELD == "valueIntArray"
        assert NumberList([1.0]).WIRE_FIELD == "valueNumberArray"
        assert BooleanList([True]).WIRE_FIELD == "valueBooleanArray"
        assert GeoRange(0, 0, 1).WIRE_FIELD == "valueGeoRange"

    def test_integer_rejects_bool_and_float(self):
        with pytest.raises(ValidationError):
            Integer(True)
        with pytest.raises(ValidationError):
            Integer(1.5)

    def test_integer_range_is_int64(self):
        assert Integer(2 ** 63 - 1).to_wire() == 2 ** 63 - 1
        assert Integer(-2 ** 63).to_wire() == -2 ** 63
        with pytest.raises(ValidationError, match="64-bit"):
            Integer(2 ** 63)
        with pytest.raises(ValidationError, match="64-bit"):
            Integer(-2 ** 63 - 1)

    def test_integer_list_range_is_int64(self):
        assert IntegerList([-2 ** 63, 0, 2 ** 63 - 1]).to_wire() == [-2 ** 63, 0, 2 ** 63 - 1]
        with pytest.raises(ValidationError):
            IntegerList([1, 2 ** 63])
        with pytest.raises(ValidationError):
            IntegerList([-2 ** 63 - 1])

    def test_number_rejects_non_finite(self):
        with pytest.raises(ValidationError):
            Number(float("nan"))
        assert Number(3).to_wire() == 3.0

    def test_text_rejects_non_string(self):
        with pytest.raises(ValidationError):
            Text(5)

    def test_boolean_rejects_int(self):
        with pytest.raises(ValidationError):
            Boolean(1)

    def test_date_from_naive_datetime_is_utc(self):
        assert Date(datetime(2024, 1, 2, 3, 4, 5)).to_wire() == "2024-01-02T03:04:05+00:00"

    def test_date_keeps_offset(self):
        moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert Date(moment).to_wire() == "2024-01-02T03:04:05+02:00"

    def test_date_string_passthrough(self):
        assert Date("2024-01-01T00:00:00Z").to_wire() == "2024-01-01T00:00:00Z"

    def test_lists(self):
        assert TextList(["a", "b"]).to_wire() == ["a", "b"]
        assert text_list("a", "b") == TextList(("a", "b"))
        assert NumberList([1, 2.5]).to_wire() == [1.0, 2.5]
        with pytest.raises(ValidationError):
            IntegerList([1, "2"])
        with pytest.raises(ValidationError):
            BooleanList([True, 0])

    def test_geo_range_validation(self):
        with pytest.raises(ValidationError):
            GeoRange(91, 0, 10)
        with pytest.raises(ValidationError):
            GeoRange(0, 181, 10)
        with pytest.raises(ValidationError):
            GeoRange(0, 0, -1)


class TestPaths:
    def test_dotted_and_sequence(self):
        assert to_path("author.name") == ("author", "name")
        assert to_path(["author", "name"]) == ("author", "name")

    @pytest.mark.parametrize("path", ["", "a..b", [], ["a", ""]])
    def test_empty_segments_rejected(self, path):
        with pytest.raises(ValidationError):
            to_path(path)


class TestModel:
    def test_predicate_requires_typed_value(self):
        with pytest.raises(ValidationError, match="typed Value"):
            Predicate(("status",), Operator.EQUAL, "published")

    def test_predicate_accepts_operator_symbol(self):
        assert Predicate("status", "equal", Text("x")).operator is Operator.EQUAL

    def test_unknown_operator_symbol_is_kept(self):
        assert Predicate("title", "starts_with", Text("x")).operator == "starts_with"

    @pytest.mark.parametrize("operator", [
        "starts-with",
        "1st",
        "Equal, valueText: \"x\"} ) { secret } x(where: {operator: Equal",
        "Like valueText",
        "_",
    ])
    def test_unknown_operator_must_be_a_name(self, operator):
        with pytest.raises(ValidationError, match="Invalid operator"):
            Predicate("title", operator, Text("x"))

    def test_not_requires_exactly_one_operand(self):
        a = equal("a", Text("1"))
        b = equal("b", Text("2"))
        with pytest.raises(ValidationError):
            Combinator(CombinatorKind.NOT, (a, b))
        with pytest.raises(ValidationError):
            Combinator(CombinatorKind.NOT, ())

    def test_and_or_require_operands(self):
        with pytest.raises(ValidationError):
            all_of()
        with pytest.raises(ValidationError):
            any_of()

    def test_operands_must_be_expressions(self):
        with pytest.raises(ValidationError):
            Combinator(CombinatorKind.AND, ("status = published",))

    def test_unknown_combinator(self):
        with pytest.raises(ValidationError):
            Combinator("xor", (equal("a", Text("1")),))


class TestCompiler:
    def test_equal_predicate(self):
        assert compile_filter(equal("status", Text("published"))) == {
            "path": ["status"],
            "operator": "Equal",
            "valueText": "published",
        }

    @pytest.mark.parametrize("operator, expected", [
        (Operator.EQUAL, "Equal"),
        (Operator.NOT_EQUAL, "NotEqual"),
        (Operator.LESS_THAN, "LessThan"),
        (Operator.LESS_OR_EQUAL, "LessThanEqual"),
        (Operator.GREATER_THAN, "GreaterThan"),
        (Operator.GREATER_OR_EQUAL, "GreaterThanEqual"),
        (Operator.LIKE, "Like"),
        (Operator.CONTAINS_ANY, "ContainsAny"),
        (Operator.CONTAINS_ALL, "ContainsAll"),
        (Operator.CONTAINS_NONE, "ContainsNone"),
        (Operator.IS_NULL, "IsNull"),
        (Operator.WITHIN_GEO_RANGE, "WithinGeoRange"),
    ])
    def test_operator_table(self, operator, expected):
        assert operator_name(operator) == expected

    def test_unknown_operator_is_camelized_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            compiled = compile_filter(by_property("title", "starts_with", Text("Intro")))
        assert compiled["operator"] == "StartsWith"
        assert "starts_with" in caplog.text

    def test_unknown_operator_renders_valid_graphql(self, parse_query):
        query = get("Article").with_fields("title").with_filter(by_property("title", "starts_with", Text("Intro")))
        _, _, arguments = parse_query(render_query(query))
        assert arguments["where"] == {"path": ["title"], "operator": "StartsWith", "valueText": "Intro"}

    def test_and_combinator(self):
        expr = all_of(equal("status", Text("published")), greater_than("views", Integer(100)))
        assert compile_filter(expr) == {
            "operator": "And",
            "operands": [
                {"path": ["status"], "operator": "Equal", "valueText": "published"},
                {"path": ["views"], "operator": "GreaterThan", "valueInt": 100},
            ],
        }

    def test_nested_or_and_not(self):
        expr = any_of(not_(equal("archived", Boolean(True))), less_or_equal("price", Number(9.99)))
        compiled = compile_filter(expr)
        assert compiled["operator"] == "Or"
        assert compiled["operands"][0] == {
            "operator": "Not",
            "operands": [{"path": ["archived"], "operator": "Equal", "valueBoolean": True}],
        }
        assert compiled["operands"][1] == {"path": ["price"], "operator": "LessThanEqual", "valueNumber": 9.99}

    def test_render_where_text(self):
        assert render_where(equal("status", Text("published"))) == \
            '{path: ["status"], operator: Equal, valueText: "published"}'

    def test_render_where_is_deterministic(self):
        expr = all_of(equal("a", Text("x")), any_of(greater_or_equal("b", Integer(1)), is_null("c")))
        assert render_where(expr) == render_where(expr)

    def test_reference_path(self):
        compiled = compile_filter(by_ref("hasAuthor", "Author", "name", Operator.EQUAL, Text("Ada")))
        assert compiled["path"] == ["hasAuthor", "Author", "name"]

    def test_by_id(self):
        assert compile_filter(by_id(Operator.EQUAL, "abc")) == {
            "path": ["id"], "operator": "Equal", "valueText": "abc",
        }

    def test_geo_range(self):
        compiled = compile_filter(within_geo_range("location", 52.37, 4.89, 1000))
        assert compiled["operator"] == "WithinGeoRange"
        assert compiled["valueGeoRange"] == {
            "geoCoordinates": {"latitude": 52.37, "longitude": 4.89},
            "distance": {"max": 1000.0},
        }

    def test_like_and_contains(self):
        assert compile_filter(like("title", "Intro*"))["valueText"] == "Intro*"
        compiled = compile_filter(contains_any("tags", text_list("ai", "ml")))
        assert compiled == {"path": ["tags"], "operator": "ContainsAny", "valueTextArray": ["ai", "ml"]}

    def test_is_null(self):
        assert compile_filter(is_null("summary", False))["valueBoolean"] is False

    def test_escaped_text_stays_inside_literal(self):
        text = render_where(equal("title", Text('he said "hi"')))
        assert text == '{path: ["title"], operator: Equal, valueText: "he said \\"hi\\""}'
