import pytest

from weaviate_query.aggregate import AggregateDescriptor, Metric, PropertyMetrics, over_all, render_aggregate
from weaviate_query.exceptions import ValidationError
from weaviate_query.filter import Text, equal
from weaviate_query.query import Bm25, FetchById, Hybrid, NearText
from weaviate_query.render_config import RendererConfig


def test_grouped_property_metrics_document():
    agg = (AggregateDescriptor("Product")
           .with_meta_metrics(Metric.COUNT)
           .with_property_metrics("price", Metric.SUM, Metric.MEAN)
           .with_group_by("category"))
    assert render_aggregate(agg) == (
        "{\n"
        "  Aggregate {\n"
        '    Product(groupBy: ["category"]) {\n'
        "      groupedBy {\n"
        "        path\n"
        "        value\n"
        "      }\n"
        "      meta {\n"
        "        count\n"
        "      }\n"
        "      price {\n"
        "        sum\n"
        "        mean\n"
        "      }\n"
        "    }\n"
        "  }\n"
        "}\n"
    )


def test_default_meta_count(parse_query):
    operation, collection, arguments = parse_query(render_aggregate(over_all("Article")))
    assert operation.name.value == "Aggregate"
    assert arguments == {}
    meta = collection.selection_set.selections[0]
    assert meta.name.value == "meta"
    assert [field.name.value for field in meta.selection_set.selections] == ["count"]


def test_property_metrics_only_has_no_meta():
    text = render_aggregate(AggregateDescriptor("Product").with_property_metrics("price", "maximum"))
    assert "meta" not in text
    assert "maximum" in text


def test_top_occurrences_default_limit():
    text = render_aggregate(AggregateDescriptor("Article").with_property_metrics("category", "topOccurrences"))
    assert "topOccurrences(limit: 5) { value occurs }" in text


def test_top_occurrences_limit_from_config_and_entry():
    agg = AggregateDescriptor("Article").with_property_metrics("category", Metric.TOP_OCCURRENCES)
    assert "topOccurrences(limit: 3)" in render_aggregate(agg, RendererConfig(top_occurrences_limit=3))
    agg = agg.with_property_metrics("category", Metric.TOP_OCCURRENCES, top_occurrences_limit=8)
    assert "topOccurrences(limit: 8)" in render_aggregate(agg, RendererConfig(top_occurrences_limit=3))


def test_with_property_metrics_replaces_entry():
    agg = (AggregateDescriptor("Product")
           .with_property_metrics("price", "sum")
           .with_property_metrics("stock", "sum")
           .with_property_metrics("price", "mean"))
    assert [(entry.property, entry.metrics) for entry in agg.property_metrics] == [
        ("stock", (Metric.SUM,)),
        ("price", (Metric.MEAN,)),
    ]


def test_arguments(parse_query):
    agg = AggregateDescriptor(
        "Article",
        filter=equal("status", Text("published")),
        search=NearText(("ai",), certainty=0.7),
        object_limit=100,
        limit=10,
        group_by_path="author.name",
        tenant="tenantA",
    )
    _, collection, arguments = parse_query(render_aggregate(agg))
    assert [arg.name.value for arg in collection.arguments] == [
        "where", "nearText", "objectLimit", "limit", "groupBy", "tenant",
    ]
    assert arguments["groupBy"] == ["author", "name"]
    assert arguments["objectLimit"] == 100


def test_hybrid_search_supported(parse_query):
    _, _, arguments = parse_query(render_aggregate(over_all("Article").with_search(Hybrid("ai", alpha=0.5))))
    assert arguments == {"hybrid": {"query": "ai", "alpha": 0.5}}


@pytest.mark.parametrize("search", [Bm25("ai"), FetchById("abc")])
def test_unsupported_search(search):
    with pytest.raises(ValidationError, match="not supported in aggregations"):
        over_all("Article").with_search(search)


def test_unknown_metric():
    with pytest.raises(ValidationError, match="Unknown metric"):
        over_all("Article", "average")


def test_property_metrics_need_metrics():
    with pytest.raises(ValidationError):
        PropertyMetrics("price", ())


@pytest.mark.parametrize("kwargs", [{"object_limit": 0}, {"limit": -1}, {"tenant": ""}])
def test_invalid_descriptor(kwargs):
    with pytest.raises(ValidationError):
        AggregateDescriptor("Article", **kwargs)


def test_metric_type_mismatch_is_left_to_server():
    text = render_aggregate(AggregateDescriptor("Article").with_property_metrics("title", "mean", "percentageTrue"))
    assert "mean\n" in text
    assert "percentageTrue\n" in text
