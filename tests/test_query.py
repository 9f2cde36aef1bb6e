"""Tests for Query: parameter rendering, row filters and pop-and-splice."""

import json

import pytest

from factual_query import (
    Circle,
    EmptyRowFiltersError,
    FieldFilter,
    Operator,
    Query,
    QueryEncodingError,
)
from tests.utils import decode_filters, decode_params


class TestScalarParameters:
    """Tests for q, limit, offset and include_count."""

    def test_empty_query_renders_nothing(self):
        assert Query().to_url_query() == ""

    def test_full_text_search_is_url_encoded(self):
        assert Query().full_text_search("coffee & tea").to_url_query() == "q=coffee+%26+tea"

    def test_empty_search_term_is_still_sent(self):
        assert Query().full_text_search("").to_url_query() == "q="

    def test_limit(self):
        assert Query().limit(10).to_url_query() == "limit=10"

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_limit_is_omitted(self, value):
        assert Query().limit(value).to_url_query() == ""

    def test_offset(self):
        assert Query().offset(20).to_url_query() == "offset=20"

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_offset_is_omitted(self, value):
        assert Query().offset(value).to_url_query() == ""

    def test_row_count_off_by_default(self):
        assert "include_count" not in Query().limit(5).to_url_query()

    def test_include_row_count(self):
        assert Query().include_row_count().to_url_query() == "include_count=true"

    def test_include_row_count_false_is_never_sent(self):
        assert Query().include_row_count().include_row_count(False).to_url_query() == ""

    def test_parameter_order_is_fixed(self):
        """Keys come out as q, limit, offset, include_count, filters, geo whatever the call order."""
        q = (
            Query()
            .within(Circle(1.5, 2.5, 100))
            .field("a").eq(1)
            .include_row_count()
            .offset(5)
            .limit(10)
            .full_text_search("x")
        )
        keys = [pair.split("=")[0] for pair in q.to_url_query().split("&")]
        assert keys == ["q", "limit", "offset", "include_count", "filters", "geo"]

    def test_unencodable_text_raises(self):
        with pytest.raises(QueryEncodingError):
            Query().full_text_search("\ud800").to_url_query()


class TestGeo:

    def test_geo_param(self):
        qs = Query().within(Circle(34.06021, -118.41828, 5000)).to_url_query()
        assert json.loads(decode_params(qs)["geo"]) == {
            "$circle": {"center": [34.06021, -118.41828], "meters": 5000}
        }

    def test_last_within_wins(self):
        q = Query().within(Circle(1, 1, 1)).within(Circle(2, 2, 2))
        assert q.geo == Circle(2, 2, 2)
        assert json.loads(decode_params(q.to_url_query())["geo"])["$circle"]["meters"] == 2


class TestRowFilters:

    def test_single_filter_is_not_wrapped(self):
        qs = Query().field("name").eq("Starbucks").to_url_query()
        assert decode_filters(qs) == {"name": {"$eq": "Starbucks"}}

    def test_several_filters_are_wrapped_in_and(self):
        qs = Query().field("a").eq(1).field("b").gt(2).to_url_query()
        assert decode_filters(qs) == {"$and": [{"a": {"$eq": 1}}, {"b": {"$gt": 2}}]}

    def test_and_of_filters(self):
        q = Query()
        q.and_(q.criteria("a").eq(1), q.criteria("b").lt(5))
        assert decode_filters(q.to_url_query()) == {"$and": [{"a": {"$eq": 1}}, {"b": {"$lt": 5}}]}

    def test_or_of_filters(self):
        q = Query()
        q.or_(q.criteria("a").eq(1), q.criteria("b").lt(5))
        assert decode_filters(q.to_url_query()) == {"$or": [{"a": {"$eq": 1}}, {"b": {"$lt": 5}}]}

    def test_add_returns_query(self):
        q = Query()
        f = FieldFilter("a", Operator.EQ, 1)
        assert q.add(f) is q
        assert q.row_filters == (f,)

    def test_row_filters_is_a_snapshot(self):
        q = Query().field("a").eq(1)
        snapshot = q.row_filters
        q.field("b").eq(2)
        assert len(snapshot) == 1

    def test_rendering_is_repeatable(self):
        q = Query().full_text_search("x").field("a").in_("1", "2")
        assert q.to_url_query() == q.to_url_query()

    def test_mutation_after_rendering(self):
        q = Query().field("a").eq(1)
        first = q.to_url_query()
        q.limit(3)
        assert q.to_url_query() == "limit=3&" + first

    def test_mixing_filters_and_queries_is_rejected(self):
        with pytest.raises(TypeError):
            Query().and_(FieldFilter("a", Operator.EQ, 1), Query().field("b").eq(2))

    def test_unencodable_filter_value_raises(self):
        with pytest.raises(QueryEncodingError):
            Query().field("name").eq("\udc80").to_url_query()


class TestPopAndSplice:
    """Combining the newest row filter of several queries."""

    def test_and_of_queries_pops_newest_filters(self):
        q1 = Query().field("a").eq("A").field("b").eq("B")
        q2 = Query().field("c").eq("C")

        combined = Query().and_(q1, q2)

        assert decode_filters(combined.to_url_query()) == {
            "$and": [{"b": {"$eq": "B"}}, {"c": {"$eq": "C"}}]
        }
        assert q1.row_filters == (FieldFilter("a", Operator.EQ, "A"),)
        assert q2.row_filters == ()

    def test_or_of_queries(self):
        combined = Query().or_(Query().field("a").eq(1), Query().field("b").eq(2))
        assert decode_filters(combined.to_url_query()) == {"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]}

    def test_empty_query_raises(self):
        q1 = Query().field("a").eq(1)
        with pytest.raises(EmptyRowFiltersError) as exc:
            Query().and_(q1, Query())
        assert exc.value.query_index == 1

    def test_empty_query_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            Query().or_(Query())

    def test_failed_combine_leaves_queries_untouched(self):
        q1 = Query().field("a").eq(1)
        target = Query()
        with pytest.raises(EmptyRowFiltersError):
            target.and_(q1, Query())
        assert len(q1.row_filters) == 1
        assert target.row_filters == ()

    def test_same_query_twice_needs_two_filters(self):
        q1 = Query().field("a").eq(1)
        with pytest.raises(EmptyRowFiltersError):
            Query().and_(q1, q1)
        assert len(q1.row_filters) == 1

    def test_same_query_twice_pops_newest_first(self):
        q1 = Query().field("a").eq(1).field("b").eq(2)
        combined = Query().or_(q1, q1)
        assert decode_filters(combined.to_url_query()) == {"$or": [{"b": {"$eq": 2}}, {"a": {"$eq": 1}}]}

    def test_end_to_end_example(self):
        q = Query().field("region").in_("MA", "VT", "NH").or_(
            Query().field("first_name").eq("Chun"),
            Query().field("last_name").eq("Kok"),
        )
        assert q.to_url_query() == (
            "filters=%7B%22%24and%22%3A%5B%7B%22region%22%3A%7B%22%24in%22%3A%22MA%2CVT%2CNH%22%7D%7D"
            "%2C%7B%22%24or%22%3A%5B%7B%22first_name%22%3A%7B%22%24eq%22%3A%22Chun%22%7D%7D%2C%7B%22"
            "last_name%22%3A%7B%22%24eq%22%3A%22Kok%22%7D%7D%5D%7D%5D%7D"
        )
        assert decode_params(q.to_url_query())["filters"] == (
            '{"$and":[{"region":{"$in":"MA,VT,NH"}},'
            '{"$or":[{"first_name":{"$eq":"Chun"}},{"last_name":{"$eq":"Kok"}}]}]}'
        )

    def test_nested_combination(self):
        """A combined query can itself be spliced into another."""
        inner = Query().or_(Query().field("a").eq(1), Query().field("b").eq(2))
        outer = Query().field("c").eq(3).and_(inner, Query().field("d").eq(4))
        assert decode_filters(outer.to_url_query()) == {
            "$and": [
                {"c": {"$eq": 3}},
                {"$and": [{"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]}, {"d": {"$eq": 4}}]},
            ]
        }


class TestNonFiniteNumbers:
    """NaN and infinities have no JSON spelling and must not reach the wire."""

    def test_infinite_filter_value_raises(self):
        with pytest.raises(QueryEncodingError):
            Query().field("rating").gt(float("inf")).to_url_query()

    def test_nan_geo_bound_raises(self):
        with pytest.raises(QueryEncodingError):
            Query().within(Circle(float("nan"), 0.0, 10)).to_url_query()

    def test_finite_values_still_render(self):
        qs = Query().field("rating").gt(4.5).within(Circle(1.0, 2.0, 10)).to_url_query()
        assert json.loads(decode_params(qs)["geo"]) == {"$circle": {"center": [1.0, 2.0], "meters": 10}}
