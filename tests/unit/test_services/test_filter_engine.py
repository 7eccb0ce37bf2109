"""Tests for catalog filtering and partitioning."""

import pytest

from primehomes.models.filters import CatalogView, FilterCriteria
from primehomes.models.listing import Listing
from primehomes.services.filter_engine import (
    apply,
    matches_criteria,
    matches_query,
    parse_price_bound,
    partition,
)
from tests.utils.assertions import assert_partition_invariants, ids
from tests.utils.factories import create_listing, create_listings


@pytest.fixture
def catalog() -> list[Listing]:
    return [
        create_listing(id="a", title="Lake View Villa", city="Mzuzu", price=50000, type="sale",
                       category="house", description="Villa by the lake", location="Katoto", featured=True),
        create_listing(id="b", title="City Flat", city="Blantyre", price=20000, type="rent",
                       category="apartment", description="Flat near the market", location="Limbe", featured=False),
        create_listing(id="c", title="Warehouse", city="Lilongwe", price=120000, type="sale",
                       category="commercial", description="Storage space", location="Kanengo", featured=False),
        create_listing(id="d", title="Plot 12", city="Zomba", price=8000, type="sale",
                       category="land", description="Flat plot with a view", location="Chinamwali", featured=True),
    ]


@pytest.mark.unit
@pytest.mark.parametrize("raw,expected", [
    ("", None),
    ("   ", None),
    (None, None),
    ("1000", 1000.0),
    (" 2500.50 ", 2500.5),
    ("0", 0.0),
    ("abc", None),
    ("12abc", None),
    ("nan", None),
    ("inf", None),
    ("-inf", None),
    ("1_000", None),
    ("1_000.5", None),
])
def test_parse_price_bound(raw, expected):
    """Unusable bounds disable the constraint instead of raising."""
    assert parse_price_bound(raw) == expected


@pytest.mark.unit
def test_default_criteria_keep_everything(catalog):
    assert ids(apply(catalog, FilterCriteria())) == ["a", "b", "c", "d"]


@pytest.mark.unit
def test_empty_catalog_yields_empty_result():
    assert apply([], FilterCriteria(city="Mzuzu")) == []
    assert apply([], FilterCriteria(), "villa") == []
    assert partition([]).is_empty


@pytest.mark.unit
@pytest.mark.parametrize("criteria,expected", [
    (FilterCriteria(type="sale"), ["a", "c", "d"]),
    (FilterCriteria(type="rent"), ["b"]),
    (FilterCriteria(category="land"), ["d"]),
    (FilterCriteria(city="Blantyre"), ["b"]),
    (FilterCriteria(city="blantyre"), []),
    (FilterCriteria(min_price="20000"), ["a", "b", "c"]),
    (FilterCriteria(max_price="20000"), ["b", "d"]),
    (FilterCriteria(min_price="10000", max_price="60000"), ["a", "b"]),
    (FilterCriteria(type="sale", category="house", city="Mzuzu"), ["a"]),
    (FilterCriteria(min_price="abc", max_price="not a number"), ["a", "b", "c", "d"]),
    (FilterCriteria(min_price="25_000"), ["a", "b", "c", "d"]),
])
def test_structural_filters(catalog, criteria, expected):
    assert ids(apply(catalog, criteria)) == expected


@pytest.mark.unit
def test_zero_minimum_is_an_active_bound():
    free = create_listing(price=0)
    assert apply([free], FilterCriteria(min_price="0")) == [free]
    assert apply([free], FilterCriteria(min_price="1")) == []


@pytest.mark.unit
@pytest.mark.parametrize("query,expected", [
    ("villa", ["a"]),
    ("VILLA", ["a"]),
    ("flat", ["b", "d"]),
    ("limbe", ["b"]),
    ("lilongwe", ["c"]),
    ("commercial", ["c"]),
    ("nothing matches", []),
])
def test_query_searches_text_fields(catalog, query, expected):
    assert ids(apply(catalog, FilterCriteria(), query)) == expected


@pytest.mark.unit
def test_query_overrides_structural_filters(catalog):
    """A non-empty query ignores type, category, city and price bounds entirely."""
    strict = FilterCriteria(type="rent", category="house", city="Zomba", min_price="1", max_price="2")
    assert apply(catalog, strict) == []
    assert ids(apply(catalog, strict, "villa")) == ["a"]


@pytest.mark.unit
def test_query_override_holds_for_random_catalogs():
    listings = create_listings(40)
    criteria_options = [
        FilterCriteria(type="sale", min_price="100000"),
        FilterCriteria(category="land", city="Zomba"),
        FilterCriteria(max_price="1"),
    ]
    for query in ("a", "e", "house", "lilongwe", "zzz"):
        expected = [listing for listing in listings if matches_query(listing, query)]
        for criteria in criteria_options:
            assert apply(listings, criteria, query) == expected


@pytest.mark.unit
def test_structural_result_is_exactly_the_matching_listings():
    listings = create_listings(40)
    criteria = FilterCriteria(type="sale", min_price="100000", max_price="700000")
    result = apply(listings, criteria)
    for listing in listings:
        expected = listing.type.value == "sale" and 100000 <= listing.price <= 700000
        assert (listing in result) == expected


@pytest.mark.unit
def test_widening_a_bound_never_shrinks_the_result():
    listings = create_listings(50)
    narrow = FilterCriteria(min_price="200000", max_price="400000")
    wider = [
        FilterCriteria(min_price="100000", max_price="400000"),
        FilterCriteria(min_price="200000", max_price="800000"),
        FilterCriteria(min_price="", max_price="400000"),
        FilterCriteria(min_price="200000", max_price=""),
    ]
    narrow_ids = set(ids(apply(listings, narrow)))
    for criteria in wider:
        assert narrow_ids <= set(ids(apply(listings, criteria)))


@pytest.mark.unit
def test_apply_preserves_input_order():
    listings = create_listings(20, city="Lilongwe")
    assert apply(list(reversed(listings)), FilterCriteria(city="Lilongwe")) == list(reversed(listings))


@pytest.mark.unit
def test_matches_criteria_wildcards():
    listing = create_listing(type="rent", category="land", city="Zomba", price=10)
    assert matches_criteria(listing, FilterCriteria())
    assert not matches_criteria(listing, FilterCriteria(type="sale"))


@pytest.mark.unit
def test_partition_caps_featured_and_excludes_overflow():
    listings = [create_listing(id=f"f{i}", featured=True) for i in range(5)]
    listings += [create_listing(id=f"r{i}", featured=False) for i in range(4)]

    view = partition(listings)

    assert isinstance(view, CatalogView)
    assert ids(view.featured) == ["f0", "f1", "f2"]
    assert ids(view.regular) == ["r0", "r1", "r2", "r3"]
    assert_partition_invariants(view, listings)


@pytest.mark.unit
def test_partition_invariants_on_random_results():
    listings = create_listings(30)
    for criteria in (FilterCriteria(), FilterCriteria(type="sale"), FilterCriteria(max_price="300000")):
        matched = apply(listings, criteria)
        assert_partition_invariants(partition(matched), matched)


@pytest.mark.unit
def test_mzuzu_scenario():
    """City filter keeps only the Mzuzu villa, shown in the featured group."""
    catalog = [
        create_listing(id="villa", title="Lake View Villa", city="Mzuzu", price=50000, featured=True),
        create_listing(id="flat", title="City Flat", city="Blantyre", price=20000, featured=False),
    ]
    criteria = FilterCriteria(type="all", category="all", city="Mzuzu", min_price="", max_price="")

    result = apply(catalog, criteria, "")
    view = partition(result)

    assert ids(result) == ["villa"]
    assert ids(view.featured) == ["villa"]
    assert view.regular == []


@pytest.mark.unit
def test_criteria_from_query_params():
    criteria = FilterCriteria.from_params({"type": "rent", "city": "Zomba", "minPrice": "100", "max_price": "900"})
    assert criteria == FilterCriteria(type="rent", category="all", city="Zomba", min_price="100", max_price="900")
    assert FilterCriteria.from_params({}) == FilterCriteria()
