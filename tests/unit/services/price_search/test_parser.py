from decimal import Decimal

import pytest

from price_compare.services.price_search.models import SearchResult, SearchSource
from price_compare.services.price_search.parser import (
    MatchContext,
    extract_discount,
    extract_price,
    extract_product_name,
    is_installment,
    is_price_range,
    is_range_filter,
    is_shipping_threshold,
    is_unit_price,
    parse_price,
    parse_prices,
)


def _result(
    title: str,
    url: str = "https://shop.com/product",
    snippet: str = "",
    source: SearchSource = SearchSource.BRAVE,
    **kwargs,
) -> SearchResult:
    return SearchResult(title=title, url=url, snippet=snippet, source=source, **kwargs)


class TestParsePrice:
    """Text based price extraction."""

    def test_usd_price_with_thousands_separator(self) -> None:
        parsed = parse_price(
            _result("Gaming Laptop - $1,299.99", url="https://amazon.com/product/123")
        )

        assert parsed is not None
        assert parsed.current_price == Decimal("1299.99")
        assert parsed.currency == "USD"
        assert parsed.retailer == "Amazon"

    def test_gbp_price(self) -> None:
        parsed = parse_price(_result("MacBook Pro £1,499", url="https://apple.com/uk/mac"))

        assert parsed is not None
        assert parsed.current_price == Decimal("1499")
        assert parsed.currency == "GBP"

    def test_eur_price_with_european_separators(self) -> None:
        parsed = parse_price(_result("iPhone 15 Pro €1.299,50", url="https://example.de/p"))

        assert parsed is not None
        assert parsed.current_price == Decimal("1299.50")
        assert parsed.currency == "EUR"

    def test_eur_price_with_decimal_comma_only(self) -> None:
        parsed = parse_price(_result("Kaffeemaschine €1299,50"))

        assert parsed is not None
        assert parsed.current_price == Decimal("1299.50")
        assert parsed.currency == "EUR"

    def test_price_followed_by_currency_code(self) -> None:
        parsed = parse_price(_result("Product Name 499.99 USD"))

        assert parsed is not None
        assert parsed.current_price == Decimal("499.99")
        assert parsed.currency == "USD"

    def test_cad_prefix_wins_over_dollar_sign(self) -> None:
        parsed = parse_price(_result("Product CAD $199.99", url="https://bestbuy.ca/p"))

        assert parsed is not None
        assert parsed.current_price == Decimal("199.99")
        assert parsed.currency == "CAD"

    def test_aud_prefix(self) -> None:
        parsed = parse_price(_result("Headphones AUD 249.00"))

        assert parsed is not None
        assert parsed.currency == "AUD"
        assert parsed.current_price == Decimal("249.00")

    def test_percent_off_discount(self) -> None:
        parsed = parse_price(
            _result("Gaming Mouse $59.99 - 20% off", url="https://bestbuy.com/mouse")
        )

        assert parsed is not None
        assert parsed.current_price == Decimal("59.99")
        assert parsed.discount == 20

    def test_save_percent_discount_in_snippet(self) -> None:
        parsed = parse_price(_result("Keyboard - $89.99", snippet="Save 15% with coupon"))

        assert parsed is not None
        assert parsed.discount == 15

    def test_discount_colon_format(self) -> None:
        parsed = parse_price(_result("Laptop $899", snippet="Discount: 30%"))

        assert parsed is not None
        assert parsed.discount == 30

    def test_was_price_computes_discount(self) -> None:
        parsed = parse_price(
            _result("Monitor $299.99", url="https://newegg.com/monitor", snippet="Was $399.99")
        )

        assert parsed is not None
        assert parsed.original_price == Decimal("399.99")
        assert parsed.discount == 25

    def test_explicit_discount_is_kept_over_computed_one(self) -> None:
        parsed = parse_price(
            _result("Gaming Mouse $59.99 - 20% off", snippet="Was $74.99")
        )

        assert parsed is not None
        assert parsed.original_price == Decimal("74.99")
        assert parsed.discount == 20

    def test_originally_price(self) -> None:
        parsed = parse_price(_result("Headphones $79.99", snippet="Originally $99.99"))

        assert parsed is not None
        assert parsed.original_price == Decimal("99.99")
        assert parsed.discount == 20

    def test_first_price_wins_when_several_are_present(self) -> None:
        parsed = parse_price(_result("Product $99.99 was $149.99"))

        assert parsed is not None
        assert parsed.current_price == Decimal("99.99")
        assert parsed.original_price == Decimal("149.99")

    def test_price_with_space_after_symbol(self) -> None:
        parsed = parse_price(_result("Product $ 29.99"))

        assert parsed is not None
        assert parsed.current_price == Decimal("29.99")

    def test_price_without_cents(self) -> None:
        parsed = parse_price(_result("Gaming Console $499"))

        assert parsed is not None
        assert parsed.current_price == Decimal("499")

    def test_no_price_returns_none(self) -> None:
        parsed = parse_price(
            _result(
                "Product Description Without Price",
                url="https://example.com/product",
                snippet="Read reviews and specifications",
            )
        )

        assert parsed is None

    def test_unreasonably_high_price_is_rejected(self) -> None:
        assert parse_price(_result("Product $9,999,999.99")) is None

    def test_unit_price_is_skipped_for_real_price(self) -> None:
        parsed = parse_price(
            _result(
                "Organic Coffee Beans",
                snippet="$0.75/oz. Great value for everyday brewing, only $11.99 today",
            )
        )

        assert parsed is not None
        assert parsed.current_price == Decimal("11.99")

    def test_shipping_threshold_only_yields_no_price(self) -> None:
        parsed = parse_price(_result("Coffee grinder", snippet="FREE Shipping on $35+"))

        assert parsed is None

    def test_from_price_is_accepted(self) -> None:
        parsed = parse_price(_result("Running shoes", snippet="From $25"))

        assert parsed is not None
        assert parsed.current_price == Decimal("25")

    def test_preserves_source_and_url(self) -> None:
        parsed = parse_price(
            _result("Product $50", url="https://example.com/product", source=SearchSource.TAVILY)
        )

        assert parsed is not None
        assert parsed.source == SearchSource.TAVILY
        assert parsed.url == "https://example.com/product"

    def test_www_prefix_is_removed_from_retailer(self) -> None:
        parsed = parse_price(_result("Product $99.99", url="https://www.walmart.com/product/123"))

        assert parsed is not None
        assert parsed.retailer == "Walmart"

    def test_malformed_url_yields_unknown_retailer(self) -> None:
        parsed = parse_price(_result("Product $10.00", url="not-a-url"))

        assert parsed is not None
        assert parsed.retailer == "Unknown"


class TestStructuredData:
    """Structured offer data published by Google."""

    def test_metatag_price_is_preferred(self) -> None:
        result = _result(
            "Sony WH-1000XM5",
            url="https://www.bestbuy.com/site/sony",
            source=SearchSource.GOOGLE,
            snippet="Now $279.99",
            structured_data={
                "metatags": [
                    {"product:price:amount": "329.99", "product:price:currency": "usd"}
                ],
                "offers": [{"price": "299.00", "pricecurrency": "USD"}],
            },
        )

        parsed = parse_price(result)

        assert parsed is not None
        assert parsed.current_price == Decimal("329.99")
        assert parsed.currency == "USD"
        assert parsed.discount is None

    def test_offer_price_is_used_without_metatags(self) -> None:
        result = _result(
            "Dyson V15",
            url="https://www.target.com/p/dyson",
            source=SearchSource.GOOGLE,
            structured_data={"offers": [{"price": "£649.99", "pricecurrency": "gbp"}]},
        )

        parsed = parse_price(result)

        assert parsed is not None
        assert parsed.current_price == Decimal("649.99")
        assert parsed.currency == "GBP"

    def test_currency_defaults_to_usd(self) -> None:
        result = _result(
            "Dyson V15",
            source=SearchSource.GOOGLE,
            structured_data={"offers": [{"price": "649.99"}]},
        )

        parsed = parse_price(result)

        assert parsed is not None
        assert parsed.currency == "USD"

    def test_invalid_structured_price_falls_back_to_text(self) -> None:
        result = _result(
            "Dyson V15 $599.99",
            source=SearchSource.GOOGLE,
            structured_data={"offers": [{"price": "0"}], "metatags": [{}]},
        )

        parsed = parse_price(result)

        assert parsed is not None
        assert parsed.current_price == Decimal("599.99")

    def test_structured_data_is_ignored_for_other_sources(self) -> None:
        result = _result(
            "Dyson V15 $599.99",
            source=SearchSource.BRAVE,
            structured_data={"offers": [{"price": "649.99"}]},
        )

        parsed = parse_price(result)

        assert parsed is not None
        assert parsed.current_price == Decimal("599.99")


class TestExclusionPredicates:
    @pytest.mark.parametrize(
        "text",
        ["$0.25/oz", "$3.99 / lb", "$1.10/ct"],
    )
    def test_unit_price(self, text: str) -> None:
        assert is_unit_price(MatchContext(before="", match=text, after=""))

    def test_shipping_threshold(self) -> None:
        context = MatchContext(before="Free shipping over ", match="$35", after="")
        assert is_shipping_threshold(context)

    def test_installment(self) -> None:
        context = MatchContext(before="or 4 payments of ", match="$12.50", after="")
        assert is_installment(context)

    def test_range_filter_only_looks_backwards(self) -> None:
        assert is_range_filter(MatchContext(before="Under ", match="$10", after=""))
        assert not is_range_filter(
            MatchContext(before="", match="$10", after=" under warranty over 5 years")
        )
        assert not is_range_filter(MatchContext(before="From ", match="$25", after=""))

    def test_words_ending_in_over_or_under_are_not_filters(self) -> None:
        assert not is_range_filter(
            MatchContext(before="iPhone 15 Case Cover ", match="$19.99", after="")
        )
        assert not is_range_filter(MatchContext(before="Thunder ", match="$5", after=""))
        assert is_range_filter(MatchContext(before="Gifts under ", match="$50", after=""))

    def test_price_range(self) -> None:
        assert is_price_range(MatchContext(before="", match="$5", after=" - $10"))

    def test_plain_price_is_not_excluded(self) -> None:
        context = MatchContext(before="Gaming Laptop - ", match="$1,299.99", after="")
        for check in (
            is_unit_price,
            is_shipping_threshold,
            is_installment,
            is_range_filter,
            is_price_range,
        ):
            assert not check(context)


def test_extract_price_skips_range_filter_then_accepts_next_candidate() -> None:
    text = "Deals under $10 this week. Widget Pro now $24.99"

    assert extract_price(text) == (Decimal("24.99"), "USD")


def test_extract_price_skips_installment() -> None:
    assert extract_price("or 4 payments of $12.50 with Klarna") is None


def test_extract_discount_rejects_out_of_range_values() -> None:
    assert extract_discount("0% off everything") is None
    assert extract_discount("Save 35% today") == 35


def test_extract_product_name_strips_price_and_retailer() -> None:
    name = extract_product_name("Dell XPS 15 Laptop - $1,499.99 - Amazon")

    assert "Dell XPS 15" in name
    assert "$1,499.99" not in name
    assert "Amazon" not in name


def test_extract_product_name_strips_discount_and_trailing_pipe() -> None:
    assert extract_product_name("Mechanical Keyboard 20% off |") == "Mechanical Keyboard"


def test_extract_product_name_falls_back_to_title() -> None:
    assert extract_product_name("$49.99") == "$49.99"


def test_parse_prices_drops_results_without_price() -> None:
    results = [
        _result("Product A - $99.99", url="https://amazon.com/a"),
        _result(
            "Product B - $89.99",
            url="https://walmart.com/b",
            snippet="10% off",
            source=SearchSource.TAVILY,
        ),
        _result("Product C - No Price", url="https://example.com/c"),
    ]

    parsed = parse_prices(results)

    assert len(parsed) == 2
    assert parsed[0].current_price == Decimal("99.99")
    assert parsed[1].current_price == Decimal("89.99")
    assert parsed[1].discount == 10


def test_parse_prices_handles_empty_input() -> None:
    assert parse_prices([]) == []


@pytest.mark.parametrize(
    "title",
    [
        "Laptop $999,999.99",
        "Laptop $1,000,000",
        "Laptop $0.00",
        "Yacht €2.500.000,00",
        "Watch 1,500,000 GBP",
    ],
)
def test_extracted_amount_is_always_within_bounds(title: str) -> None:
    parsed = parse_price(_result(title))

    if parsed is not None:
        assert Decimal(0) < parsed.current_price < Decimal(1_000_000)


@pytest.mark.parametrize(
    "title,expected",
    [
        ("iPhone 15 Case Cover $19.99", Decimal("19.99")),
        ("Land Rover $45,000", Decimal("45000")),
        ("Hangover Kit $12.50", Decimal("12.50")),
    ],
)
def test_titles_containing_over_keep_their_price(title: str, expected: Decimal) -> None:
    parsed = parse_price(_result(title, url="https://www.amazon.com/x"))

    assert parsed is not None
    assert parsed.current_price == expected


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Gaming Laptop - $1,299.99", "Gaming Laptop"),
        ("Gaming Mouse $59.99 - 20% off", "Gaming Mouse"),
        ("Instant Pot Duo 7-in-1 | $89.00", "Instant Pot Duo 7-in-1"),
    ],
)
def test_extract_product_name_leaves_no_dangling_separator(title: str, expected: str) -> None:
    assert extract_product_name(title) == expected
