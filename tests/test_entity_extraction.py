"""
Tests for entity extraction

Covers each entity kind, the deduplication and ordering guarantees,
false positive suppression and robustness against unusual input.
"""

import pytest

from entity_extraction import (
    EntityExtractor,
    EntityKind,
    ExtractionResult,
    PatternRegistry,
    extract_entities,
    get_default_extractor,
    reset_default_extractor,
)


EMPTY = {
    "emails": [],
    "urls": [],
    "mentions": [],
    "hashtags": [],
    "phones": [],
    "dates": [],
    "prices": [],
}


# ==================== Empty Input ====================

class TestEmptyInput:
    """Empty input never reaches the patterns"""

    def test_empty_string(self):
        assert extract_entities("").to_dict() == EMPTY

    def test_none(self):
        assert extract_entities(None).to_dict() == EMPTY

    def test_whitespace_only(self):
        result = extract_entities("   \n\t  ")
        assert result.to_dict() == EMPTY
        assert result.is_empty


# ==================== Entity Kinds ====================

class TestEntityKinds:
    """One test per entity kind"""

    def test_extract_emails(self):
        result = extract_entities("Contact us at support@example.com or admin@company.org")
        assert result.emails == ["support@example.com", "admin@company.org"]

    def test_extract_urls(self):
        result = extract_entities("Visit https://example.com and http://docs.example.org/api")
        assert result.urls == ["https://example.com", "http://docs.example.org/api"]

    def test_url_with_query_parameters(self):
        result = extract_entities("Search at https://google.com/search?q=test&lang=en")
        assert result.urls == ["https://google.com/search?q=test&lang=en"]

    def test_url_excludes_trailing_punctuation(self):
        result = extract_entities("See https://example.com. Or https://example.org/a, then stop!")
        assert result.urls == ["https://example.com", "https://example.org/a"]

    def test_url_stops_at_delimiters(self):
        result = extract_entities('<a href="https://example.com/page">link</a>')
        assert result.urls == ["https://example.com/page"]

    def test_extract_mentions(self):
        result = extract_entities("Hey @john_doe and @alice123, check this out!")
        assert result.mentions == ["@john_doe", "@alice123"]

    def test_extract_hashtags(self):
        result = extract_entities("Learning #javascript and #typescript is fun! #100DaysOfCode")
        assert result.hashtags == ["#javascript", "#typescript", "#100DaysOfCode"]

    def test_mentions_and_hashtags_at_boundaries(self):
        result = extract_entities("@user, (#hashtag) [@mention] {#tag}")
        assert result.mentions == ["@user", "@mention"]
        assert result.hashtags == ["#hashtag", "#tag"]

    def test_phone_formats(self):
        result = extract_entities("Call us at (555) 123-4567, +1-800-555-0100, or 555.123.4567")
        assert "(555) 123-4567" in result.phones
        assert "+1-800-555-0100" in result.phones
        assert "555.123.4567" in result.phones

    def test_international_phone_formats(self):
        result = extract_entities("+44 20 7123 4567, +33 1 23 45 67 89")
        assert "+44 20 7123 4567" in result.phones

    def test_date_formats(self):
        result = extract_entities(
            "Meeting on 2024-01-15, deadline is 12/31/2024, or January 5, 2024"
        )
        assert "2024-01-15" in result.dates
        assert "12/31/2024" in result.dates
        assert "January 5, 2024" in result.dates

    def test_month_name_dates(self):
        result = extract_entities("Dates: Jan 1, 2024, February 28, 2024, Mar 15, 2024")
        assert result.dates == ["Jan 1, 2024", "February 28, 2024", "Mar 15, 2024"]

    def test_month_names_are_case_insensitive(self):
        result = extract_entities("due MARCH 3 2025")
        assert result.dates == ["MARCH 3 2025"]

    def test_prices_in_different_currencies(self):
        result = extract_entities("Products cost $99.99, €50, £25.50, and $1,234.56")
        assert result.prices == ["$99.99", "€50", "£25.50", "$1,234.56"]

    def test_prices_with_suffixes(self):
        result = extract_entities("Revenue: $1.5M, Budget: $250k, Market cap: $10B")
        assert result.prices == ["$1.5M", "$250k", "$10B"]

    def test_price_followed_by_word_character(self):
        result = extract_entities("Code $5x is not a price, ¥ 300 is")
        assert result.prices == ["¥ 300"]


# ==================== Scenarios ====================

class TestScenarios:
    """Whole-text extraction"""

    def test_mixed_sentence(self):
        text = (
            "Contact @john at john@example.com or call (555) 123-4567. "
            "Check #updates at https://example.com. Price: $99.99"
        )

        assert extract_entities(text).to_dict() == {
            "emails": ["john@example.com"],
            "urls": ["https://example.com"],
            "mentions": ["@john"],
            "hashtags": ["#updates"],
            "phones": ["(555) 123-4567"],
            "dates": [],
            "prices": ["$99.99"],
        }

    def test_mixed_multiline_content(self):
        text = """
          Contact @support at help@company.com or call (555) 123-4567.
          Visit https://example.com for more info.
          #CustomerService available 24/7.
          Invoice dated 2024-01-15 for $299.99.
        """
        result = extract_entities(text)

        assert result.emails == ["help@company.com"]
        assert result.urls == ["https://example.com"]
        assert result.mentions == ["@support"]
        assert result.hashtags == ["#CustomerService"]
        assert "(555) 123-4567" in result.phones
        assert result.dates == ["2024-01-15"]
        assert result.prices == ["$299.99"]

    def test_invoice(self):
        result = extract_entities("Invoice Date: 2024-01-15, Due: 01/30/2024, Amount: $1,234.56")
        assert result.dates == ["2024-01-15", "01/30/2024"]
        assert result.prices == ["$1,234.56"]

    def test_email_like_segment_in_url(self):
        text = "URL: https://example.com/path@segment and email: test@example.com"
        result = extract_entities(text)

        assert result.urls == ["https://example.com/path@segment"]
        assert result.emails == ["test@example.com"]
        assert result.mentions == []

    def test_email_domain_is_not_a_mention(self):
        result = extract_entities("Write to jane.doe@example.com, cc @jane")
        assert result.emails == ["jane.doe@example.com"]
        assert result.mentions == ["@jane"]

    def test_mention_after_punctuation(self):
        result = extract_entities("Thanks.@john and a-@b")
        assert result.mentions == ["@john", "@b"]


# ==================== Invariants ====================

class TestInvariants:
    """Deduplication, ordering and false positive suppression"""

    def test_deduplicates_repeated_entities(self):
        result = extract_entities(
            "Email john@example.com twice: john@example.com and john@example.com"
        )
        assert result.emails == ["john@example.com"]

    def test_first_occurrence_order(self):
        result = extract_entities("#b then #a then #b again and #c, finally #a")
        assert result.hashtags == ["#b", "#a", "#c"]

    def test_no_duplicates_in_any_kind(self):
        text = (
            "@a @a #x #x a@b.io a@b.io https://x.io https://x.io "
            "555-123-4567 555-123-4567 2024-01-15 2024-01-15 $5 $5"
        )
        for values in extract_entities(text).to_dict().values():
            assert len(values) == len(set(values))

    def test_repeated_calls_are_identical(self):
        text = "Ping @ops about #outage at https://status.example.com, $1.2M at risk"
        assert extract_entities(text) == extract_entities(text)

    def test_short_numbers_are_not_phones(self):
        result = extract_entities("Valid: 555-123-4567, Invalid: 123, 1, 123456")

        assert "555-123-4567" in result.phones
        assert "123" not in result.phones
        assert "1" not in result.phones
        assert "123456" not in result.phones

    def test_accepted_phones_have_bounded_digit_count(self):
        text = "1 22 333 4444 55555 666666 7777777 +1 (800) 555-0199 12.34 9-9-9"
        for phone in extract_entities(text).phones:
            digits = sum(ch.isdigit() for ch in phone)
            assert 7 <= digits <= 15

    def test_phones_are_trimmed(self):
        result = extract_entities("call   555 123 4567   now")
        assert result.phones == ["555 123 4567"]

    def test_bare_date_fragments_are_not_dates(self):
        result = extract_entities("Back in 2024 we shipped on 12/31 and 3-4")
        assert result.dates == []


# ==================== Robustness ====================

class TestRobustness:
    """Unusual input degrades to no match instead of failing"""

    @pytest.mark.parametrize("text", [
        "\x00\x00@user\x00",
        "broken \ud800 surrogate #tag",
        "x" * 200000,
        "@" * 10000,
        "$" + "1," * 5000,
        "+" + "-. " * 5000 + "1",
    ])
    def test_unusual_input_does_not_raise(self, text):
        result = extract_entities(text)
        assert isinstance(result, ExtractionResult)

    def test_large_document_keeps_every_kind(self):
        sentence = "Contact bob@example.com or call 555-123-4567 about #x on 2024-01-15 for $5. "
        text = sentence * 30000 + " tail@last.io 999-888-7777"

        # A short timeout still suffices since each search stops at the next match
        result = EntityExtractor(registry=PatternRegistry(), match_timeout=0.25).extract(text)

        assert result.emails == ["bob@example.com", "tail@last.io"]
        assert "555-123-4567" in result.phones
        assert "999-888-7777" in result.phones
        assert result.hashtags == ["#x"]
        assert result.dates == ["2024-01-15"]
        assert result.prices == ["$5"]

    def test_long_separator_runs_leave_other_kinds_intact(self):
        text = (
            "reach a@b.io "
            + "+1-" * 50000
            + " $" + "1 " * 20000
            + "then 555-123-4567 #end $5,000,000"
        )
        result = extract_entities(text)

        assert result.emails == ["a@b.io"]
        assert "555-123-4567" in result.phones
        assert result.hashtags == ["#end"]
        assert "$5,000,000" in result.prices
        for phone in result.phones:
            assert 7 <= sum(ch.isdigit() for ch in phone) <= 15

    def test_null_bytes_between_entities(self):
        result = extract_entities("@user\x00#tag")
        assert result.mentions == ["@user"]
        assert result.hashtags == ["#tag"]

    def test_bytes_input_is_decoded(self):
        result = extract_entities("price €50 \xff".encode("utf-8") + b"\xff\xfe")
        assert result.prices == ["€50"]

    def test_non_text_input_is_rejected(self):
        with pytest.raises(TypeError):
            extract_entities(42)


# ==================== Result Type ====================

class TestExtractionResult:
    """ExtractionResult accessors"""

    def test_get_by_kind_and_field_name(self):
        result = extract_entities("#one #two")

        assert result.get(EntityKind.HASHTAG) == ["#one", "#two"]
        assert result["hashtags"] == ["#one", "#two"]
        assert result["hashtag"] == ["#one", "#two"]
        assert result.total == 2

    def test_unknown_kind_is_empty(self):
        assert ExtractionResult().get("ticket") == []

    def test_field_names(self):
        assert [kind.field_name for kind in EntityKind] == list(EMPTY)

    def test_to_dict_copies_lists(self):
        result = extract_entities("#one")
        data = result.to_dict()
        data["hashtags"].append("#two")

        assert result.hashtags == ["#one"]


class TestDefaultExtractor:
    """Module-level singleton"""

    def test_singleton(self):
        reset_default_extractor()
        extractor = get_default_extractor()

        assert get_default_extractor() is extractor

    def test_reset_creates_new_instance(self):
        first = get_default_extractor()
        reset_default_extractor()

        assert get_default_extractor() is not first
