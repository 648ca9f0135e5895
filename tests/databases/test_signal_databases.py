"""Tests for the signal databases.

Tests cover:
- Bulk classification (tiers, platform scoping, unmatched tokens, duplicates)
- Order independence and idempotence of check_bulk
- Lexical extraction per platform (no cashtags or hashtags where unused)
- Link classification (shorteners, throttled domains, spam domains)
- Content term matching and the heuristic scanner
- Mention prefixes and name patterns, emoji combinations
- Stats
"""

import pytest

from shadowban_system.data_management.schemas import SignalEntry, SignalTier
from shadowban_system.databases import (
    ContentDatabase,
    EmojiDatabase,
    HashtagDatabase,
    LinkDatabase,
    MentionDatabase,
    domain_of,
    load_default_catalog,
    normalize_tag,
)


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture(scope="module")
def hashtags() -> HashtagDatabase:
    return HashtagDatabase()


@pytest.fixture(scope="module")
def links() -> LinkDatabase:
    return LinkDatabase()


@pytest.fixture(scope="module")
def content() -> ContentDatabase:
    return ContentDatabase()


@pytest.fixture(scope="module")
def mentions() -> MentionDatabase:
    return MentionDatabase()


@pytest.fixture(scope="module")
def emojis() -> EmojiDatabase:
    return EmojiDatabase()


# ── Hashtag Tests ─────────────────────────────────────────────────────────


class TestHashtagBulkCheck:
    def test_followback_scenario(self, hashtags: HashtagDatabase) -> None:
        """Banned tags are separated from an unlisted tag, which is safe."""
        result = hashtags.check_bulk(["followback", "f4f", "tech"], "twitter")
        assert result.banned == ["followback", "f4f"]
        assert result.safe == ["tech"]
        assert result.restricted == []
        assert result.summary.banned_count == 2
        assert result.summary.safe_count == 1
        assert result.summary.risk_score > 0

    def test_order_independent(self, hashtags: HashtagDatabase) -> None:
        tags = ["#followback", "#nsfw", "#tech", "#maga"]
        forward = hashtags.check_bulk(tags, "twitter")
        backward = hashtags.check_bulk(list(reversed(tags)), "twitter")
        for tier in SignalTier:
            assert set(forward.tokens_in(tier)) == set(backward.tokens_in(tier))
        assert forward.summary == backward.summary

    def test_idempotent(self, hashtags: HashtagDatabase) -> None:
        first = hashtags.check_bulk(["#followback", "#tech"], "twitter")
        second = hashtags.check_bulk(["#followback", "#tech"], "twitter")
        assert first == second

    def test_duplicates_counted_once(self, hashtags: HashtagDatabase) -> None:
        result = hashtags.check_bulk(["#FollowBack", "followback", "#followback"], "twitter")
        assert result.summary.total == 1
        assert result.summary.risk_score == 30

    def test_platform_scoping(self, hashtags: HashtagDatabase) -> None:
        """#followback is only listed for Twitter and Instagram."""
        assert hashtags.check_bulk(["followback"], "reddit").safe == ["followback"]
        assert hashtags.check_bulk(["f4f"], "reddit").banned == ["f4f"]

    def test_risk_score_capped(self, hashtags: HashtagDatabase) -> None:
        tags = ["#followback", "#f4f", "#l4l", "#s4s", "#tfb"]
        assert hashtags.check_bulk(tags, "twitter").summary.risk_score == 100

    def test_empty_tokens_ignored(self, hashtags: HashtagDatabase) -> None:
        result = hashtags.check_bulk(["", "  ", "#"], "twitter")
        assert result.summary.total == 0

    def test_cashtags_uppercase(self, hashtags: HashtagDatabase) -> None:
        result = hashtags.check_cashtags(["pump", "$btc"], "twitter")
        assert result.banned == ["$pump"]
        assert result.safe == ["$btc"]

    def test_lookup_returns_entry(self, hashtags: HashtagDatabase) -> None:
        entry = hashtags.lookup("#NSFW", "twitter")
        assert entry is not None
        assert entry.tier == SignalTier.RESTRICTED
        assert hashtags.lookup("#nsfw", "linkedin") is None


class TestMostSevereWins:
    def test_most_severe_applicable_entry(self) -> None:
        db = HashtagDatabase(entries=[
            SignalEntry(token="#tag", tier=SignalTier.MONITORED),
            SignalEntry(token="#tag", tier=SignalTier.BANNED, platforms=("twitter",)),
        ])
        assert db.lookup("#tag", "twitter").tier == SignalTier.BANNED
        assert db.lookup("#tag", "reddit").tier == SignalTier.MONITORED


class TestHashtagExtraction:
    def test_extract_and_check(self, hashtags: HashtagDatabase) -> None:
        result = hashtags.extract_and_check("Morning! #FollowBack #tech $PUMP", "twitter")
        assert result.tokens == ["#followback", "#tech", "$PUMP"]
        assert set(result.results.banned) == {"#followback", "$PUMP"}

    def test_no_cashtags_on_instagram(self, hashtags: HashtagDatabase) -> None:
        assert hashtags.extract_cashtags("Buying $PUMP", "instagram") == []

    def test_no_hashtags_on_reddit(self, hashtags: HashtagDatabase) -> None:
        assert hashtags.extract_and_check("#f4f please", "reddit").tokens == []

    def test_normalize_tag(self) -> None:
        assert normalize_tag("FollowBack") == "#followback"
        assert normalize_tag("##F4F") == "#f4f"
        assert normalize_tag("$btc") == "$BTC"


# ── Link Tests ────────────────────────────────────────────────────────────


class TestLinkDatabase:
    def test_domain_normalization(self) -> None:
        assert domain_of("https://WWW.Example.com/path") == "example.com"
        assert domain_of("bit.ly/abc") == "bit.ly"

    def test_shortener_is_monitored(self, links: LinkDatabase) -> None:
        result = links.check_bulk(["https://bit.ly/3xyz"], "twitter")
        assert result.monitored == ["https://bit.ly/3xyz"]
        assert links.shorteners(result) == ["https://bit.ly/3xyz"]

    def test_throttled_domain_is_platform_specific(self, links: LinkDatabase) -> None:
        url = "https://www.facebook.com/events/1"
        on_twitter = links.check_bulk([url], "twitter")
        assert on_twitter.restricted == [url]
        assert links.throttled(on_twitter) == [url]
        assert links.check_bulk([url], "reddit").safe == [url]

    def test_subdomain_matches_parent(self, links: LinkDatabase) -> None:
        result = links.check_bulk(["https://promo.spam-site.com/win"], "twitter")
        assert result.banned == ["https://promo.spam-site.com/win"]

    def test_suspicious_pattern(self, links: LinkDatabase) -> None:
        result = links.check_bulk(["https://example.org/free-followers-now"], "reddit")
        assert result.summary.banned_count == 1

    def test_extracts_urls_from_text(self, links: LinkDatabase) -> None:
        result = links.extract_and_check("see https://bit.ly/abc, and www.python.org.", "twitter")
        assert result.tokens == ["https://bit.ly/abc", "www.python.org"]


# ── Content Tests ─────────────────────────────────────────────────────────


class TestContentDatabase:
    def test_word_boundaries(self, content: ContentDatabase) -> None:
        assert content.extract_tokens("Improve your skills", "twitter") == []
        assert content.extract_tokens("They will kill it on stage", "twitter") == ["kill"]

    def test_phrase_match_case_insensitive(self, content: ContentDatabase) -> None:
        result = content.extract_and_check("FREE BITCOIN for everyone", "twitter")
        assert result.results.banned == ["free bitcoin"]

    def test_platform_scoped_term(self, content: ContentDatabase) -> None:
        assert content.extract_tokens("crypto news", "instagram") == ["crypto"]
        assert content.extract_tokens("crypto news", "twitter") == []

    def test_clean_text(self, content: ContentDatabase) -> None:
        result = content.extract_and_check("A calm post about gardening.", "twitter")
        assert result.patterns == []
        assert result.total_score == 0


class TestContentHeuristics:
    def _codes(self, db: ContentDatabase, text: str, platform: str = "twitter") -> set:
        return {hit.code for hit in db.scan_patterns(text, platform)}

    def test_excessive_caps(self, content: ContentDatabase) -> None:
        assert "excessive_caps" in self._codes(content, "THIS IS A VERY LOUD ANNOUNCEMENT")

    def test_short_caps_ignored(self, content: ContentDatabase) -> None:
        assert "excessive_caps" not in self._codes(content, "OK GO")

    def test_hashtag_threshold_per_platform(self, content: ContentDatabase) -> None:
        text = " ".join(f"#tag{i}" for i in range(7))
        assert "excessive_hashtags" in self._codes(content, text, "twitter")
        assert "excessive_hashtags" not in self._codes(content, text, "instagram")

    def test_mentions(self, content: ContentDatabase) -> None:
        text = " ".join(f"@user{i}" for i in range(6))
        assert "excessive_mentions" in self._codes(content, text)

    def test_repeated_characters(self, content: ContentDatabase) -> None:
        assert "repeated_characters" in self._codes(content, "soooooo good")

    def test_currency_cluster(self, content: ContentDatabase) -> None:
        assert "currency_cluster" in self._codes(content, "earn $$$ today")

    def test_all_caps_words(self, content: ContentDatabase) -> None:
        assert "all_caps_words" in self._codes(content, "please DO NOT MISS this")

    def test_pattern_score_added_to_total(self, content: ContentDatabase) -> None:
        result = content.extract_and_check("free bitcoin soooooo fast", "twitter")
        assert result.results.summary.risk_score == 30
        assert result.pattern_score == 5
        assert result.total_score == 35


# ── Mention and Emoji Tests ───────────────────────────────────────────────


class TestMentionDatabase:
    def test_prefix_match(self, mentions: MentionDatabase) -> None:
        result = mentions.extract_and_check("thanks @free_followers_2024 and @alice", "twitter")
        assert result.results.banned == ["@free_followers_2024"]
        assert result.results.safe == ["@alice"]

    def test_name_pattern(self, mentions: MentionDatabase) -> None:
        entry = mentions.check_username("crypto_9000", "twitter")
        assert entry is not None
        assert entry.tier == SignalTier.RESTRICTED

    def test_reddit_handles(self, mentions: MentionDatabase) -> None:
        assert mentions.extract_tokens("ping u/Someone_Here and @nobody", "reddit") == ["u/someone_here"]


class TestEmojiDatabase:
    def test_combination_detected(self, emojis: EmojiDatabase) -> None:
        text = "Going up \U0001F4B0\U0001F680"
        result = emojis.extract_and_check(text, "twitter")
        assert "\U0001F4B0\U0001F680" in result.results.restricted
        assert "\U0001F4B0" in result.results.monitored

    def test_platform_scoped_emoji(self, emojis: EmojiDatabase) -> None:
        assert emojis.check_bulk(["\U0001F351"], "instagram").restricted == ["\U0001F351"]
        assert emojis.check_bulk(["\U0001F351"], "twitter").safe == ["\U0001F351"]


# ── Stats Tests ───────────────────────────────────────────────────────────


class TestStats:
    def test_hashtag_stats(self, hashtags: HashtagDatabase) -> None:
        stats = hashtags.get_stats()
        assert stats.total == len(hashtags)
        assert sum(stats.by_tier.values()) == stats.total
        assert stats.by_category["engagement"] > 0

    def test_default_catalog_cached(self) -> None:
        assert load_default_catalog() is load_default_catalog()
        assert set(load_default_catalog().get_stats()) == {
            "hashtags", "links", "content", "mentions", "emojis",
        }
