"""
Site settings and search response model tests.
"""

from core.models import MovieSearchResult, SiteSettings
from tests.factories.model_factories import make_search_payload


class TestSiteSettings:
    def test_merged_over_fills_empty_fields(self):
        defaults = SiteSettings(url="https://default.example/search", key="default-key")
        merged = SiteSettings(key="user-key").merged_over(defaults)
        assert merged.url == "https://default.example/search"
        assert merged.key == "user-key"

    def test_merged_over_keeps_own_values(self):
        own = SiteSettings(url="https://mine.example/search", key="mine")
        assert own.merged_over(SiteSettings(url="x", key="y")) == own

    def test_is_configured(self):
        assert SiteSettings(url="https://a", key="k").is_configured
        assert not SiteSettings(url="https://a").is_configured
        assert not SiteSettings(key="k").is_configured

    def test_key_hidden_from_repr(self):
        assert "secret-value" not in repr(SiteSettings(url="https://a", key="secret-value"))


class TestMovieSearchResult:
    def test_found(self):
        payload = make_search_payload(Title="Inception", Year=2010)
        result = MovieSearchResult.from_response(payload)
        assert result.found
        assert result.stats.title == "Inception"
        assert result.stats.year == 2010

    def test_alias_fields(self):
        result = MovieSearchResult.from_response(
            {"stats": {"Title": "Up", "Revenue (Millions)": 293.0, "Runtime (Minutes)": 96}}
        )
        assert result.stats.revenue == 293.0
        assert result.stats.runtime == 96

    def test_empty_stats_is_not_found(self):
        assert not MovieSearchResult.from_response({"stats": {}}).found
        assert not MovieSearchResult.from_response({}).found
        assert not MovieSearchResult.from_response([]).found
