"""
Static Site Models - search settings and search responses.

The generated page keeps its API settings under a single named entry
("apiSettings"). Here the same settings are an explicit object handed to
whatever performs the search, so the search logic needs no storage.

Exports:
    SiteSettings: Search API url + subscription key
    MovieStats: The "stats" payload of a search response
    MovieSearchResult: Parsed search response
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SiteSettings(BaseModel):
    """Search API settings used by the frontend and the search client."""

    url: str = Field(default="", description="Search endpoint, queried as {url}?title=...")
    key: str = Field(default="", repr=False, description="Ocp-Apim-Subscription-Key value")

    def merged_over(self, defaults: 'SiteSettings') -> 'SiteSettings':
        """Fill empty fields from defaults."""
        return SiteSettings(
            url=self.url or defaults.url,
            key=self.key or defaults.key,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key)


class MovieStats(BaseModel):
    """Movie details as returned by the search API."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    title: Optional[str] = Field(default=None, alias="Title")
    year: Optional[Any] = Field(default=None, alias="Year")
    genre: Optional[str] = Field(default=None, alias="Genre")
    director: Optional[str] = Field(default=None, alias="Director")
    actors: Optional[str] = Field(default=None, alias="Actors")
    description: Optional[str] = Field(default=None, alias="Description")
    rating: Optional[Any] = Field(default=None, alias="Rating")
    votes: Optional[Any] = Field(default=None, alias="Votes")
    revenue: Optional[Any] = Field(default=None, alias="Revenue (Millions)")
    metascore: Optional[Any] = Field(default=None, alias="Metascore")
    rank: Optional[Any] = Field(default=None, alias="Rank")
    runtime: Optional[Any] = Field(default=None, alias="Runtime (Minutes)")


class MovieSearchResult(BaseModel):
    """Parsed search response: {"stats": {...}}."""

    stats: Optional[MovieStats] = None

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> 'MovieSearchResult':
        """Build from the raw JSON body; an empty stats object means no match."""
        stats = payload.get('stats') if isinstance(payload, dict) else None
        if not stats:
            return cls(stats=None)
        return cls(stats=MovieStats.model_validate(stats))

    @property
    def found(self) -> bool:
        return self.stats is not None
