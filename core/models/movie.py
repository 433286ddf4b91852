"""
Movie Models - CSV rows and Cosmos DB documents.

Column names follow the IMDB-Movie-Data.csv header. The Cosmos container
is partitioned on /genre and documents use the dataset Rank as id.

Exports:
    MovieRecord: Validated CSV row
    ImportSummary: Counters for one import pass
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MovieRecord(BaseModel):
    """
    One validated row of the movie dataset.

    Missing or empty required columns, and numeric columns that do not
    parse, fail validation; the importer turns that into a skipped row.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    rank: str = Field(..., alias="Rank", min_length=1)
    title: str = Field(..., alias="Title")
    genre: str = Field(..., alias="Genre")
    description: str = Field(..., alias="Description")
    director: str = Field(..., alias="Director")
    actors: str = Field(..., alias="Actors")
    year: int = Field(..., alias="Year")
    runtime: int = Field(..., alias="Runtime (Minutes)")
    rating: float = Field(..., alias="Rating")
    votes: int = Field(..., alias="Votes")
    revenue: Optional[float] = Field(default=None, alias="Revenue (Millions)")
    metascore: Optional[int] = Field(default=None, alias="Metascore")

    @field_validator('revenue', 'metascore', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        """Blank optional columns are stored as null."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    def to_document(self) -> Dict[str, Any]:
        """Cosmos DB item; genre doubles as the partition key value."""
        return {
            'id': self.rank,
            'title': self.title,
            'genre': self.genre,
            'description': self.description,
            'director': self.director,
            'actors': self.actors,
            'year': self.year,
            'runtime': self.runtime,
            'rating': self.rating,
            'votes': self.votes,
            'revenue': self.revenue,
            'metascore': self.metascore,
        }


class ImportSummary(BaseModel):
    """Counters for one import pass; imported == total - skipped."""

    total: int = 0
    imported: int = 0
    skipped: int = 0
    failures: List[str] = Field(default_factory=list, description="One line per skipped row")
