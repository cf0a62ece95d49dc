from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional, Tuple, Union

from cinevault.config import MISSING_VALUE


def _to_text(v):
    # OMDb and old snapshots hand back None, numbers or strings for free-text fields
    if v is None:
        return ""
    return str(v)


def _to_score(v):
    if v is None or v == "" or v == MISSING_VALUE:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str = Field("", alias="Title")
    year: str = Field("", alias="Year")
    imdb_id: str = Field(..., alias="imdbID")
    type: str = Field("", alias="Type")
    poster: str = Field("", alias="Poster")

    @field_validator('title', 'year', 'type', 'poster', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)


class MovieDetails(BaseModel):
    """Full catalog record, as returned by a detail lookup."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field("", alias="Title")
    year: str = Field("", alias="Year")
    director: str = Field("", alias="Director")
    plot: str = Field("", alias="Plot")
    poster: str = Field("", alias="Poster")
    imdb_rating: Optional[float] = Field(None, alias="imdbRating")
    runtime: str = Field("", alias="Runtime")
    actors: str = Field("", alias="Actors")
    imdb_id: str = Field("", alias="imdbID")
    genre: str = Field("", alias="Genre")

    @field_validator('title', 'year', 'director', 'plot', 'poster', 'runtime', 'actors', 'imdb_id', 'genre', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator('imdb_rating', mode='before')
    @classmethod
    def coerce_score(cls, v):
        return _to_score(v)


class ReviewSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str = ""
    text: str = ""
    rating: Union[int, float] = 0
    date: datetime = Field(default_factory=datetime.now)

    @field_validator('author', 'text', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator('rating', mode='before')
    @classmethod
    def coerce_rating(cls, v):
        return 0 if v is None else v


class MovieSnapshot(BaseModel):
    """Flattened, read-only view of a movie. Field aliases are the persisted names."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str = ""
    year: str = ""
    director: str = ""
    plot: str = ""
    poster: str = ""
    imdb_rating: Optional[float] = Field(None, alias="imdbRating")
    runtime: str = ""
    actors: str = ""
    imdb_id: str = Field(..., alias="imdbID")
    # 0 means unrated
    user_rating: int = Field(0, alias="userRating")
    genre: str = "General"
    date_added: datetime = Field(default_factory=datetime.now, alias="dateAdded")
    flavor: Union[int, float, Tuple[str, ...], None] = None
    reviews: Tuple[ReviewSnapshot, ...] = ()

    @field_validator('title', 'year', 'director', 'plot', 'poster', 'runtime', 'actors', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator('imdb_rating', mode='before')
    @classmethod
    def coerce_score(cls, v):
        return _to_score(v)

    @field_validator('user_rating', mode='before')
    @classmethod
    def coerce_user_rating(cls, v):
        return 0 if v is None else v

    @field_validator('genre', mode='before')
    @classmethod
    def coerce_genre(cls, v):
        return _to_text(v) or "General"

    @field_validator('reviews', mode='before')
    @classmethod
    def coerce_reviews(cls, v):
        return () if v is None else v


class CollectionSnapshot(BaseModel):
    """The single persisted record: display name plus every movie."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    user_name: str = Field("", alias="userName")
    movies: Tuple[MovieSnapshot, ...] = ()

    @field_validator('movies', mode='before')
    @classmethod
    def coerce_movies(cls, v):
        return () if v is None else v


class UserStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    movie_count: int
    review_count: int
    average_rating: float


class HandlerResult(BaseModel):
    success: bool
    message: str = ""
    data: Any = None
    # False when the change was applied in memory but could not be written to storage
    saved: bool = True

    @classmethod
    def ok(cls, message: str = "", data=None, saved: bool = True) -> "HandlerResult":
        return cls(success=True, message=message, data=data, saved=saved)

    @classmethod
    def fail(cls, message: str) -> "HandlerResult":
        return cls(success=False, message=message)
