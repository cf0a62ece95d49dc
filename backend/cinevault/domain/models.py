import logging
import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, List, Tuple, Union

from cinevault.config import (
    MIN_USER_RATING,
    MAX_USER_RATING,
    MIN_FLAVOR_LEVEL,
    MAX_FLAVOR_LEVEL,
)
from cinevault.domain import rendering
from cinevault.domain.dto import MovieSnapshot, ReviewSnapshot, UserStats

logger = logging.getLogger(__name__)


class Genre(str, Enum):
    GENERAL = "General"
    ACTION = "ACTION"
    COMEDY = "COMEDY"
    DRAMA = "DRAMA"
    HORROR = "HORROR"
    SCI_FI = "SCI-FI"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "Genre":
        """Case-insensitive lookup of a stored tag; unknown tags fall back to GENERAL."""
        if isinstance(tag, str):
            for genre in cls:
                if genre.value.lower() == tag.strip().lower():
                    return genre
        return cls.GENERAL


# name of the cosmetic attribute each specialised genre carries
FLAVOR_ATTRIBUTES = {
    Genre.ACTION: "stunts",
    Genre.COMEDY: "laugh_meter",
    Genre.DRAMA: "emotional_impact",
    Genre.HORROR: "scare_level",
    Genre.SCI_FI: "tech_level",
}


class GenreFlavor:
    """Extra genre-specific attribute. Stunts are a list, every other flavor is a 0-10 level."""

    def __init__(self, name: str, value: Union[int, float, List[str], None] = None):
        self.name = name
        if self.is_level:
            self._value = self._clamp(value or 0)
        else:
            self._value = list(value or [])

    @classmethod
    def for_genre(cls, genre: Genre, value=None) -> Optional["GenreFlavor"]:
        name = FLAVOR_ATTRIBUTES.get(genre)
        if name is None:
            return None
        return cls(name, value)

    @property
    def is_level(self) -> bool:
        return self.name != "stunts"

    @property
    def value(self) -> Union[int, float, Tuple[str, ...]]:
        if self.is_level:
            return self._value
        return tuple(self._value)

    def set_level(self, level) -> bool:
        if not self.is_level or isinstance(level, bool) or not isinstance(level, (int, float)):
            return False
        self._value = self._clamp(level)
        return True

    def add_stunt(self, stunt: str) -> bool:
        if self.is_level:
            return False
        self._value.append(stunt)
        return True

    @staticmethod
    def _clamp(level):
        return max(MIN_FLAVOR_LEVEL, min(MAX_FLAVOR_LEVEL, level))


class Review:
    def __init__(
        self,
        author: str,
        text: str,
        rating: Union[int, float],
        created_at: datetime = None
    ):
        self._author = author
        self._text = text
        self._rating = rating
        self._created_at = created_at or datetime.now()

    @property
    def author(self) -> str:
        return self._author

    @property
    def text(self) -> str:
        return self._text

    @property
    def rating(self) -> Union[int, float]:
        return self._rating

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def get_formatted_date(self) -> str:
        """e.g. 'October 19, 2026'"""
        return f"{self._created_at:%B} {self._created_at.day}, {self._created_at.year}"

    def display_review(self) -> str:
        return rendering.render_review(self)

    def to_snapshot(self) -> ReviewSnapshot:
        return ReviewSnapshot(
            author=self._author,
            text=self._text,
            rating=self._rating,
            date=self._created_at
        )


class Movie:
    def __init__(
        self,
        title: str,
        year: str,
        director: str,
        plot: str,
        poster: str,
        imdb_rating: Optional[float],
        runtime: str,
        actors: str,
        imdb_id: str,
        genre: Genre = Genre.GENERAL,
        created_at: datetime = None
    ):
        self.title = title
        self.year = year
        self.director = director
        self.plot = plot
        self.poster = poster
        self._imdb_rating = imdb_rating
        self.runtime = runtime
        self.actors = actors
        self._imdb_id = imdb_id
        self._genre = genre

        self._user_rating: Optional[int] = None
        self._created_at = created_at or datetime.now()
        self._reviews: List[Review] = []
        self._flavor = GenreFlavor.for_genre(genre)

    @property
    def imdb_id(self) -> str:
        return self._imdb_id

    @property
    def imdb_rating(self) -> Optional[float]:
        return self._imdb_rating

    @property
    def genre(self) -> Genre:
        return self._genre

    def get_user_rating(self) -> Optional[int]:
        return self._user_rating

    def is_rated(self) -> bool:
        return self._user_rating is not None

    def set_user_rating(self, rating: int) -> bool:
        if isinstance(rating, bool) or not isinstance(rating, int) \
                or not MIN_USER_RATING <= rating <= MAX_USER_RATING:
            logger.warning(
                f"Rejected rating {rating!r} for {self._imdb_id}: "
                f"must be between {MIN_USER_RATING} and {MAX_USER_RATING}"
            )
            return False
        self._user_rating = rating
        return True

    def get_created_at(self) -> datetime:
        return self._created_at

    def add_review(self, review: Review) -> None:
        self._reviews.append(review)

    def get_reviews(self) -> Tuple[Review, ...]:
        return tuple(self._reviews)

    def get_genre(self) -> str:
        return self._genre.value

    def get_flavor(self) -> Optional[GenreFlavor]:
        return self._flavor

    def set_flavor_level(self, level) -> bool:
        """Laugh meter, emotional impact, scare level or tech level depending on genre."""
        if self._flavor is None:
            return False
        return self._flavor.set_level(level)

    def add_stunt(self, stunt: str) -> bool:
        if self._flavor is None:
            return False
        return self._flavor.add_stunt(stunt)

    def render_card(self) -> str:
        return rendering.render_card(self)

    def get_info(self) -> MovieSnapshot:
        return MovieSnapshot(
            title=self.title,
            year=self.year,
            director=self.director,
            plot=self.plot,
            poster=self.poster,
            imdb_rating=self._imdb_rating,
            runtime=self.runtime,
            actors=self.actors,
            imdb_id=self._imdb_id,
            user_rating=self._user_rating or 0,
            genre=self.get_genre(),
            date_added=self._created_at,
            flavor=self._flavor.value if self._flavor else None,
            reviews=tuple(review.to_snapshot() for review in self._reviews)
        )


def _year_value(year) -> int:
    # "2010", "2010–2013" and "N/A" all show up in catalog data
    match = re.match(r"\s*(\d{4})", str(year or ""))
    return int(match.group(1)) if match else 0


SORT_FUNCTIONS = {
    "title": (lambda movie: (movie.title or "").casefold(), False),
    "year": (lambda movie: _year_value(movie.year), True),
    "rating": (lambda movie: movie.get_user_rating() or 0, True),
    "dateAdded": (lambda movie: movie.get_created_at(), True),
}


class User:
    def __init__(
        self,
        name: str,
        review_count: int = 0
    ):
        self.name = name
        self._movies: dict[str, Movie] = {}
        self._review_count = review_count

    @property
    def review_count(self) -> int:
        return self._review_count

    def get_initials(self) -> str:
        return "".join(word[0] for word in self.name.split() if word).upper()[:2]

    def rename(self, name: str) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        self.name = name.strip()
        return True

    def add_movie(self, movie: Movie) -> bool:
        if not isinstance(movie, Movie):
            logger.error(f"Invalid movie object: {movie!r}")
            return False
        self._movies[movie.imdb_id] = movie
        return True

    def remove_movie(self, imdb_id: str) -> bool:
        return self._movies.pop(imdb_id, None) is not None

    def get_movie(self, imdb_id: str) -> Optional[Movie]:
        return self._movies.get(imdb_id)

    def has_movie(self, imdb_id: str) -> bool:
        return imdb_id in self._movies

    def get_all_movies(self) -> List[Movie]:
        return list(self._movies.values())

    def get_movie_count(self) -> int:
        return len(self._movies)

    def get_movies_by_genre(self, genre: str) -> List[Movie]:
        wanted = (genre or "").lower()
        return [movie for movie in self._movies.values() if movie.get_genre().lower() == wanted]

    def add_review_to_movie(self, imdb_id: str, text: str, rating: Union[int, float]) -> bool:
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            logger.warning(f"Rejected review rating {rating!r} for {imdb_id}: must be a number")
            return False
        movie = self.get_movie(imdb_id)
        if movie is None:
            return False
        movie.add_review(Review(self.name, text, rating))
        self._review_count += 1
        return True

    def get_average_rating(self) -> float:
        movies = self.get_all_movies()
        if not movies:
            return 0.0
        total = sum(movie.get_user_rating() or 0 for movie in movies)
        average = Decimal(total) / Decimal(len(movies))
        return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    def sort_collection(self, sort_by: str = "title") -> List[Movie]:
        """Return a sorted copy of the collection; the stored order is left alone.

        Unknown keys give back the collection in its current order.
        """
        movies = self.get_all_movies()
        if sort_by not in SORT_FUNCTIONS:
            return movies
        key, descending = SORT_FUNCTIONS[sort_by]
        return sorted(movies, key=key, reverse=descending)

    def get_stats(self) -> UserStats:
        return UserStats(
            movie_count=self.get_movie_count(),
            review_count=self._review_count,
            average_rating=self.get_average_rating()
        )
