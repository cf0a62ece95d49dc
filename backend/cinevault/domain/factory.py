import logging
from typing import Union

from cinevault.domain.dto import MovieDetails
from cinevault.domain.models import Genre, Movie

logger = logging.getLogger(__name__)

# Checked in order, first match wins. "Action Comedy" is an ACTION movie,
# even though the comedy rule would match as well.
GENRE_RULES = (
    (("action",), Genre.ACTION),
    (("comedy",), Genre.COMEDY),
    (("drama",), Genre.DRAMA),
    (("horror",), Genre.HORROR),
    (("sci-fi", "science fiction"), Genre.SCI_FI),
)


class MovieFactory:
    @staticmethod
    def resolve_genre(genre_text) -> Genre:
        if not isinstance(genre_text, str):
            return Genre.GENERAL
        genre_lower = genre_text.lower()
        for keywords, genre in GENRE_RULES:
            if any(keyword in genre_lower for keyword in keywords):
                return genre
        return Genre.GENERAL

    @staticmethod
    def create_movie(record: Union[MovieDetails, dict]) -> Movie:
        if not isinstance(record, MovieDetails):
            record = MovieDetails.model_validate(record)

        genre = MovieFactory.resolve_genre(record.genre)
        logger.debug(f"Creating {genre.value} movie for {record.imdb_id} (genre string {record.genre!r})")

        return Movie(
            title=record.title,
            year=record.year,
            director=record.director,
            plot=record.plot,
            poster=record.poster,
            imdb_rating=record.imdb_rating,
            runtime=record.runtime,
            actors=record.actors,
            imdb_id=record.imdb_id,
            genre=genre
        )
