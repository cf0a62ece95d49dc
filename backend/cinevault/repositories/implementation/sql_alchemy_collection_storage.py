import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from cinevault.config.environment import STORAGE_KEY, DEFAULT_USER_NAME
from cinevault.db.models import KeyValueORM
from cinevault.domain.dto import CollectionSnapshot, MovieSnapshot
from cinevault.domain.models import Genre, Movie, Review, User
from cinevault.repositories.interface.collection_storage import CollectionStorage
from cinevault.exceptions.repository import (
    RepositoryOperationException,
    InvalidEntityDataException
)

logger = logging.getLogger(__name__)


class SQLAlchemyCollectionStorage(CollectionStorage):
    def __init__(self, session: Session, storage_key: str = STORAGE_KEY):
        self.session = session
        self.storage_key = storage_key

    def _to_snapshot(self, user: User) -> CollectionSnapshot:
        return CollectionSnapshot(
            user_name=user.name,
            movies=tuple(movie.get_info() for movie in user.get_all_movies())
        )

    def _movie_to_domain(self, snapshot: MovieSnapshot) -> Movie:
        movie = Movie(
            title=snapshot.title,
            year=snapshot.year,
            director=snapshot.director,
            plot=snapshot.plot,
            poster=snapshot.poster,
            imdb_rating=snapshot.imdb_rating,
            runtime=snapshot.runtime,
            actors=snapshot.actors,
            imdb_id=snapshot.imdb_id,
            genre=Genre.from_tag(snapshot.genre),
            created_at=snapshot.date_added
        )

        if snapshot.user_rating:
            movie.set_user_rating(snapshot.user_rating)

        if isinstance(snapshot.flavor, tuple):
            for stunt in snapshot.flavor:
                movie.add_stunt(stunt)
        elif snapshot.flavor is not None:
            movie.set_flavor_level(snapshot.flavor)

        for review in snapshot.reviews:
            movie.add_review(Review(
                author=review.author,
                text=review.text,
                rating=review.rating,
                created_at=review.date
            ))
        return movie

    def _to_domain(self, snapshot: CollectionSnapshot) -> User:
        movies = [self._movie_to_domain(movie_snapshot) for movie_snapshot in snapshot.movies]

        user = User(
            name=snapshot.user_name or DEFAULT_USER_NAME,
            review_count=sum(len(movie.get_reviews()) for movie in movies)
        )
        for movie in movies:
            user.add_movie(movie)
        return user

    def save(self, user: User) -> None:
        try:
            payload = self._to_snapshot(user).model_dump_json(by_alias=True)

            row = self.session.get(KeyValueORM, self.storage_key)
            if row is None:
                self.session.add(KeyValueORM(key=self.storage_key, value=payload))
            else:
                row.value = payload

            self.session.commit()
            logger.info(f"Saved collection of {user.get_movie_count()} movies under '{self.storage_key}'")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to save collection: {str(e)}")

    def load(self) -> Optional[CollectionSnapshot]:
        try:
            row = self.session.get(KeyValueORM, self.storage_key)
        except Exception as e:
            raise RepositoryOperationException(f"Failed to load collection: {str(e)}")

        if row is None:
            return None

        try:
            return CollectionSnapshot.model_validate_json(row.value)
        except ValidationError as e:
            raise InvalidEntityDataException(f"Failed to convert stored collection: {str(e)}")

    def load_user(self) -> Optional[User]:
        snapshot = self.load()
        if snapshot is None:
            return None
        user = self._to_domain(snapshot)
        logger.info(f"Restored {user.get_movie_count()} movies for '{user.name}'")
        return user

    def clear(self) -> bool:
        try:
            row = self.session.get(KeyValueORM, self.storage_key)
            if not row:
                return False

            self.session.delete(row)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to clear collection: {str(e)}")
