import logging
from typing import List, Optional, Union

from cinevault.config import DEFAULT_SORT_KEY, MIN_USER_RATING, MAX_USER_RATING
from cinevault.config.environment import DEFAULT_USER_NAME
from cinevault.domain.dto import HandlerResult, MovieSnapshot, UserStats
from cinevault.domain.factory import MovieFactory
from cinevault.domain.models import Movie, User
from cinevault.repositories import CollectionStorage
from cinevault.service.metadata_service import MetadataService
from cinevault.service.notifications import Notifier, LoggingNotifier, INFO, SUCCESS, ERROR
from cinevault.exceptions.metadata import MetadataServiceException, MovieNotFoundException
from cinevault.exceptions.repository import RepositoryException

logger = logging.getLogger(__name__)

ALL_GENRES = "all"


class CollectionService:
    """
    Handlers behind the collection UI.

    Each handler works on the explicit session context it was built with
    (user, storage, catalog, factory, notifier), saves the whole aggregate after
    every successful change and reports the outcome both as a HandlerResult and
    through the notifier. Failures never raise; a change that could not be
    written to storage still succeeds but comes back with saved=False.
    """

    def __init__(
        self,
        user: User,
        storage: CollectionStorage,
        metadata_service: MetadataService,
        factory: Optional[MovieFactory] = None,
        notifier: Optional[Notifier] = None
    ):
        self._user = user
        self._storage = storage
        self._metadata_service = metadata_service
        self._factory = factory or MovieFactory()
        self._notifier = notifier or LoggingNotifier()

    @property
    def user(self) -> User:
        return self._user

    @property
    def metadata_service(self) -> MetadataService:
        return self._metadata_service

    def _fail(self, message: str) -> HandlerResult:
        self._notifier.notify(message, ERROR)
        return HandlerResult.fail(message)

    def _persist(self) -> bool:
        try:
            self._storage.save(self._user)
            return True
        except RepositoryException as e:
            logger.error(f"Error saving collection: {str(e)}")
            self._notifier.notify("Could not save your collection", ERROR)
            return False

    async def search(self, search_term: str) -> HandlerResult:
        term = (search_term or "").strip()
        if not term:
            return self._fail("Please enter a movie title")

        try:
            results = await self._metadata_service.search_movies(term)
        except MovieNotFoundException as e:
            return self._fail(str(e))
        except MetadataServiceException as e:
            return self._fail(f"Search failed: {str(e)}")

        return HandlerResult.ok(f"Found {len(results)} movies", data=results)

    async def add_to_collection(self, imdb_id: str) -> HandlerResult:
        existing = self._user.get_movie(imdb_id)
        if existing is not None:
            message = f"{existing.title} is already in your collection"
            self._notifier.notify(message, INFO)
            return HandlerResult.fail(message)

        try:
            details = await self._metadata_service.get_movie_details(imdb_id)
        except MovieNotFoundException as e:
            return self._fail(str(e))
        except MetadataServiceException as e:
            return self._fail(f"Failed to add movie: {str(e)}")

        movie = self._factory.create_movie(details)
        self._user.add_movie(movie)
        saved = self._persist()

        message = f"{movie.title} added to your collection!"
        self._notifier.notify(message, SUCCESS)
        return HandlerResult.ok(message, data=movie, saved=saved)

    def rate_movie(self, imdb_id: str, rating: int) -> HandlerResult:
        movie = self._user.get_movie(imdb_id)
        if movie is None:
            return self._fail("Movie not found in your collection")

        if not movie.set_user_rating(rating):
            return self._fail(f"Rating must be between {MIN_USER_RATING} and {MAX_USER_RATING}")

        saved = self._persist()
        message = f"Rated {movie.title} {rating}/{MAX_USER_RATING}"
        self._notifier.notify(message, SUCCESS)
        return HandlerResult.ok(message, data=rating, saved=saved)

    def add_review(self, imdb_id: str, text: str, rating: Optional[Union[int, float]] = None) -> HandlerResult:
        """Review a movie. Without an explicit rating the movie's current user rating is recorded."""
        body = (text or "").strip()
        if not body:
            return self._fail("Please write a review first")

        movie = self._user.get_movie(imdb_id)
        if movie is None:
            return self._fail("Movie not found in your collection")

        if rating is None:
            rating = movie.get_user_rating() or 0

        if not self._user.add_review_to_movie(imdb_id, body, rating):
            return self._fail("Review rating must be a number")
        saved = self._persist()

        self._notifier.notify("Review added!", SUCCESS)
        return HandlerResult.ok("Review added!", data=movie.get_reviews()[-1], saved=saved)

    def remove_movie(self, imdb_id: str) -> HandlerResult:
        movie = self._user.get_movie(imdb_id)
        if movie is None or not self._user.remove_movie(imdb_id):
            return self._fail("Movie not found in your collection")

        saved = self._persist()
        message = f"{movie.title} removed from your collection"
        self._notifier.notify(message, SUCCESS)
        return HandlerResult.ok(message, saved=saved)

    def get_collection(self, sort_key: str = DEFAULT_SORT_KEY, genre: Optional[str] = None) -> List[Movie]:
        movies = self._user.sort_collection(sort_key)
        if genre and genre.lower() != ALL_GENRES:
            wanted = {id(movie) for movie in self._user.get_movies_by_genre(genre)}
            movies = [movie for movie in movies if id(movie) in wanted]
        return movies

    def render_collection(self, sort_key: str = DEFAULT_SORT_KEY, genre: Optional[str] = None) -> List[str]:
        return [movie.render_card() for movie in self.get_collection(sort_key, genre)]

    def get_movie_details(self, imdb_id: str) -> Optional[MovieSnapshot]:
        movie = self._user.get_movie(imdb_id)
        return movie.get_info() if movie else None

    def rename_profile(self, name: str) -> HandlerResult:
        if not self._user.rename(name):
            return self._fail("Please enter a name")

        saved = self._persist()
        message = f"Profile updated to {self._user.name}"
        self._notifier.notify(message, SUCCESS)
        return HandlerResult.ok(message, data=self._user.get_initials(), saved=saved)

    def get_stats(self) -> UserStats:
        return self._user.get_stats()

    def clear_collection(self) -> HandlerResult:
        try:
            self._storage.clear()
        except RepositoryException as e:
            logger.error(f"Error clearing collection: {str(e)}")
            return self._fail("Could not clear your collection")

        self._user = User(DEFAULT_USER_NAME)
        self._notifier.notify("Collection cleared", SUCCESS)
        return HandlerResult.ok("Collection cleared")
