import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any

import httpx
from pydantic import ValidationError

from cinevault.config.environment import OMDB_API_KEY, OMDB_BASE_URL
from cinevault.domain.dto import MovieDetails, SearchResult
from cinevault.exceptions.metadata import (
    ConfigurationException,
    MetadataRequestException,
    MovieNotFoundException
)

logger = logging.getLogger(__name__)


class MetadataService(ABC):
    @abstractmethod
    async def search_movies(self, search_term: str) -> List["SearchResult"]:
        pass

    @abstractmethod
    async def get_movie_details(self, imdb_id: str) -> "MovieDetails":
        pass


class OMDBMetadataService(MetadataService):
    """
    OMDb catalog client.

    Both calls are single GET requests; a "Response": "False" payload becomes a
    MovieNotFoundException carrying the catalog's own message, anything that goes
    wrong on the wire becomes a MetadataRequestException. Nothing is retried.
    A missing API key only fails once a request is made, with a ConfigurationException.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OMDB_BASE_URL,
        client: Optional[httpx.AsyncClient] = None
    ):
        self._api_key = api_key or OMDB_API_KEY
        self._base_url = base_url
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _get(self, params: Dict[str, str], not_found_message: str) -> Dict[str, Any]:
        if not self._api_key:
            logger.error("OMDb request skipped: no API key configured")
            raise ConfigurationException("OMDB_API_KEY not set and no api_key passed")

        try:
            response = await self._client.get(self._base_url, params={"apikey": self._api_key, **params})
        except httpx.HTTPError as e:
            logger.error(f"OMDb request failed: {str(e)}")
            raise MetadataRequestException(f"Could not reach the movie catalog: {str(e)}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OMDb returned invalid JSON (status {response.status_code}): {str(e)}")
            raise MetadataRequestException("The movie catalog returned an unreadable response")

        if not isinstance(data, dict):
            raise MetadataRequestException("The movie catalog returned an unreadable response")

        if data.get("Response") != "True":
            raise MovieNotFoundException(data.get("Error") or not_found_message)
        return data

    async def search_movies(self, search_term: str) -> List[SearchResult]:
        data = await self._get({"s": search_term}, "Movie not found")

        results = []
        for item in data.get("Search") or []:
            try:
                results.append(SearchResult.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed search result {item!r}: {str(e)}")

        logger.info(f"Search for '{search_term}' returned {len(results)} results")
        return results

    async def get_movie_details(self, imdb_id: str) -> MovieDetails:
        data = await self._get({"i": imdb_id, "plot": "full"}, "Movie details not found")
        return MovieDetails.model_validate(data)
