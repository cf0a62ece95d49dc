from abc import ABC, abstractmethod
from typing import Optional

from cinevault.domain.dto import CollectionSnapshot
from cinevault.domain.models import User


class CollectionStorage(ABC):
    @abstractmethod
    def save(self, user: User) -> None:
        pass

    @abstractmethod
    def load(self) -> Optional["CollectionSnapshot"]:
        pass

    @abstractmethod
    def load_user(self) -> Optional["User"]:
        pass

    @abstractmethod
    def clear(self) -> bool:
        pass
