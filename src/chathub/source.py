"""Abstract base class for chat data sources."""

from abc import ABC, abstractmethod

from .core import ChatModelsResponse, Session


class ChatDataSource(ABC):
    """Base class for the collaborators that supply raw chat data.

    A source hands out conversation sessions and the agent catalog; everything
    downstream (grouping, filtering, token encoding) works on what it returns.
    """

    name: str  # "json_file", ...

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if this source has data to read."""
        ...

    @abstractmethod
    def list_sessions(self) -> list[Session]:
        """Return all conversation sessions, in the source's order."""
        ...

    @abstractmethod
    def get_models(self) -> ChatModelsResponse:
        """Return the agent catalog keyed by provider id."""
        ...
