"""Abstract contract for MediaType persistence."""

from abc import ABC, abstractmethod
from typing import Any

from core.models.media_type import MediaTypeDefinition


class MediaTypeRepository(ABC):
    """Contract for storing and retrieving MediaType definitions.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Services depend on this interface, not the implementation.
    Implementations do not validate schema rules; services do that first.
    """

    @abstractmethod
    def insert(self, *, definition: MediaTypeDefinition) -> MediaTypeDefinition:
        """Persist a new definition and return the stored record.

        Raises:
            DynamoDBError: If the id already exists or the write fails
        """

    @abstractmethod
    def patch(self, *, media_type_id: str, changes: dict[str, Any]) -> MediaTypeDefinition:
        """Apply attribute changes to an existing definition.

        Args:
            media_type_id: Definition to update
            changes: snake_case attribute names mapped to new values

        Returns:
            The stored record after the update

        Raises:
            NotFoundError: If the definition does not exist
            DynamoDBError: If the update fails
        """

    @abstractmethod
    def get(self, *, media_type_id: str) -> MediaTypeDefinition | None:
        """Fetch a definition, or None if it does not exist.

        Raises:
            DynamoDBError: If the fetch fails
        """

    @abstractmethod
    def list_all(self) -> list[MediaTypeDefinition]:
        """Return every stored definition (full scan).

        Raises:
            DynamoDBError: If the scan fails
        """

    @abstractmethod
    def remove(self, *, media_type_id: str) -> None:
        """Delete a definition.

        Raises:
            DynamoDBError: If deletion fails
        """
