"""Abstract contract for looking up media items that use a MediaType."""

from abc import ABC, abstractmethod


class MediaReferenceRepository(ABC):
    """Read-only view over the media store, used for referential checks."""

    @abstractmethod
    def count_references(self, *, media_type_id: str) -> int:
        """Count media items whose custom MediaType is `media_type_id`.

        Raises:
            DynamoDBError: If the count cannot be obtained
        """
