"""
Repository Interface Definitions

Defines the abstract interface for job repository operations.
This keeps the service and API layers independent of MongoDB so tests
can run against an in-memory implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents actually modified (or deleted)
        inserted_id: ID of the inserted document (if any)
    """
    matched_count: int
    modified_count: int
    inserted_id: Optional[str] = None


class JobRepositoryInterface(ABC):
    """
    Abstract interface for the jobs collection.

    Implementations:
    - MongoJobRepository: MongoDB via PyMongo

    All methods are fail-fast: store errors propagate to the caller,
    which maps them to an internal error at the API boundary.
    """

    @abstractmethod
    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single job document.

        Args:
            filter: MongoDB query filter (e.g., {"_id": ObjectId(...)})

        Returns:
            Document dict if found, None otherwise
        """
        pass

    @abstractmethod
    def find(
        self,
        filter: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple job documents.

        Args:
            filter: MongoDB query filter
            sort: Sort order as list of (field, direction) tuples

        Returns:
            List of matching documents
        """
        pass

    @abstractmethod
    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """
        Insert a single document.

        The document's "_id" is set to the generated identifier.

        Returns:
            WriteResult with inserted_id set to the new document's _id
        """
        pass

    @abstractmethod
    def update_one(self, filter: Dict[str, Any], update: Dict[str, Any]) -> WriteResult:
        """
        Update a single document.

        Args:
            filter: MongoDB query filter
            update: Update operations (e.g., {"$set": {...}})

        Returns:
            WriteResult with match/modify counts
        """
        pass

    @abstractmethod
    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """
        Delete a single document.

        Returns:
            WriteResult whose matched_count is the number of deleted documents
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the store is reachable."""
        pass
