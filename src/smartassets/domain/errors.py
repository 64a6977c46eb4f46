from __future__ import annotations

"""
Domain Exceptions.

Fatal conditions of a synchronization run. Each one aborts the run
before anything is written to disk.
"""

from typing import List


class SmartAssetsError(Exception):
    """Base class for all application-specific errors."""

    pass


class MissingDocumentError(SmartAssetsError):
    """Raised when pubspec.yaml does not exist at the expected path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"pubspec.yaml not found at {path}")


class MalformedDocumentError(SmartAssetsError):
    """Raised when the document cannot be parsed into the expected key structure."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed document '{path}': {reason}")


class IdentifierCollisionError(SmartAssetsError):
    """Raised when distinct sources synthesize the same constant name."""

    def __init__(self, container: str, identifier: str, sources: List[str]):
        self.container = container
        self.identifier = identifier
        self.sources = list(sources)
        joined = ", ".join(f"'{s}'" for s in self.sources)
        super().__init__(
            f"Identifier collision in {container}: {identifier} is produced by {joined}"
        )
