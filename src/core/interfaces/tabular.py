"""Abstract interface for the tabular interchange file codec."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from src.core.entities.exchange import TabularDocument


@dataclass
class TabularRows:
    """Rows read from an interchange file, keyed by header."""

    headers: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)


class ITabularCodec(ABC):
    """Reads and writes one interchange file format."""

    extension: str
    media_type: str

    @abstractmethod
    def read(self, content: bytes, filename: str = "") -> TabularRows:
        """Parse the first sheet of a file into header-keyed rows."""
        pass

    @abstractmethod
    def write(self, document: TabularDocument) -> bytes:
        """Serialize a document, header row first."""
        pass
