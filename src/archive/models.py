"""Data models for archive resolution and verification."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SelectionPreferences:
    """User preferences steering variant selection."""
    hadoop_version: Optional[str] = None
    without_hadoop: bool = False


@dataclass(frozen=True)
class ChecksumRecord:
    """One ``<digest>  <filename>`` entry of a checksum artifact."""
    digest: str
    filename: str

    def to_line(self) -> str:
        """Render the record in the canonical double-space form."""
        return f"{self.digest}  {self.filename}"
