"""Content source contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ExtractedContent:
    """
    Text pulled out of one source.

    ``supported`` is False when extraction for the source is not implemented
    yet and ``content`` holds a placeholder describing the source instead.
    """

    title: str
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    supported: bool = True
