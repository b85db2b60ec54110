"""Pydantic models for analysis inputs and outputs."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class MessageType(str, Enum):
    PACS_008 = "PACS_008"
    PACS_002 = "PACS_002"
    CAMT_053 = "CAMT_053"
    PAIN_001 = "PAIN_001"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        """Display label, e.g. 'PACS.008' or 'Unknown'."""
        if self is MessageType.UNKNOWN:
            return "Unknown"
        return self.value.replace("_", ".")


class DiffKind(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class DiffMode(str, Enum):
    CHARS = "chars"   # single-line markup
    LINES = "lines"


# ---------------------------------------------------------------------------
# Component results
# ---------------------------------------------------------------------------

class DiffSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    kind: DiffKind


class SizeEstimate(BaseModel):
    """Compressed-size signal for one text.  Sizes are UTF-8 byte counts."""
    model_config = ConfigDict(frozen=True)

    original_size: int = Field(ge=0)
    compressed_size: int = Field(ge=0)
    compression_ratio: float     # 0.0 when original_size == 0


class StructureResult(BaseModel):
    """Outcome of a structural decode: a tree, or the reason there is none."""
    model_config = ConfigDict(frozen=True)

    tree: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


# ---------------------------------------------------------------------------
# Orchestrated analysis
# ---------------------------------------------------------------------------

class AnalysisResult(BaseModel):
    """Everything one "Analyze" action produces.  None means not computed."""
    model_config = ConfigDict(frozen=True)

    original_size: int = Field(ge=0)
    compressed_size: int | None = None
    compression_ratio: float | None = None
    message_type: MessageType = MessageType.UNKNOWN
    structural_content: dict[str, Any] | None = None
    # Only present when a comparison text was supplied
    similarity: float | None = None
    diff_mode: DiffMode | None = None
    differences: list[DiffSegment] | None = None
    # True when the differences were computed over redacted texts
    diff_masked: bool = False

    @property
    def has_comparison(self) -> bool:
        return self.differences is not None or self.similarity is not None

    def to_json(self, indent: int = 2) -> str:
        """Export as indented JSON (the analyzer's "copy" action)."""
        return json.dumps(self.model_dump(mode="json"), indent=indent, ensure_ascii=False)
