"""
Purpose: Typed configuration models with validation.
Constraints: Pure models; no file I/O or side effects.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, ConfigDict, field_validator

DEFAULT_TERMINATORS: List[str] = [
    "\n\n",
    "In addition",
    "Warning",
    "</p>",
    "</code>",
    "</pre>",
    "</blockquote>",
]


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="allow")
    site: str = "stackoverflow"
    tagged: str = "r"
    body_filter: str = "Error"
    pagesize: int = Field(default=100, ge=1, le=100)
    num_pages: int = Field(default=10, ge=1)
    sort: str = "activity"
    order: str = "desc"
    api_key: str = ""
    timeout: int = 10
    mock_mode: bool = False


class AnalysisSettings(BaseModel):
    model_config = ConfigDict(extra="allow")
    top_k: int = Field(default=30, ge=0)
    sample_size: int = Field(default=5, ge=0)
    sample_seed: int = 0
    unescape_html: bool = False
    terminators: List[str] = Field(default_factory=lambda: list(DEFAULT_TERMINATORS))

    @field_validator("terminators")
    @classmethod
    def _non_empty_terminators(cls, value: List[str]) -> List[str]:
        cleaned = [t for t in value if t]
        if not cleaned:
            raise ValueError("at least one non-empty terminator is required")
        return cleaned
