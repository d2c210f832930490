from typing import Any, Optional

from pydantic import BaseModel, Field


class ProfileScores(BaseModel):
    name: Optional[str] = None
    # {dimension: score}; values outside 0-4 or non-numeric become "unknown"
    scores: dict[str, Any] = Field(default_factory=dict)


class CompareRequest(BaseModel):
    person_a: ProfileScores
    person_b: ProfileScores
    include_traces: bool = False


class ShareTextResponse(BaseModel):
    text: str
    template_ids: dict[str, Any]


class CorpusDefectEntry(BaseModel):
    kind: str
    detail: str
    template_ids: list[str]


class CorpusAuditResponse(BaseModel):
    template_count: int
    clean: bool
    defects: list[CorpusDefectEntry]
