"""
Analysis models and schemas.
"""

from typing import List, Optional, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ContentItem(BaseModel):
    """One ingested unit as the client sends it back for analysis."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None     # file uploads
    title: Optional[str] = None    # youtube / url / text
    content: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    uploadedAt: Optional[str] = None

    @field_validator("id", "type", "name", "title", "content", "uploadedAt", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> Optional[str]:
        # Items are rendered into prompt text, so loosely typed scalars are accepted.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def _ignore_non_mapping_metadata(cls, value: Any) -> Optional[Dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @property
    def label(self) -> str:
        return self.name or self.title or ""


class AnalyzeRequest(BaseModel):
    content: Optional[List[ContentItem]] = None


class LearningStep(BaseModel):
    title: str
    description: str
    duration: str


class Insight(BaseModel):
    title: str
    description: str


class QuestionAnswer(BaseModel):
    question: str
    answer: str


class AnalysisResult(BaseModel):
    """Four-part analysis of one or more content items."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    created_at: str
    source_name: str
    confidence: int
    summary: str
    learning_plan: List[LearningStep]
    insights: List[Insight]
    questions: List[QuestionAnswer]
    type: Literal["comprehensive"] = "comprehensive"
