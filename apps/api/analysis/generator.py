"""
Comprehensive analysis generation.

The combined content of every submitted item is sent to the completion
gateway four times, once per analysis kind. Kinds run concurrently and each
one degrades to its own default value on failure, so a caller always gets a
complete ``AnalysisResult``.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from analysis.models import AnalysisResult, ContentItem, Insight, LearningStep, QuestionAnswer
from analysis.parsing import parse_structured_list
from config import settings
from services.gateway import CompletionGateway, UNAVAILABLE_REPLY

logger = logging.getLogger(__name__)

PLACEHOLDER_CONFIDENCE = 85
BLOCK_DELIMITER = "\n\n---\n\n"


# ==================== Prompts ====================

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert content analyst. Create concise, informative summaries that capture the key "
    "points and main themes of the provided content. Focus on the most important information that a "
    "developer would need to know."
)
LEARNING_PLAN_SYSTEM_PROMPT = (
    "You are an expert learning designer. Create structured learning plans that help developers master "
    "the concepts in the provided content. Break down complex topics into manageable steps with "
    "estimated time commitments."
)
INSIGHTS_SYSTEM_PROMPT = (
    "You are an expert knowledge extractor. Identify the most valuable insights, patterns, and key "
    "takeaways from technical content. Focus on actionable insights that developers can apply immediately."
)
QA_SYSTEM_PROMPT = (
    "You are an expert educator. Generate thoughtful questions and comprehensive answers that help "
    "reinforce understanding of the content. Focus on questions that test both conceptual understanding "
    "and practical application."
)

SUMMARY_PROMPT = "Please provide a comprehensive summary of the following content:\n\n{content}"
LEARNING_PLAN_PROMPT = (
    "Based on this content, create a structured learning plan with 4-6 steps. For each step, provide a "
    "title, description, and estimated duration. Format as JSON array with objects containing 'title', "
    "'description', and 'duration' fields:\n\n{content}"
)
INSIGHTS_PROMPT = (
    "Extract 4-6 key insights from this content. Format as JSON array with objects containing 'title' "
    "and 'description' fields:\n\n{content}"
)
QA_PROMPT = (
    "Generate 5-7 questions and answers based on this content. Format as JSON array with objects "
    "containing 'question' and 'answer' fields:\n\n{content}"
)


# ==================== Fallbacks ====================

def default_learning_plan() -> List[LearningStep]:
    return [
        LearningStep(
            title="Foundation Review",
            description="Review the basic concepts and terminology covered in the content",
            duration="30 minutes",
        ),
        LearningStep(
            title="Deep Dive Study",
            description="Study the main topics in detail with additional research",
            duration="2 hours",
        ),
        LearningStep(
            title="Practical Application",
            description="Apply the concepts through hands-on exercises or projects",
            duration="3 hours",
        ),
        LearningStep(
            title="Knowledge Validation",
            description="Test your understanding through quizzes or peer discussions",
            duration="45 minutes",
        ),
    ]


def default_insights() -> List[Insight]:
    return [
        Insight(
            title="Key Concept Identified",
            description="The content covers important foundational concepts that are essential for understanding the topic",
        ),
        Insight(
            title="Practical Applications",
            description="Several real-world applications and use cases are presented that demonstrate practical value",
        ),
        Insight(
            title="Best Practices",
            description="The material includes recommended approaches and best practices from industry experts",
        ),
    ]


def default_questions() -> List[QuestionAnswer]:
    return [
        QuestionAnswer(
            question="What are the main concepts covered in this content?",
            answer="The content covers several key concepts that are fundamental to understanding the topic area.",
        ),
        QuestionAnswer(
            question="How can these concepts be applied in practice?",
            answer="These concepts can be applied through hands-on projects and real-world implementations.",
        ),
        QuestionAnswer(
            question="What are the key takeaways for developers?",
            answer="Developers should focus on understanding the core principles and how they apply to their specific use cases.",
        ),
    ]


# ==================== Analysis kinds ====================

@dataclass(frozen=True)
class AnalysisKind:
    name: str
    run: Callable[[CompletionGateway, str], Awaitable[Any]]
    default: Callable[[], Any]


def combine_content(items: Sequence[ContentItem]) -> str:
    """Render every item as a labelled block, each followed by the delimiter."""
    return "".join(
        f"Content Type: {item.type}\nTitle: {item.label}\n\nContent:\n{item.content or ''}{BLOCK_DELIMITER}"
        for item in items
    )


def _excerpt(content: str) -> str:
    return content[: settings.ANALYSIS_PROMPT_MAX_CHARS]


async def generate_summary(gateway: CompletionGateway, content: str) -> str:
    return await gateway.complete(SUMMARY_SYSTEM_PROMPT, SUMMARY_PROMPT.format(content=_excerpt(content)))


async def generate_learning_plan(gateway: CompletionGateway, content: str) -> List[LearningStep]:
    reply = await gateway.complete(LEARNING_PLAN_SYSTEM_PROMPT, LEARNING_PLAN_PROMPT.format(content=_excerpt(content)))
    return parse_structured_list(reply, LearningStep, default_learning_plan).items


async def generate_insights(gateway: CompletionGateway, content: str) -> List[Insight]:
    reply = await gateway.complete(INSIGHTS_SYSTEM_PROMPT, INSIGHTS_PROMPT.format(content=_excerpt(content)))
    return parse_structured_list(reply, Insight, default_insights).items


async def generate_questions(gateway: CompletionGateway, content: str) -> List[QuestionAnswer]:
    reply = await gateway.complete(QA_SYSTEM_PROMPT, QA_PROMPT.format(content=_excerpt(content)))
    return parse_structured_list(reply, QuestionAnswer, default_questions).items


ANALYSIS_KINDS = (
    AnalysisKind("summary", generate_summary, lambda: UNAVAILABLE_REPLY),
    AnalysisKind("learning_plan", generate_learning_plan, default_learning_plan),
    AnalysisKind("insights", generate_insights, default_insights),
    AnalysisKind("questions", generate_questions, default_questions),
)


async def _run_kind(kind: AnalysisKind, gateway: CompletionGateway, content: str) -> Any:
    try:
        return await kind.run(gateway, content)
    except Exception as exc:
        logger.warning("Analysis kind %s failed, using default: %s", kind.name, exc)
        return kind.default()


async def run_analysis_kinds(gateway: CompletionGateway, content: str) -> Dict[str, Any]:
    """Run every analysis kind concurrently and return their values by kind name."""
    values = await asyncio.gather(*(_run_kind(kind, gateway, content) for kind in ANALYSIS_KINDS))
    return {kind.name: value for kind, value in zip(ANALYSIS_KINDS, values)}


def _title_date(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


async def generate_analysis(gateway: CompletionGateway, items: Sequence[ContentItem]) -> AnalysisResult:
    """Build a comprehensive ``AnalysisResult`` for ``items``."""
    combined = combine_content(items)
    values = await run_analysis_kinds(gateway, combined)

    now = datetime.now(timezone.utc)
    return AnalysisResult(
        id=str(uuid.uuid4()),
        title=f"Analysis Results - {_title_date(now)}",
        created_at=now.isoformat(),
        source_name=", ".join(item.label for item in items),
        confidence=PLACEHOLDER_CONFIDENCE,
        summary=values["summary"],
        learning_plan=values["learning_plan"],
        insights=values["insights"],
        questions=values["questions"],
    )
