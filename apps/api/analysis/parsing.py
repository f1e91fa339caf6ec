"""Best-effort parsing of structured completion replies."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


@dataclass(frozen=True)
class StructuredReply(Generic[T]):
    """Either the items parsed from a reply (``parsed``) or a fallback list."""

    items: List[T]
    parsed: bool


def _strip_code_fence(reply: str) -> str:
    text = reply.strip()
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_structured_list(
    reply: str,
    item_model: Type[T],
    fallback: Callable[[], List[T]],
) -> StructuredReply[T]:
    """
    Parse ``reply`` as a JSON array of ``item_model`` objects.

    Anything that is not an array of objects carrying every field of
    ``item_model`` returns ``fallback()`` tagged ``parsed=False``. Never raises.
    """
    try:
        data = json.loads(_strip_code_fence(reply or ""))
    except (TypeError, ValueError):
        return StructuredReply(items=fallback(), parsed=False)

    if not isinstance(data, list):
        return StructuredReply(items=fallback(), parsed=False)

    fields = list(item_model.model_fields)
    items: List[T] = []
    for entry in data:
        if not isinstance(entry, dict) or any(entry.get(name) is None for name in fields):
            return StructuredReply(items=fallback(), parsed=False)
        try:
            items.append(item_model.model_validate({name: _as_text(entry[name]) for name in fields}))
        except ValidationError:
            return StructuredReply(items=fallback(), parsed=False)
    return StructuredReply(items=items, parsed=True)
