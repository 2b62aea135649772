"""
Reply format classification.

Decides whether an assistant reply is Mermaid diagram source or markdown
text, so clients know how to render it.

Dependencies: None
System role: Reply post-processing for chat responses
"""

import re
from enum import Enum

MERMAID_KEYWORDS = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "gantt",
    "journey",
    "pie",
    "gitGraph",
    "xychart",
    "xychart-beta",
)

_FENCE_PATTERN = re.compile(r"^```(?:mermaid)?\s*\n(?P<body>.*?)\n?```\s*$", re.DOTALL)


class ReplyFormat(str, Enum):
    """Rendering hint attached to every chat reply."""

    MERMAID = "mermaid"
    MARKDOWN = "markdown"


def strip_mermaid_fence(text: str) -> str:
    """Return the body of a ```mermaid fenced block, or the text unchanged."""
    match = _FENCE_PATTERN.match(text.strip())
    if match:
        return match.group("body")
    return text


def looks_like_mermaid(text: str) -> bool:
    """
    Check whether text starts with a Mermaid diagram keyword.

    Args:
        text: Assistant reply text

    Returns:
        bool: True if the (unfenced, left-stripped) text opens a Mermaid diagram
    """
    trimmed = strip_mermaid_fence(text).lstrip()
    return any(trimmed.startswith(keyword) for keyword in MERMAID_KEYWORDS)


def classify_reply(text: str) -> ReplyFormat:
    """Classify reply text as Mermaid diagram or markdown."""
    if looks_like_mermaid(text):
        return ReplyFormat.MERMAID
    return ReplyFormat.MARKDOWN
