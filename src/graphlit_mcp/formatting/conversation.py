"""Render a conversation transcript with its citations."""

from typing import List, Optional

from ..models import Conversation
from .content import SEPARATOR


def format_conversation(conversation: Optional[Conversation]) -> str:
    """Format a conversation for a ``conversations://{id}`` resource."""
    if conversation is None:
        return ""

    lines: List[str] = [f"**Conversation ID:** {conversation.id}"]

    for message in conversation.messages or []:
        if message is None:
            continue

        lines.append(f"{message.role}:")
        lines.append(message.message or "")

        for citation in message.citations or []:
            if citation is None:
                continue
            if citation.content is not None:
                lines.append(
                    f"**Cited Source [{citation.index}]:** contents://{citation.content.id}"
                )
            lines.append("**Cited Text:**")
            lines.append(citation.text or "")

        lines.append(SEPARATOR)

    return "\n".join(lines)
