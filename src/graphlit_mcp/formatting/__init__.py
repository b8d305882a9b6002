"""Text renderings of remote records."""

from .content import format_content, pluralize
from .conversation import format_conversation
from .markup import format_result, format_results, kebab_case

__all__ = [
    "format_content",
    "format_conversation",
    "format_result",
    "format_results",
    "kebab_case",
    "pluralize",
]
