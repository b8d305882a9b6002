"""Render a content record as deterministic Markdown-flavoured text."""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..models import Content, Recipient


MAX_COLLECTIONS = 100
MAX_CHILDREN = 100
MAX_LINKS = 1000
MAX_OBSERVATIONS = 100

SEPARATOR = "\n---\n"

# Content types whose name duplicates the body or subject
NAMELESS_TYPES = ("PAGE", "EMAIL")

T = TypeVar("T")


def _present(items: Optional[Sequence[Optional[T]]]) -> List[T]:
    """Drop null list items sent by the platform."""
    return [item for item in (items or []) if item is not None]


def _is_type(value: Optional[str], *expected: str) -> bool:
    return value is not None and value.upper() in expected


def _labeled(pairs: Iterable[Tuple[str, Optional[str]]]) -> List[str]:
    """Emit ``**Label:** value`` for every pair with a truthy value."""
    return [f"**{label}:** {value}" for label, value in pairs if value]


def _recipients(recipients: Optional[Sequence[Optional[Recipient]]]) -> Optional[str]:
    recipients = _present(recipients)
    if not recipients:
        return None
    return ", ".join(f"{r.name} <{r.email}>" for r in recipients)


def pluralize(word: str) -> str:
    """Lowercase English plural used for observable URI schemes.

    Only regular suffix rules apply, so ``PERSON`` maps to ``persons`` and
    ``CATEGORY`` to ``categories``. Scheme names must stay stable for
    clients that already follow these links.
    """
    word = word.lower()
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def _identity(content: Content) -> List[str]:
    lines = [f"**Content ID:** {content.id}"]

    if _is_type(content.type, "FILE"):
        lines.append(f"**File Type:** [{content.file_type}]")
        lines.append(f"**File Name:** {content.file_name}")
    else:
        lines.append(f"**Type:** [{content.type}]")
        if not _is_type(content.type, *NAMELESS_TYPES):
            lines.append(f"**Name:** {content.name}")

    return lines


def _downloads(content: Content) -> List[str]:
    # Raw source uri is not shown
    return _labeled([
        ("Downloadable Original", content.master_uri),
        ("Downloadable Image", content.image_uri),
        ("Downloadable Audio", content.audio_uri),
    ])


def _dates(content: Content) -> List[str]:
    return _labeled([
        ("Ingestion Date", content.creation_date),
        ("Author Date", content.original_date),
    ])


def _issue(content: Content) -> List[str]:
    issue = content.issue
    if issue is None:
        return []

    lines = _labeled([
        ("Title", issue.title),
        ("Identifier", issue.identifier),
        ("Type", issue.type),
        ("Project", issue.project),
        ("Team", issue.team),
        ("Status", issue.status),
        ("Priority", issue.priority),
    ])
    labels = _present(issue.labels)
    if labels:
        lines.append(f"**Labels:** {', '.join(labels)}")
    return lines


def _email(content: Content) -> List[str]:
    email = content.email
    if email is None:
        return []

    return _labeled([
        ("Subject", email.subject),
        ("Sensitivity", email.sensitivity),
        ("Priority", email.priority),
        ("Importance", email.importance),
        ("Labels", ", ".join(_present(email.labels)) or None),
        ("To", _recipients(email.to)),
        ("From", _recipients(email.from_)),
        ("CC", _recipients(email.cc)),
        ("BCC", _recipients(email.bcc)),
    ])


def _document(content: Content) -> List[str]:
    document = content.document
    if document is None:
        return []
    return _labeled([("Title", document.title), ("Author", document.author)])


def _audio(content: Content) -> List[str]:
    audio = content.audio
    if audio is None:
        return []
    return _labeled([
        ("Title", audio.title),
        ("Host", audio.author),
        ("Episode", audio.episode),
        ("Series", audio.series),
    ])


def _image(content: Content) -> List[str]:
    image = content.image
    if image is None:
        return []
    return _labeled([
        ("Description", image.description),
        ("Software", image.software),
        ("Make", image.make),
        ("Model", image.model),
    ])


def _collections(content: Content) -> List[str]:
    return [
        f"**Collection [{collection.name}]:** collections://{collection.id}"
        for collection in _present(content.collections)[:MAX_COLLECTIONS]
    ]


def _parent(content: Content) -> List[str]:
    if content.parent is None:
        return []
    return [f"**Parent Content:** contents://{content.parent.id}"]


def _children(content: Content) -> List[str]:
    return [
        f"**Child Content:** contents://{child.id}"
        for child in _present(content.children)[:MAX_CHILDREN]
    ]


def _links(content: Content) -> List[str]:
    if not _is_type(content.type, "PAGE"):
        return []
    return [
        f"**{link.link_type} Link:** {link.uri}"
        for link in _present(content.links)[:MAX_LINKS]
    ]


def _observations(content: Content) -> List[str]:
    observed = [
        observation
        for observation in _present(content.observations)
        if observation.observable is not None
    ]
    return [
        f"**Observed {observation.type}:** "
        f"{pluralize(observation.type or 'entity')}://{observation.observable.id}"
        for observation in observed[:MAX_OBSERVATIONS]
    ]


def _body(content: Content) -> List[str]:
    """Render exactly one body representation, first match wins."""
    lines: List[str] = []
    pages = _present(content.pages)
    segments = _present(content.segments)
    frames = _present(content.frames)

    if pages:
        for page in pages:
            if not page.chunks:
                continue
            lines.append(f"**Page #{(page.index or 0) + 1}:**")
            lines.extend(chunk.text for chunk in page.chunks if chunk and chunk.text)
            lines.append(SEPARATOR)
    elif segments:
        for segment in segments:
            start = segment.start_time or ""
            end = segment.end_time or ""
            lines.append(f"**Transcript Segment [{start}-{end}]:**")
            lines.append(segment.text or "")
            lines.append(SEPARATOR)
    elif frames:
        for frame in frames:
            lines.append(f"**Frame #{(frame.index or 0) + 1}:**")
            lines.append(frame.text or "")
            lines.append(SEPARATOR)
    elif content.markdown:
        lines.append(content.markdown)
        lines.append("\n")

    return lines


# Sections in output order; each returns no lines when it does not apply
SECTIONS: Tuple[Callable[[Content], List[str]], ...] = (
    _identity,
    _downloads,
    _dates,
    _issue,
    _email,
    _document,
    _audio,
    _image,
    _collections,
    _parent,
    _children,
    _links,
    _observations,
    _body,
)


def format_content(content: Optional[Content]) -> str:
    """
    Format a content record for a ``contents://{id}`` resource.

    Args:
        content: Fetched content, or None when the lookup returned nothing

    Returns:
        Newline-joined text, or an empty string for a missing record
    """
    if content is None:
        return ""

    lines: List[str] = []
    for section in SECTIONS:
        lines.extend(section(content))
    return "\n".join(lines)
