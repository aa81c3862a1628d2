"""Data models for md-to-bbcode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .table import TableBuilder


class TagKind(Enum):
    """Structural regions delimited by `Start`/`End` events."""

    PARAGRAPH = auto()
    HEADING = auto()
    BLOCK_QUOTE = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    FOOTNOTE_DEFINITION = auto()
    TABLE = auto()
    TABLE_HEAD = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()
    EMPHASIS = auto()
    STRONG = auto()
    STRIKETHROUGH = auto()
    LINK = auto()
    IMAGE = auto()


class LinkType(Enum):
    """How a link was written in the source.

    Attributes:
        INLINE: ``[text](destination "title")`` and resolved reference links.
        AUTOLINK: ``<https://example.com>`` or a linkified bare URL.
        EMAIL: ``<user@example.com>``.
    """

    INLINE = auto()
    AUTOLINK = auto()
    EMAIL = auto()


class Alignment(Enum):
    """Column alignment declared in a table's delimiter row."""

    NONE = auto()
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class Tag:
    """A structural tag plus the attributes its kind carries.

    Only the attributes relevant to `kind` are meaningful; the rest keep their
    defaults.

    Attributes:
        kind: Which structural region this tag delimits.
        level: Heading level, 1 through 6.
        ordered: Whether a list is ordered.
        start: First number of an ordered list, when given.
        link_type: How a link was written.
        destination: Link or image target.
        title: Link or image title; empty when absent.
        alignments: One entry per table column.
        info: Code block info string.
    """

    kind: TagKind
    level: int = 0
    ordered: bool = False
    start: int | None = None
    link_type: LinkType = LinkType.INLINE
    destination: str = ""
    title: str = ""
    alignments: tuple[Alignment, ...] = ()
    info: str = ""


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    text: str


@dataclass(frozen=True)
class Html:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class FootnoteReference:
    label: str


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool


ParseEvent = Union[
    Start,
    End,
    Text,
    Code,
    Html,
    SoftBreak,
    HardBreak,
    Rule,
    FootnoteReference,
    TaskListMarker,
]


class ConverterMode(Enum):
    """Converter modes used while walking the event stream.

    Attributes:
        NORMAL: Fragments go straight to the output sequence.
        IN_TABLE: Inline fragments go to the pending table cell.
    """

    NORMAL = auto()
    IN_TABLE = auto()


@dataclass
class ConverterContext:
    """Encapsulate converter state for a single conversion.

    Attributes:
        table: Table being assembled, or None outside a table.
        image_depth: Number of currently open images; alt content is dropped
            while positive.
        fragments: Markup fragments emitted so far, in output order.
    """

    table: TableBuilder | None = None
    image_depth: int = 0
    fragments: list[str] = field(default_factory=list)

    @property
    def mode(self) -> ConverterMode:
        """Current converter mode, derived from the pending table."""
        return ConverterMode.NORMAL if self.table is None else ConverterMode.IN_TABLE
