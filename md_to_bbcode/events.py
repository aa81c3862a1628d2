"""Turn markdown-it token streams into converter events.

markdown-it-py produces a flat list of block tokens whose ``inline`` tokens
carry their own children. This module walks that structure and yields the
`ParseEvent` vocabulary the converter understands, so the converter never
depends on markdown-it token details.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .exceptions import UnsupportedEventError
from .models import (
    Alignment,
    Code,
    End,
    FootnoteReference,
    HardBreak,
    Html,
    LinkType,
    ParseEvent,
    Rule,
    SoftBreak,
    Start,
    Tag,
    TagKind,
    Text,
)

_ALIGNMENTS = {
    "text-align:left": Alignment.LEFT,
    "text-align:center": Alignment.CENTER,
    "text-align:right": Alignment.RIGHT,
}

# Paired block tokens with a direct tag equivalent; the prefix is the token
# type without its ``_open``/``_close`` suffix.
_BLOCK_TAGS = {
    "blockquote": TagKind.BLOCK_QUOTE,
    "list_item": TagKind.ITEM,
    "footnote": TagKind.FOOTNOTE_DEFINITION,
    "th": TagKind.TABLE_CELL,
    "td": TagKind.TABLE_CELL,
}

_INLINE_TAGS = {
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
}


def build_parser() -> MarkdownIt:
    """Build the Markdown parser used as the default event source.

    Uses the CommonMark preset with the GFM ``table`` and ``strikethrough``
    rules enabled. Footnotes and task lists are not enabled.

    Returns:
        MarkdownIt: Configured parser instance.

    Examples:
        tokens = build_parser().parse("| a |\\n| - |\\n")
    """
    return MarkdownIt("commonmark", {"linkify": False}).enable(["table", "strikethrough"])


def iter_events(markdown_text: str, parser: MarkdownIt | None = None) -> Iterator[ParseEvent]:
    """Yield the converter events for a Markdown document.

    Args:
        markdown_text: Markdown source to tokenize.
        parser: Parser to tokenize with; defaults to `build_parser()`.

    Yields:
        ParseEvent: Events in document order, with every `Start` matched by an
            `End` of the same kind.

    Raises:
        UnsupportedEventError: If the parser produces a token type that has no
            event equivalent.

    Examples:
        list(iter_events("*hi*"))
    """
    parser = parser or build_parser()
    tokens = parser.parse(markdown_text)
    return _walk_blocks(tokens)


def _walk_blocks(tokens: Sequence[Token]) -> Iterator[ParseEvent]:
    in_table_head = False

    for index, token in enumerate(tokens):
        kind = token.type

        if kind == "inline":
            yield from _walk_inline(token.children or [])
        elif kind in ("paragraph_open", "paragraph_close"):
            # Tight list items mark their paragraphs hidden
            if not token.hidden:
                yield _pair(token, Tag(TagKind.PARAGRAPH))
        elif kind in ("heading_open", "heading_close"):
            yield _pair(token, Tag(TagKind.HEADING, level=int(token.tag[1:])))
        elif kind in ("bullet_list_open", "bullet_list_close"):
            yield _pair(token, Tag(TagKind.LIST))
        elif kind in ("ordered_list_open", "ordered_list_close"):
            start = token.attrGet("start")
            tag = Tag(TagKind.LIST, ordered=True, start=int(start) if start is not None else 1)
            yield _pair(token, tag)
        elif kind in ("fence", "code_block"):
            tag = Tag(TagKind.CODE_BLOCK, info=token.info.strip())
            yield Start(tag)
            yield Text(token.content)
            yield End(tag)
        elif kind == "html_block":
            yield Html(token.content)
        elif kind == "hr":
            yield Rule()
        elif kind in ("table_open", "table_close"):
            # The closing token carries no columns; both ends only need the kind
            alignments = _header_alignments(tokens, index) if token.nesting == 1 else ()
            yield _pair(token, Tag(TagKind.TABLE, alignments=alignments))
        elif kind in ("thead_open", "thead_close"):
            in_table_head = token.nesting == 1
            yield _pair(token, Tag(TagKind.TABLE_HEAD))
        elif kind in ("tbody_open", "tbody_close"):
            continue
        elif kind in ("tr_open", "tr_close"):
            # The header row is represented by TableHead alone
            if not in_table_head:
                yield _pair(token, Tag(TagKind.TABLE_ROW))
        elif kind.endswith(("_open", "_close")) and kind.rsplit("_", 1)[0] in _BLOCK_TAGS:
            yield _pair(token, Tag(_BLOCK_TAGS[kind.rsplit("_", 1)[0]]))
        else:
            raise UnsupportedEventError(kind)


def _walk_inline(children: Sequence[Token]) -> Iterator[ParseEvent]:
    # Link attributes live on the opening token only
    open_links: list[Tag] = []

    for token in children:
        kind = token.type

        if kind in ("text", "text_special"):
            yield Text(token.content)
        elif kind == "code_inline":
            yield Code(token.content)
        elif kind == "html_inline":
            yield Html(token.content)
        elif kind == "softbreak":
            yield SoftBreak()
        elif kind == "hardbreak":
            yield HardBreak()
        elif kind == "link_open":
            tag = _link_tag(token)
            open_links.append(tag)
            yield Start(tag)
        elif kind == "link_close":
            yield End(open_links.pop())
        elif kind == "image":
            tag = Tag(
                TagKind.IMAGE,
                destination=str(token.attrGet("src") or ""),
                title=str(token.attrGet("title") or ""),
            )
            yield Start(tag)
            yield from _walk_inline(token.children or [])
            yield End(tag)
        elif kind == "footnote_ref":
            yield FootnoteReference(str(token.meta.get("label", "")))
        elif kind.endswith(("_open", "_close")) and kind.rsplit("_", 1)[0] in _INLINE_TAGS:
            yield _pair(token, Tag(_INLINE_TAGS[kind.rsplit("_", 1)[0]]))
        else:
            raise UnsupportedEventError(kind)


def _pair(token: Token, tag: Tag) -> ParseEvent:
    return Start(tag) if token.nesting == 1 else End(tag)


def _link_tag(token: Token) -> Tag:
    destination = str(token.attrGet("href") or "")
    if token.markup == "autolink":
        link_type = LinkType.EMAIL if destination.startswith("mailto:") else LinkType.AUTOLINK
    elif token.markup == "linkify":
        link_type = LinkType.AUTOLINK
    else:
        link_type = LinkType.INLINE
    return Tag(
        TagKind.LINK,
        link_type=link_type,
        destination=destination,
        title=str(token.attrGet("title") or ""),
    )


def _header_alignments(tokens: Sequence[Token], table_index: int) -> tuple[Alignment, ...]:
    """Read one alignment per header cell of the table opened at `table_index`."""
    alignments = []
    for token in tokens[table_index + 1 :]:
        if token.type == "thead_close":
            break
        if token.type == "th_open":
            alignments.append(_ALIGNMENTS.get(str(token.attrGet("style") or ""), Alignment.NONE))
    return tuple(alignments)
