"""
Markdown Tree Module - Boundary with the Markdown engine

Every structural type works on the block/inline tree produced by
``markdown-it-py`` (a ``SyntaxTreeNode``) and never on raw text. This module
is the only place that knows how that tree is built from text, turned back
into text, and assembled from pieces.

Key Components:
- parse_markdown / render_markdown: text <-> tree (markdown-it-py / mdformat)
- make_root, make_heading, heading_title, make_list, make_metadata_block:
  tree builders
- heading_depth, is_metadata_block, list_shape, inline_text: inspectors
- copy_tree, tree_signature: deep copy and structural comparison

Builders never mutate their arguments: new trees are assembled from the
tokens of the given nodes.

Usage:
    >>> root = parse_markdown("# Title\\n\\nSome *text*.")
    >>> heading_depth(root.children[0])
    1
    >>> render_markdown(root)
    '# Title\\n\\nSome *text*.\\n'
"""

import copy
import logging
from itertools import chain
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdformat.renderer import MDRenderer
from mdit_py_plugins.front_matter import front_matter_plugin

from ...exceptions.structure_exceptions import StructuralError

logger = logging.getLogger(__name__)

# Alias used across the package: one parsed file, or a piece of one.
DocumentNode = SyntaxTreeNode

METADATA_NODE_TYPE = "front_matter"

_DOCUMENT_PARSER = MarkdownIt("commonmark").use(front_matter_plugin)
_FRAGMENT_PARSER = MarkdownIt("commonmark")

_RENDER_OPTIONS = {
    "parser_extension": [],
    "codeformatters": {},
    "mdformat": {"wrap": "keep", "number": True, "end_of_line": "lf"},
}

_INLINE_TEXT_TYPES = {"text", "softbreak"}


class ListShape(NamedTuple):
    """Kind and first number of a list node."""
    ordered: bool
    start: int


def parse_markdown(text: str, with_metadata: bool = True) -> DocumentNode:
    """
    Parse Markdown text into a root node.

    Args:
        text: Markdown source
        with_metadata: Recognize a leading ``---`` YAML block as a metadata node.
            Fragments (rich text taken from metadata values) are parsed
            without it.

    Returns:
        Root ``SyntaxTreeNode`` of the document
    """
    parser = _DOCUMENT_PARSER if with_metadata else _FRAGMENT_PARSER
    tokens = parser.parse(text)
    _inline_references(tokens)
    return SyntaxTreeNode(tokens)


def render_markdown(node: DocumentNode) -> str:
    """
    Serialize a tree back to Markdown text.

    Metadata blocks are written as ``---`` delimited YAML, everything else is
    rendered by mdformat.
    """
    parts: List[str] = []
    body: List[DocumentNode] = []
    for child in _top_level(node):
        if is_metadata_block(child):
            parts.append(f"---\n{child.content.rstrip(chr(10))}\n---\n")
        else:
            body.append(child)
    if body:
        tokens = list(chain.from_iterable(child.to_tokens() for child in body))
        parts.append(MDRenderer().render(tokens, _RENDER_OPTIONS, {}))
    return "\n".join(parts)


def make_root(children: Iterable[DocumentNode]) -> DocumentNode:
    """Build a new root holding copies of the given nodes."""
    tokens = list(chain.from_iterable(child.to_tokens() for child in children))
    return SyntaxTreeNode(copy.deepcopy(tokens))


def make_heading(title_children: Sequence[DocumentNode], depth: int = 1) -> DocumentNode:
    """
    Build a heading node from the children of a title tree.

    Title trees hold inline content. Paragraphs are unwrapped, so a title
    written as plain Markdown text (one paragraph) is accepted too.

    Raises:
        StructuralError: If the title holds several paragraphs or block
            content other than paragraphs
    """
    paragraphs = sum(1 for child in title_children if child.type == "paragraph")
    if paragraphs > 1:
        raise StructuralError(f"A heading title must be a single paragraph, found {paragraphs}")

    inline_tokens: List[Token] = []
    for child in title_children:
        nodes = child.children if child.type == "paragraph" else [child]
        for node in nodes:
            if node.type != "inline":
                raise StructuralError(
                    f"A heading title must be inline text, found a `{node.type}` node"
                )
            inline_tokens.extend(node.to_tokens())

    tag = f"h{depth}"
    markup = "#" * depth
    tokens = [
        Token("heading_open", tag, 1, markup=markup, block=True),
        *copy.deepcopy(inline_tokens),
        Token("heading_close", tag, -1, markup=markup, block=True),
    ]
    return SyntaxTreeNode(tokens).children[0]


def heading_title(node: DocumentNode) -> DocumentNode:
    """
    Build a title tree from a heading: a root holding one paragraph with the
    heading's inline content.
    """
    inline_tokens = list(chain.from_iterable(child.to_tokens() for child in node.children))
    tokens = [
        Token("paragraph_open", "p", 1, block=True),
        *copy.deepcopy(inline_tokens),
        Token("paragraph_close", "p", -1, block=True),
    ]
    return SyntaxTreeNode(tokens)


def make_list(
    items: Sequence[Sequence[DocumentNode]],
    ordered: bool,
    start: int = 1
) -> DocumentNode:
    """
    Build a list node, one item per sequence of block nodes.

    Args:
        items: Block children of each list item
        ordered: Ordered (``1.``) or bullet (``-``) list
        start: First number of an ordered list
    """
    kind = "ordered_list" if ordered else "bullet_list"
    tag = "ol" if ordered else "ul"
    markup = "." if ordered else "-"
    attrs = {"start": start} if ordered and start != 1 else {}

    tokens = [Token(f"{kind}_open", tag, 1, attrs=attrs, markup=markup, block=True)]
    for number, item in enumerate(items, start):
        tokens.append(Token(
            "list_item_open", "li", 1,
            markup=markup,
            info=str(number) if ordered else "",
            block=True,
        ))
        tokens.extend(copy.deepcopy(list(chain.from_iterable(n.to_tokens() for n in item))))
        tokens.append(Token("list_item_close", "li", -1, markup=markup, block=True))
    tokens.append(Token(f"{kind}_close", tag, -1, markup=markup, block=True))
    return SyntaxTreeNode(tokens).children[0]


def make_metadata_block(raw_text: str) -> DocumentNode:
    """Build a metadata node holding raw YAML text."""
    token = Token(
        METADATA_NODE_TYPE, "", 0,
        content=raw_text,
        markup="---",
        block=True,
        hidden=True,
    )
    return SyntaxTreeNode([token]).children[0]


def is_metadata_block(node: DocumentNode) -> bool:
    """True if the node is an embedded metadata block."""
    return node.type == METADATA_NODE_TYPE


def heading_depth(node: DocumentNode) -> Optional[int]:
    """Return the level of a heading node, None for any other node."""
    if node.type != "heading":
        return None
    return int(node.tag[1:])


def list_shape(node: DocumentNode) -> Optional[ListShape]:
    """Return the kind and start number of a list node, None for any other node."""
    if node.type == "bullet_list":
        return ListShape(ordered=False, start=1)
    if node.type == "ordered_list":
        return ListShape(ordered=True, start=int(node.attrs.get("start", 1)))
    return None


def inline_text(node: DocumentNode) -> Optional[str]:
    """
    Return the plain text of a node holding only unformatted inline text.

    Returns None when the text carries any formatting (emphasis, links, code...),
    so "**Notes**" is not mistaken for "Notes".
    """
    pieces: List[str] = []
    for inline in node.children:
        if inline.type != "inline":
            return None
        for child in inline.children:
            if child.type not in _INLINE_TEXT_TYPES:
                return None
            pieces.append(child.content if child.type == "text" else " ")
    return "".join(pieces)


def copy_tree(node: DocumentNode) -> DocumentNode:
    """Return a deep copy of a tree that shares nothing with the original."""
    tokens = copy.deepcopy(node.to_tokens())
    root = SyntaxTreeNode(tokens)
    if node.is_root:
        return root
    return root.children[0]


def tree_signature(node: DocumentNode) -> Tuple:
    """
    Structural fingerprint of a tree.

    Two trees with equal signatures render to the same Markdown. Source
    positions are ignored.
    """
    if node.is_root:
        head: Tuple = ("root",)
    else:
        head = (
            node.type,
            node.tag,
            tuple(sorted((str(k), str(v)) for k, v in node.attrs.items())),
            node.markup,
            node.info,
            "" if node.children else node.content,
        )
    return head + (tuple(tree_signature(child) for child in node.children),)


def _top_level(node: DocumentNode) -> List[DocumentNode]:
    return list(node.children) if node.is_root else [node]


def _inline_references(tokens: Iterable[Token]) -> None:
    # Reference definitions are not kept, so reference links become inline links.
    for token in tokens:
        if token.type == "link_open":
            token.meta.pop("label", None)
        if token.children:
            _inline_references(token.children)
