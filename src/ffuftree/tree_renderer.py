"""Box-drawing rendering of a discovered-path tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from rich.console import Console

from ffuftree.models import LeafAnnotation, RenderOptions, StatusClass, TreeNode

INDENT = "    "
BRANCH = "├── "
LAST_BRANCH = "└── "


@dataclass(frozen=True)
class TreeLine:
    text: str
    leaf: LeafAnnotation | None = None

    @property
    def status_class(self) -> StatusClass:
        if self.leaf is None:
            return StatusClass.OTHER
        return self.leaf.status_class


def iter_lines(
    node: TreeNode,
    indent: str = INDENT,
    depth: int = 0,
) -> Iterator[TreeLine]:
    """Yield one line per node below *node*, children in sorted order.

    Example output:
        ├── admin
            └── login (Status: 200), (Length: 1234)
        └── robots.txt (Status: 200), (Length: 68)

    Nesting is shown by *indent* alone; no vertical guide is drawn.
    The walk keeps its own stack, so depth is bounded by memory only.
    """
    # (node, depth, child count, pending (index, name) pairs) per open level
    stack = [_frame(node, depth)]
    while stack:
        parent, level, count, pending = stack[-1]
        entry = next(pending, None)
        if entry is None:
            stack.pop()
            continue

        i, name = entry
        child = parent.children[name]
        connector = LAST_BRANCH if i == count - 1 else BRANCH
        prefix = f"{indent * level}{connector}"

        if child.leaf is not None:
            yield TreeLine(
                f"{prefix}{name} (Status: {child.leaf.status}), "
                f"(Length: {child.leaf.length})",
                child.leaf,
            )
        else:
            yield TreeLine(f"{prefix}{name}")

        if child.children:
            stack.append(_frame(child, level + 1))


def _frame(node: TreeNode, depth: int) -> tuple[TreeNode, int, int, Iterator[tuple[int, str]]]:
    names = sorted(node.children)
    return node, depth, len(names), iter(enumerate(names))


def render_tree(node: TreeNode, indent: str = INDENT) -> str:
    """Render the tree as plain text."""
    return "\n".join(line.text for line in iter_lines(node, indent))


def print_tree(
    node: TreeNode,
    console: Console,
    options: RenderOptions | None = None,
) -> None:
    """Print the tree to *console*, colored by status class."""
    options = options or RenderOptions()
    for line in iter_lines(node, options.indent):
        style = line.status_class.color if options.color else None
        console.print(
            line.text,
            style=style,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
