"""Block tree traversal.

``iter_blocks`` walks a block tree depth-first, parents before children, in
field order. ``BlockVisitor`` dispatches on block kind and refuses to be built
unless it handles every kind, so consumers of the IR cannot silently ignore a
new block kind.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

from profilegen.engine.blocks import (
    BadgeGroupBlock,
    Block,
    BlockKind,
    CardBlock,
    ColumnBlock,
    EducationItemBlock,
    ExperienceItemBlock,
    GridBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    ProjectCardBlock,
    RowBlock,
    SocialGroupBlock,
    StatGroupBlock,
)

T = TypeVar("T")


def _list_item_blocks(items: Iterable[ListItem]) -> Iterator[Block]:
    for item in items:
        if isinstance(item.content, Block):
            yield item.content
        yield from _list_item_blocks(item.nested)


def child_blocks(block: Block) -> tuple[Block, ...]:
    """Direct children of a block, in field order."""
    if isinstance(block, (RowBlock, ColumnBlock, GridBlock)):
        return block.children
    if isinstance(block, ParagraphBlock):
        return block.content
    if isinstance(block, BadgeGroupBlock):
        return block.badges
    if isinstance(block, StatGroupBlock):
        return block.stats
    if isinstance(block, SocialGroupBlock):
        return block.links
    if isinstance(block, ListBlock):
        return tuple(_list_item_blocks(block.items))
    if isinstance(block, CardBlock):
        image = (block.image,) if block.image is not None else ()
        return (*image, *block.badges, *block.links, *block.footer)

    # Single optional image
    if isinstance(block, ProjectCardBlock):
        nested = block.image
    elif isinstance(block, ExperienceItemBlock):
        nested = block.company_logo
    elif isinstance(block, EducationItemBlock):
        nested = block.logo
    else:
        nested = None
    return (nested,) if nested is not None else ()


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Yield every block in the trees rooted at ``blocks``, depth-first."""
    for block in blocks:
        yield block
        yield from iter_blocks(child_blocks(block))


def count_blocks(blocks: Iterable[Block]) -> int:
    """Count all blocks, nested ones included."""
    return sum(1 for _ in iter_blocks(blocks))


def find_blocks(blocks: Iterable[Block], kind: BlockKind) -> list[Block]:
    """Collect every block of the given kind, in traversal order."""
    return [block for block in iter_blocks(blocks) if block.kind is kind]


class BlockVisitor(Generic[T]):
    """Kind-dispatching visitor with an exhaustive handler table.

    Usage:
        visitor = BlockVisitor({kind: handler for kind in BlockKind})
        results = visitor.visit_all(section.blocks)

    Raises:
        TypeError: At construction, if any BlockKind has no handler
    """

    def __init__(self, handlers: Mapping[BlockKind, Callable[[Block], T]]) -> None:
        missing = [kind.value for kind in BlockKind if kind not in handlers]
        if missing:
            raise TypeError(f"BlockVisitor is missing handlers for: {', '.join(missing)}")
        self._handlers = dict(handlers)

    def visit(self, block: Block) -> T:
        return self._handlers[block.kind](block)

    def visit_all(self, blocks: Iterable[Block]) -> list[T]:
        """Visit the given blocks (not their descendants), in order."""
        return [self.visit(block) for block in blocks]

    def visit_tree(self, blocks: Iterable[Block]) -> list[T]:
        """Visit every block in the trees rooted at ``blocks``."""
        return [self.visit(block) for block in iter_blocks(blocks)]
