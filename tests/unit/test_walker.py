"""Unit tests for block tree traversal and BlockVisitor."""

import pytest

from profilegen.engine.blocks import Block, BlockKind
from profilegen.engine.builders import BlockBuilder
from profilegen.engine.walker import (
    BlockVisitor,
    child_blocks,
    count_blocks,
    find_blocks,
    iter_blocks,
)


@pytest.fixture
def b() -> BlockBuilder:
    """Builder with its own id generator."""
    return BlockBuilder()


class TestChildBlocks:
    """Tests for child_blocks."""

    def test_leaf_has_no_children(self, b: BlockBuilder) -> None:
        """Text blocks are leaves."""
        assert child_blocks(b.text("x")) == ()

    def test_containers(self, b: BlockBuilder) -> None:
        """Rows, paragraphs and groups expose their members."""
        t1, t2 = b.text("a"), b.text("b")
        badge = b.badge("Python")

        assert child_blocks(b.row([t1, t2])) == (t1, t2)
        assert child_blocks(b.paragraph([t1])) == (t1,)
        assert child_blocks(b.badge_group([badge])) == (badge,)

    def test_list_items_yield_nested_blocks(self, b: BlockBuilder) -> None:
        """Block content of list items, nested ones included, are children."""
        inner = b.text("inner")
        deep = b.link("https://example.com", "deep")
        lst = b.list_block(
            [b.list_item("plain"), b.list_item(inner, nested=[b.list_item(deep)])]
        )

        assert child_blocks(lst) == (inner, deep)

    def test_card_children_in_field_order(self, b: BlockBuilder) -> None:
        """Card image, badges, links and footer are visited in order."""
        image = b.image("https://example.com/x.png", "x")
        badge = b.badge("New")
        link = b.link("https://example.com", "site")
        footer = b.text("footer")
        card = b.card("Card", image=image, badges=[badge], links=[link], footer=[footer])

        assert child_blocks(card) == (image, badge, link, footer)

    def test_optional_images(self, b: BlockBuilder) -> None:
        """Project images and experience logos count as children when set."""
        logo = b.image("https://example.com/logo.png", "logo")

        assert child_blocks(b.project_card("p")) == ()
        assert child_blocks(b.experience_item("Acme", "Dev", "2020", company_logo=logo)) == (logo,)


class TestTraversal:
    """Tests for iter_blocks, count_blocks and find_blocks."""

    def test_depth_first_parent_first(self, b: BlockBuilder) -> None:
        """Parents are yielded before their children."""
        leaf_a, leaf_b = b.text("a"), b.text("b")
        column = b.column([leaf_a])
        grid = b.grid([column, leaf_b])

        order = [block.id for block in iter_blocks([grid])]

        assert order == [grid.id, column.id, leaf_a.id, leaf_b.id]

    def test_count_and_find(self, b: BlockBuilder) -> None:
        """Nested blocks are counted and found by kind."""
        tree = [
            b.heading("Title", 1),
            b.grid([b.card("one", badges=[b.badge("x")]), b.card("two")]),
        ]

        assert count_blocks(tree) == 5
        assert [block.title for block in find_blocks(tree, BlockKind.CARD)] == ["one", "two"]
        assert find_blocks(tree, BlockKind.QUOTE) == []


class TestBlockVisitor:
    """Tests for BlockVisitor."""

    def test_requires_every_kind(self) -> None:
        """A handler table missing a kind is rejected."""
        handlers = {kind: (lambda block: kind.value) for kind in BlockKind}
        del handlers[BlockKind.CUSTOM]

        with pytest.raises(TypeError, match="custom"):
            BlockVisitor(handlers)

    def test_visit_dispatches_by_kind(self, b: BlockBuilder) -> None:
        """Each block goes to the handler of its kind."""

        def describe(block: Block) -> str:
            return block.kind.value

        visitor: BlockVisitor[str] = BlockVisitor({kind: describe for kind in BlockKind})
        row = b.row([b.text("a"), b.spacer()])

        assert visitor.visit(row) == "row"
        assert visitor.visit_all([row]) == ["row"]
        assert visitor.visit_tree([row]) == ["row", "text", "spacer"]
