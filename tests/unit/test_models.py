"""Test the slide node model."""

import pytest

from slide_segmenter.models import LEAF, STACK, SlideNode


def _leaf(content, start, end, **kwargs):
    return SlideNode.leaf(content, source_range=(start, end), **kwargs)


def test_leaf_defaults():
    node = _leaf("# A", 0, 0)

    assert node.kind == LEAF
    assert node.is_leaf() and not node.is_stack()
    assert node.notes == ""
    assert node.alignment == "center"
    assert node.animation == "none"
    assert node.children == ()
    assert node.leaves() == (node,)


def test_stack_spans_children():
    stack = SlideNode.stack([_leaf("## A", 2, 4), _leaf("### B", 5, 9)])

    assert stack.kind == STACK
    assert stack.source_range == (2, 9)
    assert len(stack.leaves()) == 2
    assert stack.content == ""


def test_stack_validation():
    with pytest.raises(ValueError):
        SlideNode.stack([])

    inner = SlideNode.stack([_leaf("a", 0, 0), _leaf("b", 1, 1)])
    with pytest.raises(ValueError):
        SlideNode.stack([inner, _leaf("c", 2, 2)])


def test_nodes_are_immutable():
    node = _leaf("# A", 0, 0)
    with pytest.raises(Exception):
        node.content = "changed"


def test_title():
    assert _leaf("intro\n## Results  \ntext", 0, 2).title == "Results"
    assert _leaf("no heading", 0, 0).title == ""
    stack = SlideNode.stack([_leaf("text", 0, 0), _leaf("### B", 1, 1)])
    assert stack.title == ""


def test_to_dict():
    leaf = _leaf("# A", 0, 1, notes="hi", alignment="left", animation="grow")
    assert leaf.to_dict() == {
        "kind": "leaf",
        "content": "# A",
        "notes": "hi",
        "alignment": "left",
        "animation": "grow",
        "sourceRange": [0, 1],
    }

    stack = SlideNode.stack([leaf, _leaf("B", 3, 3)]).to_dict()
    assert stack["kind"] == "stack"
    assert stack["sourceRange"] == [0, 3]
    assert [child["content"] for child in stack["children"]] == ["# A", "B"]
