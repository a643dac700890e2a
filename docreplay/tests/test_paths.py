"""
Tests for path parsing and resolution.
"""

import pytest

from docreplay.core.codec import parse_value, serialize_value
from docreplay.core.errors import (
    EmptyArrayError,
    IndexerNotSupportedError,
    NullInPathError,
    PathNotFoundError,
    PathSyntaxError,
    PathTypeError,
    UnsupportedIndexerError,
)
from docreplay.core.nodes import NodeKind
from docreplay.core.paths import PathSegment, format_path, parse_path, resolve


def test_parse_path_segments():
    segments = parse_path("a.b[first][NEW].c")

    assert segments == [
        PathSegment("a"),
        PathSegment("b", ("first", "new")),
        PathSegment("c"),
    ]
    assert format_path(segments) == "a.b[first][new].c"


def test_parse_leading_indexer_and_empty_path():
    assert parse_path("[new]") == [PathSegment("", ("new",))]
    assert parse_path("") == [PathSegment("")]


@pytest.mark.parametrize("path", ["a[first]b", "a[first", "a[fi[rst]]", "a]["])
def test_parse_malformed_indexers(path):
    with pytest.raises(PathSyntaxError):
        parse_path(path)


def test_resolve_existing_case_insensitive():
    root = parse_value('{"Outer":{"Name":"x"}}')

    node = resolve(root, "outer.NAME", create_if_missing=False)

    assert node is root.properties["Outer"].properties["Name"]


def test_resolve_creates_missing_path():
    root = parse_value("{}")

    node = resolve(root, "a.b", create_if_missing=True)

    assert node.kind is NodeKind.NULL
    assert root.properties["a"].properties["b"] is node


def test_resolve_missing_without_create_leaves_tree_alone():
    root = parse_value('{"a":{}}')

    with pytest.raises(PathNotFoundError):
        resolve(root, "a.b.c", create_if_missing=False)
    assert serialize_value(root) == '{"a":{}}'


def test_null_blocks_read_only_traversal():
    root = parse_value('{"a":null}')

    with pytest.raises(NullInPathError):
        resolve(root, "a.b", create_if_missing=False)
    with pytest.raises(NullInPathError):
        resolve(root, "a[first]", create_if_missing=False)


def test_null_promoted_when_creating():
    root = parse_value('{"a":null,"l":null}')

    resolve(root, "a.b", create_if_missing=True)
    resolve(root, "l[new]", create_if_missing=True)

    assert serialize_value(root) == '{"a":{"b":null},"l":[null]}'


def test_scalar_blocks_traversal():
    root = parse_value('{"a":"x","n":1}')

    with pytest.raises(PathTypeError):
        resolve(root, "a.b", create_if_missing=True)
    with pytest.raises(PathTypeError):
        resolve(root, "n[first]", create_if_missing=True)


def test_first_element():
    root = parse_value('{"list":[{"id":1},{"id":2}]}')

    node = resolve(root, "list[first].id", create_if_missing=False)

    assert node.text == "1"


def test_first_on_empty_array():
    root = parse_value('{"list":[]}')

    with pytest.raises(EmptyArrayError):
        resolve(root, "list[first]", create_if_missing=False)

    resolve(root, "list[first].id", create_if_missing=True)
    assert serialize_value(root) == '{"list":[{"id":null}]}'


def test_new_appends_shaped_element():
    root = parse_value('{"list":[1]}')

    scalar = resolve(root, "list[new]", create_if_missing=True)
    resolve(root, "list[new].id", create_if_missing=True)
    resolve(root, "list[new][new]", create_if_missing=True)

    assert scalar is root.properties["list"].items[1]
    assert serialize_value(root) == '{"list":[1,null,{"id":null},[null]]}'


def test_new_on_missing_property_creates_array():
    root = parse_value("{}")

    resolve(root, "tags[new]", create_if_missing=True)

    assert serialize_value(root) == '{"tags":[null]}'


def test_new_rejected_for_read_only():
    root = parse_value('{"list":[]}')

    with pytest.raises(UnsupportedIndexerError):
        resolve(root, "list[new]", create_if_missing=False)
    assert root.properties["list"].items == []


def test_chained_indexers():
    root = parse_value('{"grid":[[1,2],[3]]}')

    node = resolve(root, "grid[first][first]", create_if_missing=False)

    assert node.text == "1"


def test_chained_indexer_needs_nested_array():
    root = parse_value('{"grid":[1]}')

    with pytest.raises(PathTypeError):
        resolve(root, "grid[first][first]", create_if_missing=True)


def test_last_not_supported():
    root = parse_value('{"list":[1,2]}')

    with pytest.raises(IndexerNotSupportedError):
        resolve(root, "list[last]", create_if_missing=True)


def test_condition_not_supported():
    root = parse_value('{"list":[{"id":3}]}')

    with pytest.raises(IndexerNotSupportedError):
        resolve(root, "list[id=3].name", create_if_missing=True)


@pytest.mark.parametrize("token", ["all", "2", "", "middle"])
def test_unsupported_tokens(token):
    root = parse_value('{"list":[1,2]}')

    with pytest.raises(UnsupportedIndexerError):
        resolve(root, f"list[{token}]", create_if_missing=True)
