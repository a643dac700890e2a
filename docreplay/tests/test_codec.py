"""
Tests for parsing and serialization.

Critical: re-serialization must reproduce literals exactly.
"""

import pytest

from docreplay.core.codec import parse_document, parse_value, serialize_document, serialize_value
from docreplay.core.errors import ParseError, SerializeError, UnsupportedRootError
from docreplay.core.nodes import NodeKind, ValueNode


def _roundtrip(text):
    return serialize_document(parse_document(text)).decode("utf-8")


def test_compact_output_preserves_literals():
    """Numbers and bools must come back exactly as written."""
    text = '{"a":1.0,"b":[1,"x",true,null,{"c":-0}],"d":false}'
    assert _roundtrip(text) == text


def test_whitespace_removed():
    """Output is compact JSON with no whitespace."""
    assert _roundtrip('{ "a" : [ 1 , 2 ] ,\n "b" : { } }') == '{"a":[1,2],"b":{}}'


def test_large_and_exotic_numbers_survive():
    """Number literals are never converted to floats."""
    text = '{"big":12345678901234567890123,"huge":1e400,"exp":1.5E-3}'
    assert _roundtrip(text) == text


def test_idempotent_reserialization():
    """Serialize(Parse(Serialize(Parse(x)))) == Serialize(Parse(x))."""
    text = '{"z": {"y": [1, 2.50, {"x": "q\\"uote"}]}, "a": null, "list": [[], {}]}'
    once = _roundtrip(text)
    twice = _roundtrip(once)

    assert once == twice


def test_string_escaping():
    """Quotes, backslashes and control characters are escaped."""
    assert serialize_value(ValueNode.string('a"b\\c')) == r'"a\"b\\c"'
    assert serialize_value(ValueNode.string("line\nbreak\t")) == r'"line\nbreak\t"'


def test_property_names_escaped():
    """Property names go through the same escaping as values."""
    node = ValueNode.object({'we"ird': ValueNode.number("1")})
    assert serialize_value(node) == r'{"we\"ird":1}'


def test_unicode_kept_as_utf8():
    """Non-ASCII text is written as UTF-8, not \\u escapes."""
    out = serialize_document(parse_document('{"key":"日本語"}'))

    assert out == '{"key":"日本語"}'.encode("utf-8")


def test_lone_surrogate_is_escaped():
    """A lone surrogate cannot be UTF-8 encoded, so it stays escaped."""
    assert _roundtrip('{"s":"\\ud800"}') == '{"s":"\\ud800"}'


def test_array_root():
    """A top-level array is emitted without object braces."""
    root = parse_document(b'[{"id":0},{"id":1}]')

    assert root.is_array
    assert serialize_document(root) == b'[{"id":0},{"id":1}]'


def test_empty_containers():
    """Empty object and array roots render as {} and []."""
    assert _roundtrip("{}") == "{}"
    assert _roundtrip("[]") == "[]"


def test_duplicate_keys_last_wins():
    """Duplicate property names keep the last value."""
    assert _roundtrip('{"a":1,"a":2}') == '{"a":2}'


def test_value_kinds():
    """Every value is classified during the parse."""
    node = parse_value('{"s":"x","n":3,"b":true,"z":null,"o":{},"a":[]}')

    kinds = {name: child.kind for name, child in node.properties.items()}
    assert kinds == {
        "s": NodeKind.STRING,
        "n": NodeKind.NUMBER,
        "b": NodeKind.BOOL,
        "z": NodeKind.NULL,
        "o": NodeKind.OBJECT,
        "a": NodeKind.ARRAY,
    }
    assert node.properties["n"].text == "3"
    assert node.properties["b"].text == "true"


@pytest.mark.parametrize("text", ['{"a":', "", '{"a":NaN}', '[Infinity]', "{'a': 1}"])
def test_malformed_json_rejected(text):
    """Malformed or non-standard JSON raises ParseError."""
    with pytest.raises(ParseError):
        parse_document(text)


def test_invalid_utf8_rejected():
    """Bytes that are not UTF-8 raise ParseError."""
    with pytest.raises(ParseError):
        parse_document(b'{"a":"\xff"}')


@pytest.mark.parametrize("text", ["42", '"text"', "null", "true"])
def test_scalar_root_rejected(text):
    """Scalars are not documents."""
    with pytest.raises(UnsupportedRootError):
        parse_document(text)


def test_unknown_node_kind_fails():
    """A node with an unrecognised kind is an internal fault."""
    node = ValueNode.object({"bad": ValueNode(kind="bogus")})

    with pytest.raises(SerializeError):
        serialize_value(node)


def test_array_root_with_extra_property_fails():
    """An array document must hold nothing but its root array."""
    root = parse_document("[1]")
    root.holder.properties["extra"] = ValueNode.null()

    with pytest.raises(SerializeError):
        serialize_document(root)


def test_deeply_nested_input_rejected():
    """Nesting past the recursion limit is a parse failure, not a crash."""
    depth = 100000
    with pytest.raises(ParseError):
        parse_document("[" * depth + "]" * depth)


def test_deeply_nested_tree_fails_to_serialize():
    node = ValueNode.array()
    for _ in range(100000):
        node = ValueNode.array([node])

    with pytest.raises(SerializeError):
        serialize_value(node)


def test_indented_output_keeps_literals():
    node = parse_value('{"n":1e400,"l":[1.50,{}],"e":[]}')

    assert serialize_value(node, indent=2) == (
        '{\n  "n": 1e400,\n  "l": [\n    1.50,\n    {}\n  ],\n  "e": []\n}'
    )


def test_indented_array_document():
    root = parse_document('[{"a":true}]')

    assert serialize_document(root, indent=2) == b'[\n  {\n    "a": true\n  }\n]'
