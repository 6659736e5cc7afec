"""Serialization of scan results to JSON-compatible dicts.

Useful for caching scan results, feeding other tools and debugging.
All output is deterministic (sorted keys).

Example:
    from monikers import scan
    from monikers.serialization import to_json, from_json

    doc = scan(':::moniker range="v1"\\nHello\\n:::moniker-end')
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from monikers.blocks import Block, BlockStatus, Document, MonikerRangeBlock, ParagraphBlock
from monikers.location import SourceSpan

# Registry of type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "MonikerRangeBlock": MonikerRangeBlock,
    "ParagraphBlock": ParagraphBlock,
}


def to_dict(node: Block | Document) -> dict[str, Any]:
    """Convert a block or document to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization. Fields
    excluded from comparison (the owning recognizer) are not serialized.

    Args:
        node: A Document or any Block

    Returns:
        Dict with ``_type`` and all serializable fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        if not f.compare:
            continue
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, (Block, Document)):
        return to_dict(value)
    if isinstance(value, SourceSpan):
        return {
            "_type": "SourceSpan",
            "start": value.start,
            "end": value.end,
            "lineno": value.lineno,
            "end_lineno": value.end_lineno,
        }
    if isinstance(value, BlockStatus):
        return value.name
    if isinstance(value, (tuple, list)):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Block | Document:
    """Reconstruct a block or document from a dict.

    Args:
        data: Dict with ``_type`` and fields (as produced by to_dict).

    Returns:
        The reconstructed Block or Document. Moniker blocks come back
        without an owning recognizer.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name == "status":
            kwargs[f.name] = BlockStatus[raw]
        elif f.name == "children":
            kwargs[f.name] = tuple(from_dict(item) for item in raw)
        elif f.name == "lines":
            kwargs[f.name] = list(raw)
        else:
            kwargs[f.name] = _deserialize_value(raw)

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict) and value.get("_type") == "SourceSpan":
        return SourceSpan(
            start=value["start"],
            end=value["end"],
            lineno=value["lineno"],
            end_lineno=value.get("end_lineno"),
        )
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
