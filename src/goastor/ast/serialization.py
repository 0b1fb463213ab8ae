#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/goastor/ast/serialization.py
"""JSON serialization and deserialization for Go syntax trees.

Trees are stored as nested objects tagged with a ``node_type`` field holding
the node class name. Child nodes, lists of nodes and the file mapping of a
Package are encoded recursively; leaf data is stored as plain JSON values.
Positions are written only when known.

The ``comments`` and ``imports`` lists of a File alias nodes that other nodes
of the file own. An entry held by an owner is written as ``{"ref": k}``, the
index of that node among the owned nodes of its class in field order; loading
links the entry back to the owner's object. Entries with no owner, such as
floating comment groups, are written in full.

Examples
--------
Serialize a tree to JSON:

    >>> from goastor.ast import ExprStmt, Ident
    >>> from goastor.ast.serialization import ast_to_json
    >>> print(ast_to_json(ExprStmt(x=Ident(name="x"))))
    {"schema_version": 1, "node_type": "ExprStmt", "x": {"node_type": "Ident", "name": "x"}}

Deserialize JSON back to a tree:

    >>> from goastor.ast.serialization import json_to_ast
    >>> json_to_ast('{"node_type": "Ident", "name": "x"}')
    Ident(name='x', position=None)

"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields
from typing import Any, Iterator

from goastor.ast.nodes import NODE_TYPES, BadExpr, CommentGroup, File, ImportSpec, Node, Position

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


# File fields whose entries alias nodes held elsewhere in the file
_FILE_SHARED_FIELDS: dict[str, type[Node]] = {"comments": CommentGroup, "imports": ImportSpec}


def _owned_nodes(node: Node, node_class: type[Node]) -> Iterator[Node]:
    """Yield the ``node_class`` instances below ``node`` that an owner node holds.

    The shared File fields themselves are skipped, so the result lists each
    owned node once, in field order.
    """
    for node_field in fields(node):  # type: ignore[arg-type]
        if isinstance(node, File) and node_field.name in _FILE_SHARED_FIELDS:
            continue
        value = getattr(node, node_field.name)
        if isinstance(value, Node):
            children = [value]
        elif isinstance(value, list):
            children = value
        elif isinstance(value, dict):
            children = list(value.values())
        else:
            continue
        for child in children:
            if isinstance(child, Node):
                if isinstance(child, node_class):
                    yield child
                yield from _owned_nodes(child, node_class)


def _encode_shared(file_node: File, items: list[Node], node_class: type[Node]) -> list[Any]:
    index: dict[int, int] = {}
    for position, owned in enumerate(_owned_nodes(file_node, node_class)):
        index.setdefault(id(owned), position)
    return [{"ref": index[id(item)]} if id(item) in index else ast_to_dict(item) for item in items]


def _decode_shared(file_node: File, items: list[Any], node_class: type[Node], strict_mode: bool) -> list[Any]:
    owned = list(_owned_nodes(file_node, node_class))
    result = []
    for item in items:
        if isinstance(item, dict) and "node_type" not in item and "ref" in item:
            ref = item["ref"]
            if isinstance(ref, int) and not isinstance(ref, bool) and 0 <= ref < len(owned):
                result.append(owned[ref])
                continue
            if strict_mode:
                raise ValueError(f"Invalid {node_class.__name__} reference in File: {ref!r}")
            logger.warning(f"Dropping invalid {node_class.__name__} reference in File: {ref!r}")
            continue
        result.append(_deserialize_value(item, strict_mode))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return ast_to_dict(value)
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    return value


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to a dictionary representation.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If ``node`` is not one of the registered node types

    Examples
    --------
    >>> ast_to_dict(Ident(name="x"))
    {'node_type': 'Ident', 'name': 'x'}

    """
    node_class = type(node)
    if NODE_TYPES.get(node_class.__name__) is not node_class:
        raise ValueError(f"Unknown node type for serialization: {node_class.__name__}")

    result: dict[str, Any] = {"node_type": node_class.__name__}
    for node_field in fields(node):  # type: ignore[arg-type]
        value = getattr(node, node_field.name)
        if node_field.name == "position":
            if value is not None:
                result["position"] = asdict(value)
            continue
        if isinstance(node, File) and node_field.name in _FILE_SHARED_FIELDS:
            result[node_field.name] = _encode_shared(node, value, _FILE_SHARED_FIELDS[node_field.name])
            continue
        result[node_field.name] = _serialize_value(value)
    return result


def _deserialize_value(value: Any, strict_mode: bool) -> Any:
    if isinstance(value, dict):
        if "node_type" in value:
            return dict_to_ast(value, strict_mode=strict_mode)
        # Package.files: filename -> File
        return {key: _deserialize_value(item, strict_mode) for key, item in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(item, strict_mode) for item in value]
    return value


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node:
    """Convert a dictionary representation back to a node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types or attributes.
        If False, log a warning and substitute a BadExpr for unknown node
        types, and drop unknown attributes.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the dictionary is malformed and strict_mode is True

    """
    node_type = data.get("node_type")
    node_class = NODE_TYPES.get(node_type) if isinstance(node_type, str) else None
    if node_class is None:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type}")
        logger.warning(f"Unknown node type '{node_type}', substituting BadExpr")
        return BadExpr()

    known = {node_field.name for node_field in fields(node_class)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}
    shared: dict[str, Any] = {}
    for key, value in data.items():
        if key == "node_type":
            continue
        if key not in known:
            if strict_mode:
                raise ValueError(f"Unknown attribute '{key}' for node type {node_type}")
            logger.warning(f"Ignoring unknown attribute '{key}' for node type {node_type}")
            continue
        if node_class is File and key in _FILE_SHARED_FIELDS:
            shared[key] = value
            continue
        if key == "position":
            kwargs[key] = Position(**value) if value is not None else None
        else:
            kwargs[key] = _deserialize_value(value, strict_mode)

    try:
        node = node_class(**kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid attributes for node type {node_type}: {e}") from e

    # Shared entries resolve against the owners decoded above
    for key, value in shared.items():
        setattr(node, key, _decode_shared(node, value, _FILE_SHARED_FIELDS[key], strict_mode))  # type: ignore[arg-type]
    return node


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The root node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation with schema version

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string to a tree.

    A missing ``schema_version`` is read as version 1.

    Parameters
    ----------
    json_str : str
        JSON string representation
    strict_mode : bool, default True
        Passed to ``dict_to_ast``

    Returns
    -------
    Node
        Reconstructed root node

    Raises
    ------
    ValueError
        If the JSON holds an unsupported schema version or, in strict mode,
        unknown node types or attributes
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported schema version: {schema_version}. "
            f"This version of goastor supports schema version {SCHEMA_VERSION} only."
        )

    return dict_to_ast(data, strict_mode=strict_mode)


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
