#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/goastor/transforms.py
"""Common tree passes built on the Inspector.

Examples
--------
Collect every function declaration of a file:

    >>> from goastor.ast import FuncDecl
    >>> from goastor import transforms
    >>> funcs = transforms.extract_nodes(file_node, FuncDecl)

Prefix every function name:

    >>> transforms.rename_functions(file_node, lambda name: f"Foo{name}")

Swap every dereference for a qualified name:

    >>> transforms.replace_nodes(
    ...     file_node,
    ...     lambda n: isinstance(n, StarExpr),
    ...     lambda n: SelectorExpr(x=new_ident("pkg"), sel=new_ident("InterfaceName")),
    ... )

"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Optional, Type, TypeVar

from goastor.ast.nodes import FuncDecl, Node, new_ident
from goastor.inspector import Cursor, Inspector
from goastor.options import InspectorOptions

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


def clone_node(node: N) -> N:
    """Create a deep copy of a node and its subtree.

    Parameters
    ----------
    node : Node
        Node to clone

    Returns
    -------
    Node
        Independent copy sharing no nodes with the original

    """
    return copy.deepcopy(node)


def extract_nodes(root: Node, node_type: Type[N] | None = None) -> list[N]:
    """Collect the nodes of a tree in visiting order.

    Parameters
    ----------
    root : Node
        Tree to search
    node_type : type or None, default = None
        Only collect instances of this class (or family); None collects all

    Returns
    -------
    list of Node
        Matching nodes in document order

    """
    collected: list[N] = []

    def collect(cursor: Cursor, node: Optional[Node]) -> bool:
        if node is not None and (node_type is None or isinstance(node, node_type)):
            collected.append(node)  # type: ignore[arg-type]
        return True

    Inspector(collect).inspect(root)
    return collected


def count_nodes(root: Node) -> int:
    """Return the number of nodes the inspector visits in ``root``."""
    return len(extract_nodes(root))


def replace_nodes(
    root: N,
    predicate: Callable[[Node], bool],
    factory: Callable[[Node], Node],
    descend: bool = False,
    options: InspectorOptions | None = None,
) -> N:
    """Replace every node matching ``predicate`` with ``factory(node)``.

    Parameters
    ----------
    root : Node
        Tree to rewrite in place
    predicate : callable
        Selects the nodes to replace
    factory : callable
        Builds the replacement for a selected node
    descend : bool, default = False
        Whether to walk into the children of each replacement. When False the
        replacement is installed as-is and its subtree is left untouched.
    options : InspectorOptions or None, default = None
        Options for the underlying Inspector

    Returns
    -------
    Node
        The root after rewriting (a replacement, if the root itself matched)

    """
    replaced = 0

    def rewrite(cursor: Cursor, node: Optional[Node]) -> bool:
        nonlocal replaced
        if node is None or not predicate(node):
            return True
        cursor.replace(factory(node))
        replaced += 1
        return descend

    result = Inspector(rewrite, options).inspect(root)
    logger.debug(f"Replaced {replaced} node(s)")
    return result


def rename_functions(root: N, renamer: Callable[[str], str]) -> N:
    """Rename every function and method declaration in a tree.

    The declaration keeps its receiver, signature and body; only its name
    identifier is swapped for a new one.

    Parameters
    ----------
    root : Node
        Tree to rewrite in place
    renamer : callable
        Maps the old name to the new one

    Returns
    -------
    Node
        The root after rewriting

    """

    def rename(cursor: Cursor, node: Optional[Node]) -> bool:
        if isinstance(node, FuncDecl):
            node.name = new_ident(renamer(node.name.name))
            cursor.replace(node)
        return True

    return Inspector(rename).inspect(root)


__all__ = [
    "clone_node",
    "count_nodes",
    "extract_nodes",
    "rename_functions",
    "replace_nodes",
]
