"""goastor - mutation-capable inspection of Go syntax trees.

goastor walks Go abstract syntax trees with a single visitor function. The
visitor is called for every node in document order, may replace the node it is
looking at, and decides whether the walk descends into that node's children.
A closing call with ``node`` set to None follows the children of every node the
visitor descended into.

Parsing Go source and printing trees back to source are left to other tools;
goastor works on trees built from the dataclasses in ``goastor.ast``, or
loaded from JSON with ``goastor.ast.json_to_ast``.

Examples
--------
Rename every function of a file:

    >>> from goastor import Inspector
    >>> from goastor.ast import FuncDecl, new_ident
    >>>
    >>> def rename(cursor, node):
    ...     if isinstance(node, FuncDecl):
    ...         node.name = new_ident(f"Foo{node.name.name}")
    ...         cursor.replace(node)
    ...     return True
    >>>
    >>> tree = Inspector(rename).inspect(tree)

"""

from __future__ import annotations

from goastor.exceptions import (
    GoAstorError,
    InspectionError,
    NodeShapeError,
    StaleCursorError,
    TreeDepthError,
    UnknownNodeTypeError,
)
from goastor.inspector import (
    Cursor,
    Inspector,
    Visitor,
    inspect,
    inspect_decl_list,
    inspect_expr_list,
    inspect_ident_list,
    inspect_stmt_list,
)
from goastor.options import InspectorOptions

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Cursor",
    "GoAstorError",
    "InspectionError",
    "Inspector",
    "InspectorOptions",
    "NodeShapeError",
    "StaleCursorError",
    "TreeDepthError",
    "UnknownNodeTypeError",
    "Visitor",
    "inspect",
    "inspect_decl_list",
    "inspect_expr_list",
    "inspect_ident_list",
    "inspect_stmt_list",
]
