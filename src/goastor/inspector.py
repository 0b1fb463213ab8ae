#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/goastor/inspector.py
"""Mutation-capable traversal of Go syntax trees.

An Inspector walks a tree depth-first and calls a single visitor function for
every node, in document order. The visitor receives a Cursor for the node it is
looking at and may replace that node; the inspector writes the replacement back
into the parent's child slot and keeps walking from there.

The visitor decides whether to descend. Returning True walks the children of
the (possibly replaced) node and is followed by a closing call with ``node``
set to None once every child is done. Returning False skips the children and
the closing call.

Examples
--------
Prefix every function name:

    >>> from goastor.ast import FuncDecl, new_ident
    >>> from goastor.inspector import Inspector
    >>>
    >>> def prefix(cursor, node):
    ...     if isinstance(node, FuncDecl):
    ...         node.name = new_ident(f"Foo{node.name.name}")
    ...         cursor.replace(node)
    ...     return True
    >>>
    >>> result = Inspector(prefix).inspect(file_node)

Replace every dereference with a qualified name and skip its operand:

    >>> from goastor.ast import SelectorExpr, StarExpr
    >>>
    >>> def qualify(cursor, node):
    ...     if isinstance(node, StarExpr):
    ...         cursor.replace(SelectorExpr(x=new_ident("pkg"), sel=new_ident("InterfaceName")))
    ...         return False
    ...     return True

"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from typing import Callable, Optional, TypeVar

from goastor.ast.nodes import (
    ArrayType,
    AssignStmt,
    BadDecl,
    BadExpr,
    BadStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanType,
    CommClause,
    Comment,
    CommentGroup,
    CompositeLit,
    Decl,
    DeclStmt,
    DeferStmt,
    Ellipsis,
    EmptyStmt,
    Expr,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    IndexExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    Node,
    Package,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    Spec,
    StarExpr,
    Stmt,
    StructType,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)
from goastor.exceptions import NodeShapeError, StaleCursorError, TreeDepthError, UnknownNodeTypeError
from goastor.options import InspectorOptions

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


class Cursor:
    """Traversal context handed to the visitor for a single call.

    A cursor is created for each visitor call and expires as soon as the call
    returns. During a closing call (``node`` is None) there is no slot left to
    update, so ``replace`` is ignored.

    Parameters
    ----------
    node : Node or None
        The node being presented to the visitor

    """

    __slots__ = ("_node", "_closing", "_active")

    def __init__(self, node: Optional[Node]):
        """Create an active cursor positioned on ``node``."""
        self._node = node
        self._closing = node is None
        self._active = True

    def current(self) -> Optional[Node]:
        """Return the node currently being inspected.

        After a call to ``replace`` this is the replacement.
        """
        return self._node

    def replace(self, node: Node) -> None:
        """Replace the node currently being inspected.

        The replacement is written into the parent's child slot when the
        visitor returns, and it is the node whose children get walked if the
        visitor asks to recurse.

        Parameters
        ----------
        node : Node
            Node to install in place of the current one

        Raises
        ------
        StaleCursorError
            If the visitor call this cursor belongs to has already returned

        """
        if not self._active:
            raise StaleCursorError("Cursor.replace called after its visit returned")
        if self._closing:
            logger.debug("Ignoring replacement requested during a closing call")
            return
        self._node = node

    @property
    def active(self) -> bool:
        """Whether the visitor call owning this cursor is still running."""
        return self._active

    def _expire(self) -> None:
        self._active = False


Visitor = Callable[[Cursor, Optional[Node]], bool]
"""Callback invoked by an Inspector for each node and for each closing call."""


class Inspector:
    """Walk a syntax tree, calling a visitor for every node.

    The inspector keeps no per-walk state besides the cursor of the visitor
    call in progress, so one instance can be reused for several trees.

    Parameters
    ----------
    visitor : Visitor
        Function called as ``visitor(cursor, node)``; its return value decides
        whether the children of ``node`` are inspected
    options : InspectorOptions or None, default = None
        Traversal options; defaults are used when omitted

    Examples
    --------
    Count identifiers:

        >>> names = []
        >>> def collect(cursor, node):
        ...     if isinstance(node, Ident):
        ...         names.append(node.name)
        ...     return True
        >>> Inspector(collect).inspect(file_node)

    """

    def __init__(self, visitor: Visitor, options: InspectorOptions | None = None):
        """Bind the inspector to ``visitor``."""
        self.visitor = visitor
        self.options = options or InspectorOptions()
        self._lock: threading.RLock | None = threading.RLock() if self.options.synchronized else None

    def visit(self, node: Optional[Node]) -> tuple[Optional[Node], bool]:
        """Call the visitor once for ``node``.

        Parameters
        ----------
        node : Node or None
            Node to present, or None for a closing call

        Returns
        -------
        tuple of (Node or None, bool)
            The node to use from now on (the replacement, if the visitor
            installed one) and whether to inspect its children

        """
        if self._lock is None:
            return self._call_visitor(node)
        with self._lock:
            return self._call_visitor(node)

    def _call_visitor(self, node: Optional[Node]) -> tuple[Optional[Node], bool]:
        cursor = Cursor(node)
        try:
            recurse = self.visitor(cursor, node)
        finally:
            cursor._expire()
        return cursor.current(), bool(recurse)

    def inspect(self, node: N) -> N:
        """Walk the tree rooted at ``node`` and return the resulting root.

        Parameters
        ----------
        node : Node
            Root of the tree; any node variant, including File and Package

        Returns
        -------
        Node
            The root after the walk, which is the visitor's replacement if it
            replaced the root

        Raises
        ------
        UnknownNodeTypeError
            If a node with no dispatch entry is reached
        NodeShapeError
            If a replacement does not fit the child slot it is written to
        TreeDepthError
            If the tree is nested deeper than the interpreter's recursion
            limit allows

        """
        logger.debug(f"Inspecting {type(node).__name__} tree")
        try:
            result = self._inspect(node)
        except RecursionError as e:
            depth = sum(1 for frame, _ in traceback.walk_tb(e.__traceback__) if frame.f_code is _INSPECT_CODE)
            logger.error(f"Gave up inspecting {type(node).__name__} tree after {depth} levels")
            raise TreeDepthError(depth, sys.getrecursionlimit(), e) from e
        logger.debug(f"Finished inspecting {type(node).__name__} tree")
        return result

    def _inspect(self, node, owner=None, field_name="", expected=None):
        # A tree level costs this frame plus its walker
        node, recurse = self.visit(node)
        if recurse:
            walker = _DISPATCH.get(type(node))
            if walker is None:
                logger.critical(f"No dispatch entry for node type {type(node).__name__}")
                raise UnknownNodeTypeError(type(node))
            walker(self, node)
            self.visit(None)

        if expected is not None and self.options.check_slot_types and not isinstance(node, expected):
            owner_name = type(owner).__name__ if owner is not None else "list"
            raise NodeShapeError(owner_name, field_name, expected, node)
        return node


_INSPECT_CODE = Inspector._inspect.__code__


def inspect(node: N, visitor: Visitor, options: InspectorOptions | None = None) -> N:
    """Inspect ``node`` with a new Inspector bound to ``visitor``.

    Parameters
    ----------
    node : Node
        Root of the tree to walk
    visitor : Visitor
        Visitor function
    options : InspectorOptions or None, default = None
        Traversal options

    Returns
    -------
    Node
        The root after the walk

    """
    return Inspector(visitor, options).inspect(node)


# ============================================================================
# Child list helpers
# ============================================================================


def _inspect_list(
    inspector: Inspector,
    items: list[N],
    expected: type[N],
    owner: Optional[Node],
    field_name: str,
) -> list[N]:
    new_list: list[N] = []
    for index, item in enumerate(items):
        new_list.append(inspector._inspect(item, owner, f"{field_name}[{index}]", expected))
    return new_list


def inspect_ident_list(
    inspector: Inspector, idents: list[Ident], owner: Optional[Node] = None, field_name: str = "names"
) -> list[Ident]:
    """Inspect each identifier of a list, returning a list of the results."""
    return _inspect_list(inspector, idents, Ident, owner, field_name)


def inspect_expr_list(
    inspector: Inspector, exprs: list[Expr], owner: Optional[Node] = None, field_name: str = "list"
) -> list[Expr]:
    """Inspect each expression of a list, returning a list of the results."""
    return _inspect_list(inspector, exprs, Expr, owner, field_name)


def inspect_stmt_list(
    inspector: Inspector, stmts: list[Stmt], owner: Optional[Node] = None, field_name: str = "list"
) -> list[Stmt]:
    """Inspect each statement of a list, returning a list of the results."""
    return _inspect_list(inspector, stmts, Stmt, owner, field_name)


def inspect_decl_list(
    inspector: Inspector, decls: list[Decl], owner: Optional[Node] = None, field_name: str = "decls"
) -> list[Decl]:
    """Inspect each declaration of a list, returning a list of the results.

    Slot ``k`` of the returned list holds the inspection result of slot ``k``
    of ``decls``; elements are never added, dropped or reordered.
    """
    return _inspect_list(inspector, decls, Decl, owner, field_name)


# ============================================================================
# Per-variant walkers
#
# Each walker inspects the children of one node type in go/ast order and
# stores the results back. Optional children are skipped when absent.
# ============================================================================


def _walk_leaf(i: Inspector, n: Node) -> None:
    pass


# Comments and fields


def _walk_comment_group(i: Inspector, n: CommentGroup) -> None:
    n.list = _inspect_list(i, n.list, Comment, n, "list")


def _walk_field(i: Inspector, n: Field) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    n.names = _inspect_list(i, n.names, Ident, n, "names")
    n.type = i._inspect(n.type, n, "type", Expr)
    if n.tag is not None:
        n.tag = i._inspect(n.tag, n, "tag", BasicLit)
    if n.comment is not None:
        n.comment = i._inspect(n.comment, n, "comment", CommentGroup)


def _walk_field_list(i: Inspector, n: FieldList) -> None:
    n.list = _inspect_list(i, n.list, Field, n, "list")


# Expressions


def _walk_ellipsis(i: Inspector, n: Ellipsis) -> None:
    if n.elt is not None:
        n.elt = i._inspect(n.elt, n, "elt", Expr)


def _walk_func_lit(i: Inspector, n: FuncLit) -> None:
    n.type = i._inspect(n.type, n, "type", FuncType)
    n.body = i._inspect(n.body, n, "body", BlockStmt)


def _walk_composite_lit(i: Inspector, n: CompositeLit) -> None:
    if n.type is not None:
        n.type = i._inspect(n.type, n, "type", Expr)
    n.elts = _inspect_list(i, n.elts, Expr, n, "elts")


def _walk_paren_expr(i: Inspector, n: ParenExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)


def _walk_selector_expr(i: Inspector, n: SelectorExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)
    n.sel = i._inspect(n.sel, n, "sel", Ident)


def _walk_index_expr(i: Inspector, n: IndexExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)
    n.index = i._inspect(n.index, n, "index", Expr)


def _walk_slice_expr(i: Inspector, n: SliceExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)
    if n.low is not None:
        n.low = i._inspect(n.low, n, "low", Expr)
    if n.high is not None:
        n.high = i._inspect(n.high, n, "high", Expr)
    if n.max is not None:
        n.max = i._inspect(n.max, n, "max", Expr)


def _walk_type_assert_expr(i: Inspector, n: TypeAssertExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)
    if n.type is not None:
        n.type = i._inspect(n.type, n, "type", Expr)


def _walk_call_expr(i: Inspector, n: CallExpr) -> None:
    n.fun = i._inspect(n.fun, n, "fun", Expr)
    n.args = _inspect_list(i, n.args, Expr, n, "args")


def _walk_star_expr(i: Inspector, n: StarExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)


def _walk_unary_expr(i: Inspector, n: UnaryExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)


def _walk_binary_expr(i: Inspector, n: BinaryExpr) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)
    n.y = i._inspect(n.y, n, "y", Expr)


def _walk_key_value_expr(i: Inspector, n: KeyValueExpr) -> None:
    n.key = i._inspect(n.key, n, "key", Expr)
    n.value = i._inspect(n.value, n, "value", Expr)


# Types


def _walk_array_type(i: Inspector, n: ArrayType) -> None:
    if n.len is not None:
        n.len = i._inspect(n.len, n, "len", Expr)
    n.elt = i._inspect(n.elt, n, "elt", Expr)


def _walk_struct_type(i: Inspector, n: StructType) -> None:
    n.fields = i._inspect(n.fields, n, "fields", FieldList)


def _walk_func_type(i: Inspector, n: FuncType) -> None:
    if n.params is not None:
        n.params = i._inspect(n.params, n, "params", FieldList)
    if n.results is not None:
        n.results = i._inspect(n.results, n, "results", FieldList)


def _walk_interface_type(i: Inspector, n: InterfaceType) -> None:
    n.methods = i._inspect(n.methods, n, "methods", FieldList)


def _walk_map_type(i: Inspector, n: MapType) -> None:
    n.key = i._inspect(n.key, n, "key", Expr)
    n.value = i._inspect(n.value, n, "value", Expr)


def _walk_chan_type(i: Inspector, n: ChanType) -> None:
    n.value = i._inspect(n.value, n, "value", Expr)


# Statements


def _walk_decl_stmt(i: Inspector, n: DeclStmt) -> None:
    n.decl = i._inspect(n.decl, n, "decl", Decl)


def _walk_labeled_stmt(i: Inspector, n: LabeledStmt) -> None:
    n.label = i._inspect(n.label, n, "label", Ident)
    n.stmt = i._inspect(n.stmt, n, "stmt", Stmt)


def _walk_expr_stmt(i: Inspector, n: ExprStmt) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)


def _walk_send_stmt(i: Inspector, n: SendStmt) -> None:
    n.chan = i._inspect(n.chan, n, "chan", Expr)
    n.value = i._inspect(n.value, n, "value", Expr)


def _walk_inc_dec_stmt(i: Inspector, n: IncDecStmt) -> None:
    n.x = i._inspect(n.x, n, "x", Expr)


def _walk_assign_stmt(i: Inspector, n: AssignStmt) -> None:
    n.lhs = _inspect_list(i, n.lhs, Expr, n, "lhs")
    n.rhs = _inspect_list(i, n.rhs, Expr, n, "rhs")


def _walk_go_stmt(i: Inspector, n: GoStmt) -> None:
    n.call = i._inspect(n.call, n, "call", CallExpr)


def _walk_defer_stmt(i: Inspector, n: DeferStmt) -> None:
    n.call = i._inspect(n.call, n, "call", CallExpr)


def _walk_return_stmt(i: Inspector, n: ReturnStmt) -> None:
    n.results = _inspect_list(i, n.results, Expr, n, "results")


def _walk_branch_stmt(i: Inspector, n: BranchStmt) -> None:
    if n.label is not None:
        n.label = i._inspect(n.label, n, "label", Ident)


def _walk_block_stmt(i: Inspector, n: BlockStmt) -> None:
    n.list = _inspect_list(i, n.list, Stmt, n, "list")


def _walk_if_stmt(i: Inspector, n: IfStmt) -> None:
    if n.init is not None:
        n.init = i._inspect(n.init, n, "init", Stmt)
    n.cond = i._inspect(n.cond, n, "cond", Expr)
    n.body = i._inspect(n.body, n, "body", BlockStmt)
    if n.else_ is not None:
        n.else_ = i._inspect(n.else_, n, "else_", Stmt)


def _walk_case_clause(i: Inspector, n: CaseClause) -> None:
    n.list = _inspect_list(i, n.list, Expr, n, "list")
    n.body = _inspect_list(i, n.body, Stmt, n, "body")


def _walk_switch_stmt(i: Inspector, n: SwitchStmt) -> None:
    if n.init is not None:
        n.init = i._inspect(n.init, n, "init", Stmt)
    if n.tag is not None:
        n.tag = i._inspect(n.tag, n, "tag", Expr)
    n.body = i._inspect(n.body, n, "body", BlockStmt)


def _walk_type_switch_stmt(i: Inspector, n: TypeSwitchStmt) -> None:
    if n.init is not None:
        n.init = i._inspect(n.init, n, "init", Stmt)
    n.assign = i._inspect(n.assign, n, "assign", Stmt)
    n.body = i._inspect(n.body, n, "body", BlockStmt)


def _walk_comm_clause(i: Inspector, n: CommClause) -> None:
    if n.comm is not None:
        n.comm = i._inspect(n.comm, n, "comm", Stmt)
    n.body = _inspect_list(i, n.body, Stmt, n, "body")


def _walk_select_stmt(i: Inspector, n: SelectStmt) -> None:
    n.body = i._inspect(n.body, n, "body", BlockStmt)


def _walk_for_stmt(i: Inspector, n: ForStmt) -> None:
    if n.init is not None:
        n.init = i._inspect(n.init, n, "init", Stmt)
    if n.cond is not None:
        n.cond = i._inspect(n.cond, n, "cond", Expr)
    if n.post is not None:
        n.post = i._inspect(n.post, n, "post", Stmt)
    n.body = i._inspect(n.body, n, "body", BlockStmt)


def _walk_range_stmt(i: Inspector, n: RangeStmt) -> None:
    if n.key is not None:
        n.key = i._inspect(n.key, n, "key", Expr)
    if n.value is not None:
        n.value = i._inspect(n.value, n, "value", Expr)
    n.x = i._inspect(n.x, n, "x", Expr)
    n.body = i._inspect(n.body, n, "body", BlockStmt)


# Declarations


def _walk_import_spec(i: Inspector, n: ImportSpec) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    if n.name is not None:
        n.name = i._inspect(n.name, n, "name", Ident)
    n.path = i._inspect(n.path, n, "path", BasicLit)
    if n.comment is not None:
        n.comment = i._inspect(n.comment, n, "comment", CommentGroup)


def _walk_value_spec(i: Inspector, n: ValueSpec) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    n.names = _inspect_list(i, n.names, Ident, n, "names")
    if n.type is not None:
        n.type = i._inspect(n.type, n, "type", Expr)
    n.values = _inspect_list(i, n.values, Expr, n, "values")
    if n.comment is not None:
        n.comment = i._inspect(n.comment, n, "comment", CommentGroup)


def _walk_type_spec(i: Inspector, n: TypeSpec) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    n.name = i._inspect(n.name, n, "name", Ident)
    n.type = i._inspect(n.type, n, "type", Expr)
    if n.comment is not None:
        n.comment = i._inspect(n.comment, n, "comment", CommentGroup)


def _walk_gen_decl(i: Inspector, n: GenDecl) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    n.specs = _inspect_list(i, n.specs, Spec, n, "specs")


def _walk_func_decl(i: Inspector, n: FuncDecl) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    if n.recv is not None:
        n.recv = i._inspect(n.recv, n, "recv", FieldList)
    n.name = i._inspect(n.name, n, "name", Ident)
    n.type = i._inspect(n.type, n, "type", FuncType)
    if n.body is not None:
        n.body = i._inspect(n.body, n, "body", BlockStmt)


# Files and packages


def _walk_file(i: Inspector, n: File) -> None:
    if n.doc is not None:
        n.doc = i._inspect(n.doc, n, "doc", CommentGroup)
    n.name = i._inspect(n.name, n, "name", Ident)
    n.decls = _inspect_list(i, n.decls, Decl, n, "decls")
    # n.comments is not inspected: every group in it was already
    # visited through the node that owns it


def _walk_package(i: Inspector, n: Package) -> None:
    for filename in list(n.files):
        n.files[filename] = i._inspect(n.files[filename], n, f"files[{filename!r}]", File)


# Dispatch table mapping node types to the walker for their children
_DISPATCH: dict[type, Callable[[Inspector, Node], None]] = {
    # Comments and fields
    Comment: _walk_leaf,
    CommentGroup: _walk_comment_group,
    Field: _walk_field,
    FieldList: _walk_field_list,
    # Expressions
    BadExpr: _walk_leaf,
    Ident: _walk_leaf,
    BasicLit: _walk_leaf,
    Ellipsis: _walk_ellipsis,
    FuncLit: _walk_func_lit,
    CompositeLit: _walk_composite_lit,
    ParenExpr: _walk_paren_expr,
    SelectorExpr: _walk_selector_expr,
    IndexExpr: _walk_index_expr,
    SliceExpr: _walk_slice_expr,
    TypeAssertExpr: _walk_type_assert_expr,
    CallExpr: _walk_call_expr,
    StarExpr: _walk_star_expr,
    UnaryExpr: _walk_unary_expr,
    BinaryExpr: _walk_binary_expr,
    KeyValueExpr: _walk_key_value_expr,
    # Types
    ArrayType: _walk_array_type,
    StructType: _walk_struct_type,
    FuncType: _walk_func_type,
    InterfaceType: _walk_interface_type,
    MapType: _walk_map_type,
    ChanType: _walk_chan_type,
    # Statements
    BadStmt: _walk_leaf,
    DeclStmt: _walk_decl_stmt,
    EmptyStmt: _walk_leaf,
    LabeledStmt: _walk_labeled_stmt,
    ExprStmt: _walk_expr_stmt,
    SendStmt: _walk_send_stmt,
    IncDecStmt: _walk_inc_dec_stmt,
    AssignStmt: _walk_assign_stmt,
    GoStmt: _walk_go_stmt,
    DeferStmt: _walk_defer_stmt,
    ReturnStmt: _walk_return_stmt,
    BranchStmt: _walk_branch_stmt,
    BlockStmt: _walk_block_stmt,
    IfStmt: _walk_if_stmt,
    CaseClause: _walk_case_clause,
    SwitchStmt: _walk_switch_stmt,
    TypeSwitchStmt: _walk_type_switch_stmt,
    CommClause: _walk_comm_clause,
    SelectStmt: _walk_select_stmt,
    ForStmt: _walk_for_stmt,
    RangeStmt: _walk_range_stmt,
    # Declarations
    ImportSpec: _walk_import_spec,
    ValueSpec: _walk_value_spec,
    TypeSpec: _walk_type_spec,
    BadDecl: _walk_leaf,
    GenDecl: _walk_gen_decl,
    FuncDecl: _walk_func_decl,
    # Files and packages
    File: _walk_file,
    Package: _walk_package,
}


def dispatched_types() -> frozenset[type]:
    """Return the node classes the inspector knows how to walk."""
    return frozenset(_DISPATCH)


__all__ = [
    "Cursor",
    "Inspector",
    "Visitor",
    "dispatched_types",
    "inspect",
    "inspect_decl_list",
    "inspect_expr_list",
    "inspect_ident_list",
    "inspect_stmt_list",
]
