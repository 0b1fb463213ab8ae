#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/goastor/ast/nodes.py
"""AST node classes for Go source trees.

This module defines the closed node hierarchy used by the inspector. Each class
mirrors one node type of Go's ``go/ast`` package; field names are the snake_case
form of the Go field names.

Node Hierarchy
--------------
All nodes inherit from the base Node class. Four abstract families group the
variants that may occupy the same child slot:

    - Expr: identifiers, literals, operators and type expressions
    - Stmt: statements, including block and clause statements
    - Decl: top-level declarations (GenDecl, FuncDecl, BadDecl)
    - Spec: the specifications held by a GenDecl

Comment, CommentGroup, Field, FieldList, File and Package belong to no family
and may only occupy slots typed with their own class.

Nodes hold leaf data (names, literal values, operator tokens, positions) that
the inspector never looks at. Only fields typed as nodes, optional nodes or
lists of nodes are children.

"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Literal, Optional

LiteralKind = Literal["INT", "FLOAT", "IMAG", "CHAR", "STRING"]
DeclToken = Literal["import", "const", "type", "var"]
ChanDir = Literal["send", "recv", "both"]


@dataclass
class Position:
    """Source position of a node.

    Parameters
    ----------
    filename : str or None, default = None
        Name of the file the node was parsed from
    offset : int, default = 0
        Byte offset from the start of the file
    line : int, default = 0
        Line number, starting at 1 (0 means unknown)
    column : int, default = 0
        Column number, starting at 1 (0 means unknown)

    """

    filename: Optional[str] = None
    offset: int = 0
    line: int = 0
    column: int = 0


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    position : Position or None, default = None
        Where this node starts in the source, if known

    """

    position: Optional[Position]


class Expr(Node, ABC):
    """Base class for expression and type nodes."""


class Stmt(Node, ABC):
    """Base class for statement nodes."""


class Decl(Node, ABC):
    """Base class for declaration nodes."""


class Spec(Node, ABC):
    """Base class for the specifications of a GenDecl."""


# ============================================================================
# Comments and fields
# ============================================================================


@dataclass
class Comment(Node):
    """A single ``//``-style or ``/*``-style comment.

    Parameters
    ----------
    text : str
        Comment text including the comment markers

    """

    text: str
    position: Optional[Position] = None


@dataclass
class CommentGroup(Node):
    """A sequence of comments with no other tokens and no empty lines between."""

    list: list[Comment] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class Field(Node):
    """A field declaration in a struct, interface, parameter or result list.

    Parameters
    ----------
    type : Expr
        Field type
    names : list of Ident, default = empty list
        Field, method or parameter names; empty for anonymous fields
    doc : CommentGroup or None, default = None
        Associated documentation
    tag : BasicLit or None, default = None
        Struct field tag
    comment : CommentGroup or None, default = None
        Line comment

    """

    type: Expr
    names: list[Ident] = field(default_factory=list)
    doc: Optional[CommentGroup] = None
    tag: Optional[BasicLit] = None
    comment: Optional[CommentGroup] = None
    position: Optional[Position] = None


@dataclass
class FieldList(Node):
    """A list of Fields, enclosed by parentheses, braces or nothing."""

    list: list[Field] = field(default_factory=list)
    position: Optional[Position] = None


# ============================================================================
# Expressions
# ============================================================================


@dataclass
class BadExpr(Expr):
    """Placeholder for an expression containing syntax errors."""

    position: Optional[Position] = None


@dataclass
class Ident(Expr):
    """An identifier.

    Parameters
    ----------
    name : str
        Identifier name

    """

    name: str
    position: Optional[Position] = None

    def __str__(self) -> str:
        return self.name


@dataclass
class Ellipsis(Expr):
    """The ``...`` of a variadic parameter type or an array length."""

    elt: Optional[Expr] = None
    position: Optional[Position] = None


@dataclass
class BasicLit(Expr):
    """A literal of basic type.

    Parameters
    ----------
    kind : {"INT", "FLOAT", "IMAG", "CHAR", "STRING"}
        Literal token kind
    value : str
        Literal source text, e.g. ``42``, ``'a'`` or ``"foo"``

    """

    kind: LiteralKind
    value: str
    position: Optional[Position] = None


@dataclass
class FuncLit(Expr):
    """A function literal."""

    type: FuncType
    body: BlockStmt
    position: Optional[Position] = None


@dataclass
class CompositeLit(Expr):
    """A composite literal such as ``T{1, 2}``.

    Parameters
    ----------
    type : Expr or None, default = None
        Literal type, absent for elided inner literals
    elts : list of Expr, default = empty list
        Element list
    incomplete : bool, default = False
        True if source expressions are missing in the element list

    """

    type: Optional[Expr] = None
    elts: list[Expr] = field(default_factory=list)
    incomplete: bool = False
    position: Optional[Position] = None


@dataclass
class ParenExpr(Expr):
    """A parenthesized expression."""

    x: Expr
    position: Optional[Position] = None


@dataclass
class SelectorExpr(Expr):
    """An expression followed by a selector, e.g. ``pkg.Name``."""

    x: Expr
    sel: Ident
    position: Optional[Position] = None


@dataclass
class IndexExpr(Expr):
    """An expression followed by an index."""

    x: Expr
    index: Expr
    position: Optional[Position] = None


@dataclass
class SliceExpr(Expr):
    """An expression followed by slice indices.

    Parameters
    ----------
    x : Expr
        Sliced expression
    low, high, max : Expr or None
        Slice bounds; each may be absent
    slice3 : bool, default = False
        True for the 3-index form ``x[low:high:max]``

    """

    x: Expr
    low: Optional[Expr] = None
    high: Optional[Expr] = None
    max: Optional[Expr] = None
    slice3: bool = False
    position: Optional[Position] = None


@dataclass
class TypeAssertExpr(Expr):
    """A type assertion ``x.(T)``; ``type`` is absent in a type switch ``x.(type)``."""

    x: Expr
    type: Optional[Expr] = None
    position: Optional[Position] = None


@dataclass
class CallExpr(Expr):
    """A function call.

    Parameters
    ----------
    fun : Expr
        Function expression
    args : list of Expr, default = empty list
        Call arguments
    has_ellipsis : bool, default = False
        True if the last argument is followed by ``...``

    """

    fun: Expr
    args: list[Expr] = field(default_factory=list)
    has_ellipsis: bool = False
    position: Optional[Position] = None


@dataclass
class StarExpr(Expr):
    """A pointer type or a dereference, ``*x``."""

    x: Expr
    position: Optional[Position] = None


@dataclass
class UnaryExpr(Expr):
    """A unary expression; ``op`` is the operator token, e.g. ``-`` or ``<-``."""

    op: str
    x: Expr
    position: Optional[Position] = None


@dataclass
class BinaryExpr(Expr):
    """A binary expression; ``op`` is the operator token, e.g. ``+`` or ``&&``."""

    x: Expr
    op: str
    y: Expr
    position: Optional[Position] = None


@dataclass
class KeyValueExpr(Expr):
    """A ``key: value`` pair in a composite literal."""

    key: Expr
    value: Expr
    position: Optional[Position] = None


# ============================================================================
# Types
# ============================================================================


@dataclass
class ArrayType(Expr):
    """An array or slice type; ``len`` is absent for slices."""

    elt: Expr
    len: Optional[Expr] = None
    position: Optional[Position] = None


@dataclass
class StructType(Expr):
    """A struct type."""

    fields: FieldList
    incomplete: bool = False
    position: Optional[Position] = None


@dataclass
class FuncType(Expr):
    """A function type.

    Parameters
    ----------
    params : FieldList or None, default = None
        Incoming parameters
    results : FieldList or None, default = None
        Outgoing results, absent when the function returns nothing

    """

    params: Optional[FieldList] = None
    results: Optional[FieldList] = None
    position: Optional[Position] = None


@dataclass
class InterfaceType(Expr):
    """An interface type."""

    methods: FieldList
    incomplete: bool = False
    position: Optional[Position] = None


@dataclass
class MapType(Expr):
    """A map type."""

    key: Expr
    value: Expr
    position: Optional[Position] = None


@dataclass
class ChanType(Expr):
    """A channel type."""

    value: Expr
    dir: ChanDir = "both"
    position: Optional[Position] = None


# ============================================================================
# Statements
# ============================================================================


@dataclass
class BadStmt(Stmt):
    """Placeholder for a statement containing syntax errors."""

    position: Optional[Position] = None


@dataclass
class DeclStmt(Stmt):
    """A declaration in a statement list; ``decl`` is a GenDecl of const, type or var."""

    decl: Decl
    position: Optional[Position] = None


@dataclass
class EmptyStmt(Stmt):
    """An explicit or implicit semicolon."""

    implicit: bool = False
    position: Optional[Position] = None


@dataclass
class LabeledStmt(Stmt):
    label: Ident
    stmt: Stmt
    position: Optional[Position] = None


@dataclass
class ExprStmt(Stmt):
    """A stand-alone expression in a statement list."""

    x: Expr
    position: Optional[Position] = None


@dataclass
class SendStmt(Stmt):
    chan: Expr
    value: Expr
    position: Optional[Position] = None


@dataclass
class IncDecStmt(Stmt):
    """An increment or decrement statement; ``tok`` is ``++`` or ``--``."""

    x: Expr
    tok: str
    position: Optional[Position] = None


@dataclass
class AssignStmt(Stmt):
    """An assignment or a short variable declaration.

    Parameters
    ----------
    lhs : list of Expr
        Assigned operands
    tok : str
        Assignment token, e.g. ``=``, ``:=`` or ``+=``
    rhs : list of Expr
        Assigned values

    """

    lhs: list[Expr]
    tok: str
    rhs: list[Expr]
    position: Optional[Position] = None


@dataclass
class GoStmt(Stmt):
    call: CallExpr
    position: Optional[Position] = None


@dataclass
class DeferStmt(Stmt):
    call: CallExpr
    position: Optional[Position] = None


@dataclass
class ReturnStmt(Stmt):
    results: list[Expr] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class BranchStmt(Stmt):
    """A ``break``, ``continue``, ``goto`` or ``fallthrough`` statement."""

    tok: str
    label: Optional[Ident] = None
    position: Optional[Position] = None


@dataclass
class BlockStmt(Stmt):
    """A braced statement list."""

    list: list[Stmt] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class IfStmt(Stmt):
    """An if statement.

    Parameters
    ----------
    cond : Expr
        Condition
    body : BlockStmt
        Then branch
    init : Stmt or None, default = None
        Initialization statement
    else_ : Stmt or None, default = None
        Else branch, either a BlockStmt or another IfStmt

    """

    cond: Expr
    body: BlockStmt
    init: Optional[Stmt] = None
    else_: Optional[Stmt] = None
    position: Optional[Position] = None


@dataclass
class CaseClause(Stmt):
    """A case of an expression or type switch; an empty ``list`` means ``default``."""

    # body is declared first: once ``list`` is bound in the class body it shadows the builtin
    body: list[Stmt] = field(default_factory=list)
    list: list[Expr] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class SwitchStmt(Stmt):
    """An expression switch statement."""

    body: BlockStmt
    init: Optional[Stmt] = None
    tag: Optional[Expr] = None
    position: Optional[Position] = None


@dataclass
class TypeSwitchStmt(Stmt):
    """A type switch; ``assign`` is ``x := y.(type)`` or ``y.(type)``."""

    assign: Stmt
    body: BlockStmt
    init: Optional[Stmt] = None
    position: Optional[Position] = None


@dataclass
class CommClause(Stmt):
    """A case of a select statement; ``comm`` is absent for ``default``."""

    comm: Optional[Stmt] = None
    body: list[Stmt] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class SelectStmt(Stmt):
    body: BlockStmt
    position: Optional[Position] = None


@dataclass
class ForStmt(Stmt):
    """A for statement; every header part is optional."""

    body: BlockStmt
    init: Optional[Stmt] = None
    cond: Optional[Expr] = None
    post: Optional[Stmt] = None
    position: Optional[Position] = None


@dataclass
class RangeStmt(Stmt):
    """A for statement with a range clause.

    Parameters
    ----------
    x : Expr
        Value to range over
    body : BlockStmt
        Loop body
    key, value : Expr or None
        Iteration variables; each may be absent
    tok : str, default = ""
        ``=`` or ``:=``, empty when key and value are absent

    """

    x: Expr
    body: BlockStmt
    key: Optional[Expr] = None
    value: Optional[Expr] = None
    tok: str = ""
    position: Optional[Position] = None


# ============================================================================
# Declarations
# ============================================================================


@dataclass
class ImportSpec(Spec):
    """A single package import; ``name`` is the local package name, if any."""

    path: BasicLit
    name: Optional[Ident] = None
    doc: Optional[CommentGroup] = None
    comment: Optional[CommentGroup] = None
    position: Optional[Position] = None


@dataclass
class ValueSpec(Spec):
    """A constant or variable declaration.

    Parameters
    ----------
    names : list of Ident
        Declared names
    type : Expr or None, default = None
        Value type, if given
    values : list of Expr, default = empty list
        Initial values
    doc : CommentGroup or None, default = None
        Associated documentation
    comment : CommentGroup or None, default = None
        Line comment

    """

    names: list[Ident]
    type: Optional[Expr] = None
    values: list[Expr] = field(default_factory=list)
    doc: Optional[CommentGroup] = None
    comment: Optional[CommentGroup] = None
    position: Optional[Position] = None


@dataclass
class TypeSpec(Spec):
    """A type declaration; ``assign`` is True for alias declarations ``type T = U``."""

    name: Ident
    type: Expr
    assign: bool = False
    doc: Optional[CommentGroup] = None
    comment: Optional[CommentGroup] = None
    position: Optional[Position] = None


@dataclass
class BadDecl(Decl):
    """Placeholder for a declaration containing syntax errors."""

    position: Optional[Position] = None


@dataclass
class GenDecl(Decl):
    """A generic declaration: import, const, type or var.

    Parameters
    ----------
    tok : {"import", "const", "type", "var"}
        Declaration keyword
    specs : list of Spec, default = empty list
        ImportSpec, ValueSpec or TypeSpec entries matching ``tok``
    doc : CommentGroup or None, default = None
        Associated documentation

    """

    tok: DeclToken
    specs: list[Spec] = field(default_factory=list)
    doc: Optional[CommentGroup] = None
    position: Optional[Position] = None


@dataclass
class FuncDecl(Decl):
    """A function or method declaration.

    Parameters
    ----------
    name : Ident
        Function or method name
    type : FuncType
        Function signature
    recv : FieldList or None, default = None
        Receiver, present for methods
    body : BlockStmt or None, default = None
        Function body, absent for external (non-Go) functions
    doc : CommentGroup or None, default = None
        Associated documentation

    """

    name: Ident
    type: FuncType
    recv: Optional[FieldList] = None
    body: Optional[BlockStmt] = None
    doc: Optional[CommentGroup] = None
    position: Optional[Position] = None


# ============================================================================
# Files and packages
# ============================================================================


@dataclass
class File(Node):
    """A Go source file.

    Parameters
    ----------
    name : Ident
        Package name from the package clause
    decls : list of Decl, default = empty list
        Top-level declarations in source order
    doc : CommentGroup or None, default = None
        Package documentation
    imports : list of ImportSpec, default = empty list
        Imports in this file; these alias specs already held by ``decls``
    unresolved : list of Ident, default = empty list
        Identifiers the parser could not resolve
    comments : list of CommentGroup, default = empty list
        Every comment group in the file, in source order; the groups are
        shared with the nodes that own them

    """

    name: Ident
    decls: list[Decl] = field(default_factory=list)
    doc: Optional[CommentGroup] = None
    imports: list[ImportSpec] = field(default_factory=list)
    unresolved: list[Ident] = field(default_factory=list)
    comments: list[CommentGroup] = field(default_factory=list)
    position: Optional[Position] = None


@dataclass
class Package(Node):
    """A set of source files building a Go package.

    Parameters
    ----------
    name : str
        Package name
    files : dict of str to File, default = empty dict
        Files keyed by filename, in insertion order

    """

    name: str
    files: dict[str, File] = field(default_factory=dict)
    position: Optional[Position] = None


def new_ident(name: str) -> Ident:
    """Create an identifier node without position information."""
    return Ident(name=name)


# Registry of every concrete variant, keyed by class name, in go/ast order
NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Comment,
        CommentGroup,
        Field,
        FieldList,
        BadExpr,
        Ident,
        Ellipsis,
        BasicLit,
        FuncLit,
        CompositeLit,
        ParenExpr,
        SelectorExpr,
        IndexExpr,
        SliceExpr,
        TypeAssertExpr,
        CallExpr,
        StarExpr,
        UnaryExpr,
        BinaryExpr,
        KeyValueExpr,
        ArrayType,
        StructType,
        FuncType,
        InterfaceType,
        MapType,
        ChanType,
        BadStmt,
        DeclStmt,
        EmptyStmt,
        LabeledStmt,
        ExprStmt,
        SendStmt,
        IncDecStmt,
        AssignStmt,
        GoStmt,
        DeferStmt,
        ReturnStmt,
        BranchStmt,
        BlockStmt,
        IfStmt,
        CaseClause,
        SwitchStmt,
        TypeSwitchStmt,
        CommClause,
        SelectStmt,
        ForStmt,
        RangeStmt,
        ImportSpec,
        ValueSpec,
        TypeSpec,
        BadDecl,
        GenDecl,
        FuncDecl,
        File,
        Package,
    )
}
