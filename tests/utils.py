"""Test utilities for the goastor test suite.

This module provides builders for sample Go trees, an independent walker that
lists the nodes reachable through child fields, and a visitor that records
every call it receives.
"""

from dataclasses import fields
from typing import Iterator, Optional

from goastor.ast import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    CaseClause,
    Comment,
    CommentGroup,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncType,
    GenDecl,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    Node,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    StarExpr,
    StructType,
    SwitchStmt,
    TypeSpec,
    TypeSwitchStmt,
    ValueSpec,
)
from goastor.inspector import Cursor

# File fields the inspector deliberately leaves alone
UNWALKED_FIELDS = {(File, "imports"), (File, "unresolved"), (File, "comments")}


def child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` by looking at its dataclass fields.

    This does not share any code with the inspector's dispatch table, so it can
    serve as an oracle for which nodes a walk should reach. Children are
    yielded in field declaration order, which is not the visiting order.
    """
    for node_field in fields(node):
        if (type(node), node_field.name) in UNWALKED_FIELDS:
            continue
        value = getattr(node, node_field.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            yield from (item for item in value if isinstance(item, Node))
        elif isinstance(value, dict):
            yield from (item for item in value.values() if isinstance(item, Node))


def reachable_nodes(root: Node) -> list[Node]:
    """Return every node reachable from ``root``, including ``root`` itself."""
    result = [root]
    for child in child_nodes(root):
        result.extend(reachable_nodes(child))
    return result


# Child fields in visiting order, for the classes whose dataclass field order
# differs from it (go/ast order puts doc comments and init statements first)
VISIT_ORDER = {
    Field: ("doc", "names", "type", "tag", "comment"),
    ArrayType: ("len", "elt"),
    IfStmt: ("init", "cond", "body", "else_"),
    CaseClause: ("list", "body"),
    SwitchStmt: ("init", "tag", "body"),
    TypeSwitchStmt: ("init", "assign", "body"),
    ForStmt: ("init", "cond", "post", "body"),
    RangeStmt: ("key", "value", "x", "body"),
    ImportSpec: ("doc", "name", "path", "comment"),
    ValueSpec: ("doc", "names", "type", "values", "comment"),
    TypeSpec: ("doc", "name", "type", "comment"),
    GenDecl: ("doc", "specs"),
    FuncDecl: ("doc", "recv", "name", "type", "body"),
    File: ("doc", "name", "decls"),
}


def preorder_nodes(root: Node) -> list[Node]:
    """Return the nodes under ``root`` in the order a walk should visit them."""
    result = [root]
    names = VISIT_ORDER.get(type(root)) or [f.name for f in fields(root)]
    for name in names:
        value = getattr(root, name)
        if isinstance(value, Node):
            result.extend(preorder_nodes(value))
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    result.extend(preorder_nodes(item))
        elif isinstance(value, dict):
            for item in value.values():
                if isinstance(item, Node):
                    result.extend(preorder_nodes(item))
    return result


def parent_map(root: Node) -> dict[int, Node]:
    """Map ``id(child)`` to its parent for every non-root node under ``root``."""
    parents: dict[int, Node] = {}
    for node in reachable_nodes(root):
        for child in child_nodes(node):
            parents[id(child)] = node
    return parents


def label(node: Node) -> str:
    """Short description of a node for order assertions."""
    if isinstance(node, Ident):
        return f"Ident:{node.name}"
    if isinstance(node, BasicLit):
        return f"BasicLit:{node.value}"
    return type(node).__name__


class RecordingVisitor:
    """Visitor that records every call and always asks to recurse.

    Parameters
    ----------
    stop_on : tuple of type, default = ()
        Node classes for which the visitor returns False

    """

    def __init__(self, stop_on: tuple = ()):
        self.stop_on = stop_on
        self.events: list[Optional[Node]] = []

    def __call__(self, cursor: Cursor, node: Optional[Node]) -> bool:
        assert cursor.current() is node
        self.events.append(node)
        if node is None:
            return True
        return not isinstance(node, self.stop_on)

    @property
    def visited(self) -> list[Node]:
        """Nodes passed to pre-order calls, in call order."""
        return [node for node in self.events if node is not None]

    @property
    def closing_calls(self) -> int:
        return sum(1 for node in self.events if node is None)


def ident(name: str) -> Ident:
    return Ident(name=name)


def string_lit(text: str) -> BasicLit:
    return BasicLit(kind="STRING", value=f'"{text}"')


def int_lit(value: int) -> BasicLit:
    return BasicLit(kind="INT", value=str(value))


def widget_func_file() -> File:
    """A file holding a single function ``Widget(name string)``.

    Equivalent Go source::

        package main

        func Widget(name string) {
            println(name)
        }

    """
    return File(
        name=ident("main"),
        decls=[
            FuncDecl(
                name=ident("Widget"),
                type=FuncType(
                    params=FieldList(list=[Field(names=[ident("name")], type=ident("string"))]),
                ),
                body=BlockStmt(
                    list=[ExprStmt(x=CallExpr(fun=ident("println"), args=[ident("name")]))],
                ),
            )
        ],
    )


def sample_file() -> File:
    """A file exercising comments, methods, loops and conditionals.

    Equivalent Go source::

        // Package shapes is a sample.
        package shapes

        import "fmt"

        type Shape struct {
            Width int `json:"width"`
        }

        // Grow widens every shape.
        func (s *Shape) Grow(items []int) {
            for i := 0; i < 3; i++ {
                s.Width += i
            }
            for _, v := range items {
                if v > 0 {
                    fmt.Println(*s, v)
                }
            }
            return
        }

    """
    package_doc = CommentGroup(list=[Comment(text="// Package shapes is a sample.")])
    func_doc = CommentGroup(list=[Comment(text="// Grow widens every shape.")])
    return File(
        doc=package_doc,
        name=ident("shapes"),
        decls=[
            GenDecl(tok="import", specs=[ImportSpec(path=string_lit("fmt"))]),
            GenDecl(
                tok="type",
                specs=[
                    TypeSpec(
                        name=ident("Shape"),
                        type=StructType(
                            fields=FieldList(
                                list=[
                                    Field(
                                        names=[ident("Width")],
                                        type=ident("int"),
                                        tag=BasicLit(kind="STRING", value='`json:"width"`'),
                                    )
                                ]
                            )
                        ),
                    )
                ],
            ),
            FuncDecl(
                doc=func_doc,
                recv=FieldList(list=[Field(names=[ident("s")], type=StarExpr(x=ident("Shape")))]),
                name=ident("Grow"),
                type=FuncType(
                    params=FieldList(
                        list=[Field(names=[ident("items")], type=ident("[]int"))],
                    )
                ),
                body=BlockStmt(
                    list=[
                        ForStmt(
                            init=AssignStmt(lhs=[ident("i")], tok=":=", rhs=[int_lit(0)]),
                            cond=BinaryExpr(x=ident("i"), op="<", y=int_lit(3)),
                            post=IncDecStmt(x=ident("i"), tok="++"),
                            body=BlockStmt(
                                list=[
                                    AssignStmt(
                                        lhs=[SelectorExpr(x=ident("s"), sel=ident("Width"))],
                                        tok="+=",
                                        rhs=[ident("i")],
                                    )
                                ]
                            ),
                        ),
                        RangeStmt(
                            key=ident("_"),
                            value=ident("v"),
                            tok=":=",
                            x=ident("items"),
                            body=BlockStmt(
                                list=[
                                    IfStmt(
                                        cond=BinaryExpr(x=ident("v"), op=">", y=int_lit(0)),
                                        body=BlockStmt(
                                            list=[
                                                ExprStmt(
                                                    x=CallExpr(
                                                        fun=SelectorExpr(x=ident("fmt"), sel=ident("Println")),
                                                        args=[ParenExpr(x=StarExpr(x=ident("s"))), ident("v")],
                                                    )
                                                )
                                            ]
                                        ),
                                    )
                                ]
                            ),
                        ),
                        ReturnStmt(),
                    ]
                ),
            ),
        ],
        # Shared with the owners above, as a parser would produce them
        comments=[package_doc, func_doc, CommentGroup(list=[Comment(text="// floating")])],
    )
