#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/goastor/ast/__init__.py
"""Go syntax tree model.

The module consists of two components:

- nodes: dataclasses for every node type of the Go grammar
- serialization: JSON serialization and deserialization of trees

Examples
--------
Build a small file by hand:

    >>> from goastor.ast import File, FuncDecl, FuncType, BlockStmt, new_ident
    >>> tree = File(
    ...     name=new_ident("main"),
    ...     decls=[FuncDecl(name=new_ident("main"), type=FuncType(), body=BlockStmt())],
    ... )

"""

from __future__ import annotations

from goastor.ast.nodes import (
    NODE_TYPES,
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
    ChanDir,
    ChanType,
    CommClause,
    Comment,
    CommentGroup,
    CompositeLit,
    Decl,
    DeclStmt,
    DeclToken,
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
    LiteralKind,
    MapType,
    Node,
    Package,
    ParenExpr,
    Position,
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
    new_ident,
)
from goastor.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast

__all__ = [
    # Families and helpers
    "NODE_TYPES",
    "ChanDir",
    "Decl",
    "DeclToken",
    "Expr",
    "LiteralKind",
    "Node",
    "Position",
    "Spec",
    "Stmt",
    "new_ident",
    # Comments and fields
    "Comment",
    "CommentGroup",
    "Field",
    "FieldList",
    # Expressions
    "BadExpr",
    "BasicLit",
    "BinaryExpr",
    "CallExpr",
    "CompositeLit",
    "Ellipsis",
    "FuncLit",
    "Ident",
    "IndexExpr",
    "KeyValueExpr",
    "ParenExpr",
    "SelectorExpr",
    "SliceExpr",
    "StarExpr",
    "TypeAssertExpr",
    "UnaryExpr",
    # Types
    "ArrayType",
    "ChanType",
    "FuncType",
    "InterfaceType",
    "MapType",
    "StructType",
    # Statements
    "AssignStmt",
    "BadStmt",
    "BlockStmt",
    "BranchStmt",
    "CaseClause",
    "CommClause",
    "DeclStmt",
    "DeferStmt",
    "EmptyStmt",
    "ExprStmt",
    "ForStmt",
    "GoStmt",
    "IfStmt",
    "IncDecStmt",
    "LabeledStmt",
    "RangeStmt",
    "ReturnStmt",
    "SelectStmt",
    "SendStmt",
    "SwitchStmt",
    "TypeSwitchStmt",
    # Declarations
    "BadDecl",
    "FuncDecl",
    "GenDecl",
    "ImportSpec",
    "TypeSpec",
    "ValueSpec",
    # Files and packages
    "File",
    "Package",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
