#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and default values
- Family membership of every variant
- The node type registry
- Position tracking

"""

from dataclasses import fields, is_dataclass

import pytest

from goastor.ast import (
    NODE_TYPES,
    ArrayType,
    BadDecl,
    BadExpr,
    BadStmt,
    BasicLit,
    BlockStmt,
    CaseClause,
    ChanType,
    Comment,
    CommentGroup,
    CompositeLit,
    Decl,
    EmptyStmt,
    Expr,
    Field,
    FieldList,
    File,
    FuncDecl,
    FuncType,
    GenDecl,
    Ident,
    IfStmt,
    ImportSpec,
    Node,
    Package,
    Position,
    RangeStmt,
    SliceExpr,
    Spec,
    Stmt,
    TypeSpec,
    ValueSpec,
    new_ident,
)


@pytest.mark.unit
class TestNodeCreation:
    """Test construction of individual node classes."""

    def test_ident_creation(self):
        """Test creating an identifier."""
        node = Ident(name="Widget")
        assert node.name == "Widget"
        assert node.position is None
        assert str(node) == "Widget"

    def test_new_ident_has_no_position(self):
        """Test that new_ident builds an identifier without position information."""
        node = new_ident("FooWidget")
        assert node == Ident(name="FooWidget")
        assert node.position is None

    def test_basic_lit_creation(self):
        """Test creating a string literal keeps the quotes in the value."""
        node = BasicLit(kind="STRING", value='"hello"')
        assert node.kind == "STRING"
        assert node.value == '"hello"'

    def test_list_defaults_are_independent(self):
        """Test that default lists are not shared between instances."""
        first = BlockStmt()
        second = BlockStmt()
        first.list.append(EmptyStmt())

        assert second.list == []

    def test_case_clause_defaults(self):
        """Test that a default case has no expressions and an empty body."""
        clause = CaseClause()
        assert clause.list == []
        assert clause.body == []

    def test_optional_children_default_to_none(self):
        """Test the optional child slots of common nodes."""
        if_stmt = IfStmt(cond=new_ident("ok"), body=BlockStmt())
        assert if_stmt.init is None
        assert if_stmt.else_ is None

        slice_expr = SliceExpr(x=new_ident("s"))
        assert (slice_expr.low, slice_expr.high, slice_expr.max) == (None, None, None)

        range_stmt = RangeStmt(x=new_ident("items"), body=BlockStmt())
        assert range_stmt.key is None
        assert range_stmt.value is None
        assert range_stmt.tok == ""

    def test_chan_type_defaults_to_both_directions(self):
        """Test the default channel direction."""
        assert ChanType(value=new_ident("int")).dir == "both"

    def test_composite_lit_without_type(self):
        """Test an elided composite literal type."""
        lit = CompositeLit(elts=[BasicLit(kind="INT", value="1")])
        assert lit.type is None
        assert not lit.incomplete

    def test_func_decl_without_body(self):
        """Test an external function declaration has no body."""
        decl = FuncDecl(name=new_ident("sqrt"), type=FuncType())
        assert decl.body is None
        assert decl.recv is None

    def test_file_defaults(self):
        """Test a file with only a package clause."""
        file_node = File(name=new_ident("main"))
        assert file_node.decls == []
        assert file_node.imports == []
        assert file_node.unresolved == []
        assert file_node.comments == []
        assert file_node.doc is None

    def test_package_files_keep_insertion_order(self):
        """Test that package files iterate in insertion order."""
        package = Package(name="main")
        package.files["b.go"] = File(name=new_ident("main"))
        package.files["a.go"] = File(name=new_ident("main"))

        assert list(package.files) == ["b.go", "a.go"]

    def test_nodes_compare_structurally(self):
        """Test that equal field values make equal nodes."""
        assert ArrayType(elt=new_ident("int")) == ArrayType(elt=new_ident("int"))
        assert ArrayType(elt=new_ident("int")) != ArrayType(elt=new_ident("int"), len=BasicLit(kind="INT", value="4"))


@pytest.mark.unit
class TestNodeFamilies:
    """Test that every variant belongs to the family its slots expect."""

    @pytest.mark.parametrize(
        "node,family",
        [
            (BadExpr(), Expr),
            (new_ident("x"), Expr),
            (FuncType(), Expr),
            (BadStmt(), Stmt),
            (BlockStmt(), Stmt),
            (CaseClause(), Stmt),
            (BadDecl(), Decl),
            (GenDecl(tok="var"), Decl),
            (ImportSpec(path=BasicLit(kind="STRING", value='"fmt"')), Spec),
            (ValueSpec(names=[new_ident("x")]), Spec),
            (TypeSpec(name=new_ident("T"), type=new_ident("int")), Spec),
        ],
    )
    def test_family_membership(self, node, family):
        """Test family membership for a representative of each family."""
        assert isinstance(node, family)
        assert isinstance(node, Node)

    @pytest.mark.parametrize(
        "node",
        [
            Comment(text="// x"),
            CommentGroup(),
            Field(type=new_ident("int")),
            FieldList(),
            File(name=new_ident("main")),
            Package(name="main"),
        ],
    )
    def test_familyless_nodes(self, node):
        """Test that structural nodes belong to no family."""
        assert not isinstance(node, (Expr, Stmt, Decl, Spec))

    def test_families_are_disjoint(self):
        """Test that no variant belongs to two families."""
        families = (Expr, Stmt, Decl, Spec)
        for cls in NODE_TYPES.values():
            assert sum(issubclass(cls, family) for family in families) <= 1, cls.__name__

    def test_families_are_abstract(self):
        """Test that family classes are not dataclasses of their own."""
        for family in (Node, Expr, Stmt, Decl, Spec):
            assert not is_dataclass(family)


@pytest.mark.unit
class TestNodeRegistry:
    """Test the NODE_TYPES registry."""

    def test_registry_size(self):
        """Test that the registry holds all fifty-five variants."""
        assert len(NODE_TYPES) == 55

    def test_registry_keys_match_class_names(self):
        """Test that every key is the class name of its value."""
        for name, cls in NODE_TYPES.items():
            assert cls.__name__ == name

    def test_registry_order_starts_with_comments_and_ends_with_package(self):
        """Test the registry order."""
        names = list(NODE_TYPES)
        assert names[:4] == ["Comment", "CommentGroup", "Field", "FieldList"]
        assert names[-2:] == ["File", "Package"]

    def test_every_variant_has_position_field_last(self):
        """Test that position is the final field of every variant."""
        for cls in NODE_TYPES.values():
            node_fields = fields(cls)
            assert node_fields[-1].name == "position", cls.__name__
            assert node_fields[-1].default is None


@pytest.mark.unit
class TestPosition:
    """Test position tracking."""

    def test_position_defaults(self):
        """Test that an empty position is unknown."""
        position = Position()
        assert position.filename is None
        assert (position.offset, position.line, position.column) == (0, 0, 0)

    def test_node_with_position(self):
        """Test attaching a position to a node."""
        position = Position(filename="main.go", offset=14, line=3, column=6)
        node = Ident(name="Widget", position=position)

        assert node.position.filename == "main.go"
        assert node.position.line == 3
        assert node.position.column == 6

    def test_position_takes_part_in_equality(self):
        """Test that positions make otherwise equal nodes differ."""
        assert Ident(name="x", position=Position(line=1)) != Ident(name="x")
