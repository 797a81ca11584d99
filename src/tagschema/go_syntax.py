"""Go source parsing via tree-sitter.

Turns a Go file into the small set of records the entity scanner needs:
type declarations with their attached comments, struct fields, field type
expressions and raw struct tags. Nothing else in the package looks at source
text directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import structlog
import tree_sitter_go
from tree_sitter import Language, Node, Parser

logger = structlog.get_logger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

TypeExprKind = Literal["ident", "qualified", "array", "other"]


@dataclass(frozen=True)
class TypeExpr:
    """A field type, reduced to what column mapping looks at.

    ``name`` is the bare identifier for ``ident``, the selector for
    ``qualified`` (``time.Time`` -> ``Time``) and the element identifier for
    ``array`` (``[]byte`` -> ``byte``). ``source`` is the type as written.
    """

    kind: TypeExprKind
    name: str
    source: str


@dataclass
class FieldDecl:
    """One field declaration inside a struct body."""

    names: list[str]  # empty for embedded fields
    type: TypeExpr
    tag: str | None = None  # tag literal including its delimiters
    line: int = 0

    @property
    def is_embedded(self) -> bool:
        return not self.names


@dataclass
class TypeDecl:
    """A named type declaration with its attached comment text."""

    name: str
    line: int
    comments: list[str] = field(default_factory=list)
    fields: list[FieldDecl] | None = None  # None when not a struct

    @property
    def is_struct(self) -> bool:
        return self.fields is not None


@dataclass
class GoFile:
    path: Path | None
    package: str = ""
    types: list[TypeDecl] = field(default_factory=list)


@dataclass
class _CommentGroup:
    start_row: int
    end_row: int
    texts: list[str]


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    # comments may carry bytes in a legacy encoding
    return node.text.decode("utf-8", errors="replace")


def type_expr(node: Node) -> TypeExpr:
    """Reduce a tree-sitter type node to a TypeExpr."""
    source = _text(node)
    if node.type == "type_identifier":
        return TypeExpr("ident", source, source)
    if node.type == "qualified_type":
        return TypeExpr(
            "qualified", _text(node.child_by_field_name("name")), source
        )
    if node.type in ("slice_type", "array_type"):
        elem = node.child_by_field_name("element")
        if elem is not None and elem.type == "type_identifier":
            return TypeExpr("array", _text(elem), source)
        return TypeExpr("other", "", source)
    if node.type == "parenthesized_type" and node.named_child_count == 1:
        return type_expr(node.named_children[0])
    return TypeExpr("other", "", source)


class GoParser:
    """Parse Go sources into GoFile records."""

    def __init__(self) -> None:
        self._parser = Parser(language=GO_LANGUAGE)

    def parse_file(self, path: Path) -> GoFile:
        # unreadable files raise OSError to the caller
        return self.parse(path.read_bytes(), path)

    def parse(self, source: bytes | str, path: Path | None = None) -> GoFile:
        if isinstance(source, str):
            source = source.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        go_file = GoFile(path=path)
        if root.has_error:
            logger.warning(
                "go source has syntax errors",
                path=str(path) if path else "<source>",
            )

        self._walk_decls(root, [], go_file)
        return go_file

    def _walk_decls(
        self, container: Node, inherited: list[str], go_file: GoFile
    ) -> None:
        """Walk a declaration list, attaching comments to decls.

        A comment starting on the row where the previous node ends belongs to
        that node. So does a comment group starting on the row right after it
        when a blank line separates the group from the next node. Every other
        comment belongs to the next declaration.
        """
        groups: list[_CommentGroup] = []
        prev_end_row = -1
        prev_decls: list[TypeDecl] = []

        for child in container.named_children:
            if child.type == "comment":
                text = _text(child)
                row = child.start_point[0]
                if not groups and row == prev_end_row:
                    for decl in prev_decls:
                        decl.comments.append(text)
                elif groups and row == groups[-1].end_row + 1:
                    groups[-1].texts.append(text)
                    groups[-1].end_row = child.end_point[0]
                else:
                    groups.append(
                        _CommentGroup(row, child.end_point[0], [text])
                    )
                continue

            if groups and prev_decls:
                first = groups[0]
                if (
                    first.start_row == prev_end_row + 1
                    and child.start_point[0] > first.end_row + 1
                ):
                    for decl in prev_decls:
                        decl.comments.extend(first.texts)
                    groups = groups[1:]

            before = len(go_file.types)
            comments = inherited + [t for g in groups for t in g.texts]
            if child.type == "package_clause":
                pkg = next(
                    (
                        c
                        for c in child.named_children
                        if c.type == "package_identifier"
                    ),
                    None,
                )
                go_file.package = _text(pkg)
            elif child.type == "type_declaration":
                self._walk_decls(child, comments, go_file)
            elif child.type == "type_spec":
                go_file.types.append(self._type_decl(child, comments))

            prev_decls = go_file.types[before:]
            prev_end_row = child.end_point[0]
            groups = []

        if groups and prev_decls and groups[0].start_row == prev_end_row + 1:
            for decl in prev_decls:
                decl.comments.extend(groups[0].texts)

    def _type_decl(self, spec: Node, comments: list[str]) -> TypeDecl:
        decl = TypeDecl(
            name=_text(spec.child_by_field_name("name")),
            line=spec.start_point[0] + 1,
            comments=list(comments),
        )
        type_node = spec.child_by_field_name("type")
        if type_node is not None and type_node.type == "struct_type":
            decl.fields = self._struct_fields(type_node)
        return decl

    def _struct_fields(self, struct_node: Node) -> list[FieldDecl]:
        fields: list[FieldDecl] = []
        body = next(
            (
                c
                for c in struct_node.named_children
                if c.type == "field_declaration_list"
            ),
            None,
        )
        if body is None:
            return fields

        for node in body.named_children:
            if node.type != "field_declaration":
                continue
            type_node = node.child_by_field_name("type")
            if type_node is None:
                continue
            tag_node = node.child_by_field_name("tag")
            fields.append(
                FieldDecl(
                    names=[
                        _text(n) for n in node.children_by_field_name("name")
                    ],
                    type=type_expr(type_node),
                    tag=_text(tag_node) if tag_node is not None else None,
                    line=node.start_point[0] + 1,
                )
            )
        return fields
