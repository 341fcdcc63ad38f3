"""Tree-sitter based extraction of Java type declarations."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_java import language as get_java_language

from model.units import (
    ClassKind,
    ClassUnit,
    FieldUnit,
    MethodUnit,
    ParameterUnit,
    Visibility,
)
from utils import qualify, simple_name

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

_PARSER: Parser | None = None

TYPE_DECLARATIONS: dict[str, ClassKind] = {
    "class_declaration": ClassKind.CLASS,
    "record_declaration": ClassKind.CLASS,
    "interface_declaration": ClassKind.INTERFACE,
    "enum_declaration": ClassKind.ENUM,
    "annotation_type_declaration": ClassKind.ANNOTATION,
}

_VISIBILITY_KEYWORDS: dict[str, Visibility] = {
    "public": Visibility.PUBLIC,
    "protected": Visibility.PROTECTED,
    "private": Visibility.PRIVATE,
}

_ANNOTATION_NODES = frozenset({"marker_annotation", "annotation"})

# Names that are never qualified with the declaring package.
_BUILTIN_TYPES = frozenset(
    {
        "boolean",
        "byte",
        "char",
        "double",
        "float",
        "int",
        "long",
        "short",
        "void",
        "var",
        "Boolean",
        "Byte",
        "Character",
        "CharSequence",
        "Class",
        "Double",
        "Enum",
        "Exception",
        "Float",
        "Integer",
        "Iterable",
        "Long",
        "Number",
        "Object",
        "Record",
        "RuntimeException",
        "Short",
        "String",
        "StringBuilder",
        "Throwable",
        "Void",
    }
)


class JavaParseError(Exception):
    """Raised when a Java source file contains syntax errors."""


@dataclass
class CompilationUnit:
    """Everything extracted from one Java source file."""

    source_file: str
    package: str = ""
    imports: list[str] = field(default_factory=list)
    classes: list[ClassUnit] = field(default_factory=list)


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the Java language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_java_language())
        _PARSER = Parser(lang)

    return _PARSER


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8")


def _first_error_line(node: Node) -> int | None:
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error or child.is_missing:
            line = _first_error_line(child)
            if line is not None:
                return line
    return None


def _modifiers(node: Node) -> Node | None:
    for child in node.children:
        if child.type == "modifiers":
            return child
    return None


def _visibility(node: Node) -> Visibility:
    modifiers = _modifiers(node)
    if modifiers is not None:
        for child in modifiers.children:
            visibility = _VISIBILITY_KEYWORDS.get(child.type)
            if visibility is not None:
                return visibility
    return Visibility.PACKAGE_PRIVATE


def _annotations(node: Node) -> tuple[str, ...]:
    modifiers = _modifiers(node)
    if modifiers is None:
        return ()
    names: list[str] = []
    for child in modifiers.children:
        if child.type in _ANNOTATION_NODES:
            name = _text(child.child_by_field_name("name"))
            if name:
                names.append(name)
    return tuple(names)


def _erased_type(node: Node | None) -> str:
    """Return a type as written, without type arguments or array dimensions."""
    if node is None:
        return ""
    if node.type == "generic_type":
        base = node.named_children[0] if node.named_children else None
        return _erased_type(base)
    if node.type == "array_type":
        return _erased_type(node.child_by_field_name("element"))
    if node.type == "annotated_type":
        inner = node.named_children[-1] if node.named_children else None
        return _erased_type(inner)
    if node.type == "scoped_type_identifier":
        return "".join(_text(node).split())
    return _text(node)


class _TypeResolver:
    """Qualify simple type names the way a reader of the file would.

    Single-type imports win, then types declared in the same file, then the
    declaring package. Built-in and already dotted names are kept.
    """

    def __init__(
        self,
        package: str,
        imports: dict[str, str],
        local_types: dict[str, str],
    ) -> None:
        self.package = package
        self.imports = imports
        self.local_types = local_types

    def qualify(self, type_name: str) -> str:
        if not type_name:
            return type_name
        head, sep, rest = type_name.partition(".")
        if head in self.imports:
            return self.imports[head] + sep + rest
        if head in self.local_types:
            return self.local_types[head] + sep + rest
        if sep or type_name in _BUILTIN_TYPES:
            return type_name
        return qualify(self.package, type_name)


def _package_name(root: Node) -> str:
    for child in root.named_children:
        if child.type == "package_declaration":
            for part in child.named_children:
                if part.type in ("identifier", "scoped_identifier"):
                    return _text(part)
    return ""


def _import_names(root: Node) -> tuple[list[str], dict[str, str]]:
    """Return all import names and the simple-name map of single-type imports.

    Wildcard imports are not modelled and are dropped.
    """
    names: list[str] = []
    single_type: dict[str, str] = {}
    for child in root.named_children:
        if child.type != "import_declaration":
            continue
        if any(part.type == "asterisk" for part in child.children):
            continue
        is_static = any(part.type == "static" for part in child.children)
        for part in child.named_children:
            if part.type in ("identifier", "scoped_identifier"):
                name = _text(part)
                names.append(name)
                if not is_static:
                    single_type.setdefault(simple_name(name), name)
                break
    return names, single_type


def _body_members(decl: Node) -> Iterator[Node]:
    body = decl.child_by_field_name("body")
    if body is None:
        return
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            yield from child.named_children
        else:
            yield child


def _discover_types(root: Node, package: str) -> list[tuple[Node, str, str | None]]:
    """Find every type declaration with its FQN and enclosing FQN.

    Top-level declarations are enqueued first; nested declarations are
    enqueued as their enclosing type is visited.
    """
    found: list[tuple[Node, str, str | None]] = []
    worklist: deque[tuple[Node, str | None]] = deque(
        (child, None) for child in root.named_children if child.type in TYPE_DECLARATIONS
    )
    while worklist:
        decl, enclosing = worklist.popleft()
        name = _text(decl.child_by_field_name("name"))
        if not name:
            continue
        fqn = f"{enclosing}.{name}" if enclosing else qualify(package, name)
        found.append((decl, fqn, enclosing))
        worklist.extend(
            (member, fqn)
            for member in _body_members(decl)
            if member.type in TYPE_DECLARATIONS
        )
    return found


def _declared_fields(node: Node, resolver: _TypeResolver) -> list[FieldUnit]:
    type_name = resolver.qualify(_erased_type(node.child_by_field_name("type")))
    visibility = _visibility(node)
    annotations = _annotations(node)
    return [
        FieldUnit(
            name=_text(declarator.child_by_field_name("name")),
            type_name=type_name,
            visibility=visibility,
            annotations=annotations,
        )
        for declarator in node.children_by_field_name("declarator")
    ]


def _record_components(decl: Node, resolver: _TypeResolver) -> list[FieldUnit]:
    params = decl.child_by_field_name("parameters")
    if params is None:
        return []
    return [
        FieldUnit(
            name=param.name,
            type_name=param.type_name,
            visibility=Visibility.PRIVATE,
        )
        for param in _parameters(params, resolver)
    ]


def _parameters(params: Node | None, resolver: _TypeResolver) -> list[ParameterUnit]:
    if params is None:
        return []
    result: list[ParameterUnit] = []
    for param in params.named_children:
        if param.type == "formal_parameter":
            type_node = param.child_by_field_name("type")
            name = _text(param.child_by_field_name("name"))
        elif param.type == "spread_parameter":
            type_node = next(
                (
                    c
                    for c in param.named_children
                    if c.type not in ("modifiers", "variable_declarator")
                ),
                None,
            )
            declarator = next(
                (c for c in param.named_children if c.type == "variable_declarator"),
                None,
            )
            name = _text(declarator.child_by_field_name("name")) if declarator else ""
        else:
            continue
        result.append(
            ParameterUnit(name=name, type_name=resolver.qualify(_erased_type(type_node)))
        )
    return result


def _method(node: Node, resolver: _TypeResolver) -> MethodUnit:
    return MethodUnit(
        name=_text(node.child_by_field_name("name")),
        return_type=resolver.qualify(_erased_type(node.child_by_field_name("type"))),
        visibility=_visibility(node),
        parameters=tuple(_parameters(node.child_by_field_name("parameters"), resolver)),
        annotations=_annotations(node),
    )


def _build_class(
    decl: Node,
    fqn: str,
    enclosing: str | None,
    package: str,
    source_file: str,
    resolver: _TypeResolver,
) -> ClassUnit:
    fields: list[FieldUnit] = []
    methods: dict[str, MethodUnit] = {}

    if decl.type == "record_declaration":
        fields.extend(_record_components(decl, resolver))

    for member in _body_members(decl):
        if member.type in ("field_declaration", "constant_declaration"):
            fields.extend(_declared_fields(member, resolver))
        elif member.type in ("method_declaration", "annotation_type_element_declaration"):
            method = _method(member, resolver)
            methods[method.signature] = method

    return ClassUnit(
        name=simple_name(fqn),
        fqn=fqn,
        package=package,
        visibility=_visibility(decl),
        kind=TYPE_DECLARATIONS[decl.type],
        source_file=source_file,
        annotations=_annotations(decl),
        methods=tuple(methods.values()),
        fields=tuple(fields),
        enclosing_class=enclosing,
    )


def parse_java_source(source: bytes | str, source_file: str) -> CompilationUnit:
    """Extract the package, imports and type declarations of one Java file.

    Raises:
        JavaParseError: if the source does not parse cleanly.
    """
    if isinstance(source, str):
        source = source.encode("utf8")

    tree = _get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        line = _first_error_line(root)
        where = f" near line {line}" if line is not None else ""
        msg = f"syntax error{where}"
        raise JavaParseError(msg)

    package = _package_name(root)
    imports, single_type = _import_names(root)
    declarations = _discover_types(root, package)

    local_types: dict[str, str] = {}
    for _decl, fqn, _enclosing in declarations:
        local_types.setdefault(simple_name(fqn), fqn)
    resolver = _TypeResolver(package, single_type, local_types)

    unit = CompilationUnit(source_file=source_file, package=package, imports=imports)
    for decl, fqn, enclosing in declarations:
        unit.classes.append(
            _build_class(decl, fqn, enclosing, package, source_file, resolver)
        )
    return unit


def parse_java_file(file_path: Path) -> CompilationUnit:
    """Read and parse a Java file.

    Raises:
        OSError: if the file cannot be read.
        JavaParseError: if the file does not parse cleanly.
    """
    return parse_java_source(file_path.read_bytes(), str(file_path))


__all__ = [
    "CompilationUnit",
    "JavaParseError",
    "TYPE_DECLARATIONS",
    "parse_java_file",
    "parse_java_source",
]
