"""Exhibit extraction from the syntax tree of the exhibit script."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union
from urllib.parse import urljoin

import esprima
from esprima.error_handler import Error as EsprimaError

from .errors import ExtractionError, UnsupportedNodeError
from .models import CalledExhibit, Exhibit, InlineExhibit, RemoteExhibit

logger = logging.getLogger("minerva_harvest.extraction")

IMAGE_PATH_VARIABLE = "image_path"
EXHIBIT_VARIABLE = "exhibit"
EXHIBIT_OPTION = "exhibit"


def parse_script(source: str) -> List[Any]:
    """Parse script source and return its top-level statements."""
    try:
        program = esprima.parseScript(source)
    except EsprimaError as exc:
        raise ExtractionError(f"could not parse exhibit script: {exc}") from exc
    return list(program.body)


def _field(node: Any, name: str) -> Any:
    if isinstance(node, dict):
        return node.get(name)
    return getattr(node, name, None)


def _serialize_object(node: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for prop in node.properties:
        if prop.type != "Property" or prop.computed or prop.kind != "init":
            raise UnsupportedNodeError(prop.type, "object member")
        result[_property_key(prop)] = serialize_node(prop.value)
    return result


def _serialize_array(node: Any) -> List[Any]:
    values = []
    for element in node.elements:
        # Holes in array literals read back as undefined.
        values.append(None if element is None else serialize_node(element))
    return values


def _serialize_literal(node: Any) -> Any:
    if _field(node, "regex"):
        raise UnsupportedNodeError("RegExpLiteral")
    value = node.value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _serialize_unary(node: Any) -> Any:
    if node.operator not in ("-", "+"):
        raise UnsupportedNodeError(node.type, f"operator {node.operator}")
    value = serialize_node(node.argument)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedNodeError(node.type, "non-numeric operand")
    return -value if node.operator == "-" else value


def _serialize_template(node: Any) -> str:
    if node.expressions:
        raise UnsupportedNodeError(node.type, "template with substitutions")
    return "".join(_field(_field(quasi, "value"), "cooked") or "" for quasi in node.quasis)


def _serialize_identifier(node: Any) -> None:
    if node.name != "undefined":
        raise UnsupportedNodeError(node.type, node.name)
    return None


_SERIALIZERS: Dict[str, Callable[[Any], Any]] = {
    "ObjectExpression": _serialize_object,
    "ArrayExpression": _serialize_array,
    "Literal": _serialize_literal,
    "UnaryExpression": _serialize_unary,
    "TemplateLiteral": _serialize_template,
    "Identifier": _serialize_identifier,
}


def serialize_node(node: Any) -> Any:
    """Convert a literal-only expression node into plain Python data."""
    serializer = _SERIALIZERS.get(node.type)
    if serializer is None:
        raise UnsupportedNodeError(node.type)
    return serializer(node)


def _property_key(prop: Any) -> str:
    key = prop.key
    if key.type == "Identifier":
        return key.name
    if key.type == "Literal":
        value = _serialize_literal(key)
        return value if isinstance(value, str) else str(value)
    raise UnsupportedNodeError(key.type, "property key")


def _single_declarations(statements: Sequence[Any]) -> Dict[str, Any]:
    """Map each single-target ``var``/``let``/``const`` name to its initializer."""
    declarations: Dict[str, Any] = {}
    for statement in statements:
        if statement.type != "VariableDeclaration" or len(statement.declarations) != 1:
            continue
        declarator = statement.declarations[0]
        if declarator.id.type != "Identifier":
            continue
        declarations.setdefault(declarator.id.name, declarator.init)
    return declarations


def _string_literal(node: Any) -> Optional[str]:
    if node is None or node.type != "Literal" or not isinstance(node.value, str):
        return None
    return node.value


def find_declared_exhibit(statements: Sequence[Any]) -> Optional[Exhibit]:
    """Return the exhibit assigned by a top-level ``exhibit`` declaration.

    A sibling ``image_path`` string declaration replaces the ``Path`` of
    every image, for stories that keep all tiles in one shared directory.
    """
    declarations = _single_declarations(statements)
    init = declarations.get(EXHIBIT_VARIABLE)
    if init is None:
        return None

    exhibit = serialize_node(init)
    if not isinstance(exhibit, dict):
        raise ExtractionError("exhibit declaration is not an object literal")

    image_path = _string_literal(declarations.get(IMAGE_PATH_VARIABLE))
    images = exhibit.get("Images")
    if image_path and isinstance(images, list):
        exhibit["Images"] = [
            {**image, "Path": image_path} if isinstance(image, dict) else image
            for image in images
        ]
    return exhibit


def _first_assigned_call(statements: Sequence[Any]) -> Optional[Any]:
    for statement in statements:
        if statement.type != "ExpressionStatement":
            continue
        expression = statement.expression
        if expression.type != "AssignmentExpression":
            continue
        if expression.right.type == "CallExpression":
            return expression.right
    return None


def _option_value(options: Any, name: str) -> Optional[Any]:
    for prop in options.properties:
        if prop.type == "Property" and not prop.computed and _property_key(prop) == name:
            return prop.value
    return None


def find_called_exhibit(statements: Sequence[Any], location: str) -> Optional[CalledExhibit]:
    """Inspect the first assigned call, e.g. ``window.viewer = build({...})``.

    The ``exhibit`` option is either the exhibit itself as an object literal
    or a URL, relative to ``location``, of a JSON document holding it.
    """
    call = _first_assigned_call(statements)
    if call is None:
        return None
    if not call.arguments:
        raise ExtractionError("exhibit call has no arguments")
    options = call.arguments[0]
    if options.type != "ObjectExpression":
        raise UnsupportedNodeError(options.type, "exhibit call argument")

    value = _option_value(options, EXHIBIT_OPTION)
    if value is None:
        raise ExtractionError("exhibit call has no 'exhibit' option")
    if value.type == "ObjectExpression":
        return InlineExhibit(serialize_node(value))

    reference = serialize_node(value)
    if not isinstance(reference, str) or not reference:
        raise ExtractionError("'exhibit' option is neither an object nor a URL")
    return RemoteExhibit(urljoin(location, reference))


def extract_exhibit(statements: Sequence[Any], location: str) -> Union[Exhibit, RemoteExhibit]:
    """Apply the declared, called-inline and called-remote strategies in order."""
    declared = find_declared_exhibit(statements)
    if declared is not None:
        logger.debug("Using declared exhibit for %s", location)
        return declared

    called = find_called_exhibit(statements, location)
    if isinstance(called, InlineExhibit):
        logger.debug("Using inline exhibit argument for %s", location)
        return called.exhibit
    if isinstance(called, RemoteExhibit):
        logger.debug("Exhibit for %s is hosted at %s", location, called.url)
        return called

    raise ExtractionError("no exhibit declaration or exhibit call found")
