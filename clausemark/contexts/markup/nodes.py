"""
Document Node Model

Defines the tagged-variant tree shared by every document transformation:
CommonMark block and inline nodes plus the contract-specific nodes (clauses,
contracts, conditionals and variables).

Trees travel between formats as plain JSON records discriminated by a '$class'
field, e.g. {"$class": "org.accordproject.commonmark.Text", "text": "Hello"}.
This module converts between that JSON form and the dataclasses below.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from clausemark.contexts.markup.exceptions import InvalidNodeError

COMMONMARK_NS = "org.accordproject.commonmark"
CICEROMARK_NS = "org.accordproject.ciceromark"

# Input tags that are spelled differently by some producers
TAG_ALIASES = {
    "ListItem": "Item",
}

NODE_TYPES: Dict[str, Type["Node"]] = {}


def register_node(cls: Type["Node"]) -> Type["Node"]:
    """Class decorator adding a node class to the tag registry."""
    NODE_TYPES[cls.TAG] = cls
    return cls


def _to_camel(name: str) -> str:
    """element_type -> elementType"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class Node:
    """
    Base class for every document node.

    Every node owns an ordered list of children; order drives both rendering
    order and parse order. Leaf kinds simply keep the list empty.
    """

    nodes: List["Node"] = field(default_factory=list)

    TAG: ClassVar[str] = "Node"
    NAMESPACE: ClassVar[str] = COMMONMARK_NS
    # Fields (besides 'nodes') that hold child node lists
    NODE_LIST_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @property
    def tag(self) -> str:
        return self.TAG

    @property
    def class_name(self) -> str:
        return f"{self.NAMESPACE}.{self.TAG}"

    def to_json(self) -> Dict[str, Any]:
        """Serialize this subtree to its JSON record form."""
        data: Dict[str, Any] = {"$class": self.class_name}
        for f in fields(self):
            if f.name == "nodes":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in self.NODE_LIST_FIELDS:
                value = [child.to_json() for child in value]
            data[_to_camel(f.name)] = value
        if self.nodes:
            data["nodes"] = [child.to_json() for child in self.nodes]
        return data


# CommonMark block nodes


@register_node
@dataclass
class Document(Node):
    xmlns: Optional[str] = None

    TAG: ClassVar[str] = "Document"


@register_node
@dataclass
class Paragraph(Node):
    TAG: ClassVar[str] = "Paragraph"


@register_node
@dataclass
class Heading(Node):
    """Heading; level is a string "1".."6" as produced by the tokenizer."""

    level: str = "1"

    TAG: ClassVar[str] = "Heading"


@register_node
@dataclass
class ListNode(Node):
    """List of Item nodes; type is "ordered" or "bullet"."""

    type: str = "bullet"
    start: Optional[str] = None
    tight: Optional[str] = None
    delimiter: Optional[str] = None

    TAG: ClassVar[str] = "List"


@register_node
@dataclass
class ListBlock(ListNode):
    """List whose items are generated from a list variable."""

    name: Optional[str] = None

    TAG: ClassVar[str] = "ListBlock"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS


@register_node
@dataclass
class Item(Node):
    TAG: ClassVar[str] = "Item"


@register_node
@dataclass
class BlockQuote(Node):
    TAG: ClassVar[str] = "BlockQuote"


@register_node
@dataclass
class CodeBlock(Node):
    text: str = ""
    info: Optional[str] = None

    TAG: ClassVar[str] = "CodeBlock"


@register_node
@dataclass
class HtmlBlock(Node):
    text: str = ""

    TAG: ClassVar[str] = "HtmlBlock"


@register_node
@dataclass
class ThematicBreak(Node):
    TAG: ClassVar[str] = "ThematicBreak"


# CommonMark inline nodes


@register_node
@dataclass
class Text(Node):
    text: str = ""

    TAG: ClassVar[str] = "Text"


@register_node
@dataclass
class Code(Node):
    text: str = ""

    TAG: ClassVar[str] = "Code"


@register_node
@dataclass
class HtmlInline(Node):
    text: str = ""

    TAG: ClassVar[str] = "HtmlInline"


@register_node
@dataclass
class Emph(Node):
    TAG: ClassVar[str] = "Emph"


@register_node
@dataclass
class Strong(Node):
    TAG: ClassVar[str] = "Strong"


@register_node
@dataclass
class Link(Node):
    destination: str = ""
    title: Optional[str] = None

    TAG: ClassVar[str] = "Link"


@register_node
@dataclass
class Image(Node):
    destination: str = ""
    title: Optional[str] = None

    TAG: ClassVar[str] = "Image"


@register_node
@dataclass
class Linebreak(Node):
    TAG: ClassVar[str] = "Linebreak"


@register_node
@dataclass
class Softbreak(Node):
    TAG: ClassVar[str] = "Softbreak"


# Contract nodes


@register_node
@dataclass
class Clause(Node):
    """
    Clause inside a contract.

    Attributes:
        name: Clause name (field name in the contract data)
        src: Template source identifier, quoted in the clause boundary marker
        clauseid: Clause instance identifier, quoted in the clause boundary marker
    """

    name: Optional[str] = None
    src: Optional[str] = None
    clauseid: Optional[str] = None

    TAG: ClassVar[str] = "Clause"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS


@register_node
@dataclass
class Contract(Node):
    name: Optional[str] = None
    src: Optional[str] = None

    TAG: ClassVar[str] = "Contract"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS


@register_node
@dataclass
class WithBlock(Node):
    """Inline scope over the fields of a nested record."""

    name: Optional[str] = None

    TAG: ClassVar[str] = "WithBlock"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS


@register_node
@dataclass
class Conditional(Node):
    """
    Conditional text; 'nodes' holds the already resolved branch.

    Attributes:
        name: Boolean variable deciding the branch
        is_true: Current value of the variable
        when_true: Nodes rendered when the variable is true
        when_false: Nodes rendered when the variable is false
    """

    name: Optional[str] = None
    is_true: Optional[bool] = None
    when_true: List[Node] = field(default_factory=list)
    when_false: List[Node] = field(default_factory=list)

    TAG: ClassVar[str] = "Conditional"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS
    NODE_LIST_FIELDS: ClassVar[Tuple[str, ...]] = ("when_true", "when_false")


@register_node
@dataclass
class Variable(Node):
    """
    Variable occurrence in contract text.

    String values are stored with their double quotes, exactly as they appear in
    the contract text; renderers decide whether to unquote them.

    Attributes:
        name: Variable name
        value: Stored value, as text
        element_type: Declared type of the variable (e.g. "String", "Integer")
        identified_by: Name of the identifying field when the variable is a relationship
    """

    name: Optional[str] = None
    value: str = ""
    element_type: Optional[str] = None
    identified_by: Optional[str] = None

    TAG: ClassVar[str] = "Variable"
    NAMESPACE: ClassVar[str] = CICEROMARK_NS


@register_node
@dataclass
class FormattedVariable(Variable):
    format: Optional[str] = None

    TAG: ClassVar[str] = "FormattedVariable"


@register_node
@dataclass
class EnumVariable(Variable):
    enum_values: Optional[List[str]] = None

    TAG: ClassVar[str] = "EnumVariable"


@register_node
@dataclass
class Formula(Variable):
    code: Optional[str] = None
    dependencies: Optional[List[str]] = None

    TAG: ClassVar[str] = "Formula"


@dataclass
class UnknownNode(Node):
    """
    Node whose '$class' is not part of the catalog.

    Kept opaque (tag, raw fields, children) so that deserializing never loses
    data; no visitor defines a rule for it.
    """

    class_name_raw: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        return self.class_name_raw.rsplit(".", 1)[-1]

    @property
    def class_name(self) -> str:
        return self.class_name_raw

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"$class": self.class_name_raw, **self.attributes}
        if self.nodes:
            data["nodes"] = [child.to_json() for child in self.nodes]
        return data


def _children_from_json(value: Any, class_name: str) -> List[Node]:
    if not isinstance(value, list):
        raise InvalidNodeError(f"Children of {class_name} must be a list, got {type(value).__name__}")
    return [node_from_json(child) for child in value]


def node_from_json(data: Dict[str, Any]) -> Node:
    """
    Deserialize a JSON document tree into nodes.

    Accepts fully qualified classes ("org.accordproject.commonmark.Text") and
    bare tags ("Text"). Unknown classes become UnknownNode.

    Args:
        data: JSON record with a '$class' discriminator

    Returns:
        Root node of the deserialized tree

    Raises:
        InvalidNodeError: If a record is not a dict or has no '$class'
    """
    if not isinstance(data, dict) or "$class" not in data:
        raise InvalidNodeError(f"Document node must be a record with a '$class' field: {data!r}")

    class_name = data["$class"]
    tag = class_name.rsplit(".", 1)[-1]
    tag = TAG_ALIASES.get(tag, tag)
    nodes = _children_from_json(data.get("nodes", []), class_name)

    cls = NODE_TYPES.get(tag)
    if cls is None:
        attributes = {k: v for k, v in data.items() if k not in ("$class", "nodes")}
        return UnknownNode(nodes=nodes, class_name_raw=class_name, attributes=attributes)

    kwargs: Dict[str, Any] = {"nodes": nodes}
    for f in fields(cls):
        if f.name == "nodes":
            continue
        key = _to_camel(f.name)
        if key not in data:
            continue
        value = data[key]
        if f.name in cls.NODE_LIST_FIELDS:
            value = _children_from_json(value, class_name)
        kwargs[f.name] = value

    return cls(**kwargs)


def node_to_json(node: Node) -> Dict[str, Any]:
    """Serialize a node tree to its JSON record form."""
    return node.to_json()


def as_node(tree: Any) -> Node:
    """Accept either a node tree or its JSON form."""
    if isinstance(tree, Node):
        return tree
    return node_from_json(tree)
