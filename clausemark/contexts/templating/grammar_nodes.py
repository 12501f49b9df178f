"""
Template Grammar Nodes

Declarative grammar tree describing a template: literal text chunks
interleaved with typed variable slots and structural blocks. JSON form:

    {"$class": "org.accordproject.ciceromark.template.Variable",
     "name": "seller", "type": "String"}

Bare tags ("$class": "Variable") are accepted on input.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Type

from clausemark.contexts.templating.exceptions import InvalidGrammarError

TEMPLATE_NS = "org.accordproject.ciceromark.template"

GRAMMAR_TYPES: Dict[str, Type["GrammarNode"]] = {}


def register_grammar_node(cls: Type["GrammarNode"]) -> Type["GrammarNode"]:
    GRAMMAR_TYPES[cls.TAG] = cls
    return cls


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class GrammarNode:
    """Base class for grammar nodes; blocks keep their children in 'nodes'."""

    nodes: List["GrammarNode"] = field(default_factory=list)

    TAG: ClassVar[str] = "GrammarNode"

    @property
    def tag(self) -> str:
        return self.TAG

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"$class": f"{TEMPLATE_NS}.{self.TAG}"}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "nodes" or value is None:
                continue
            data[_to_camel(f.name)] = value
        if self.nodes:
            data["nodes"] = [child.to_json() for child in self.nodes]
        return data


@register_grammar_node
@dataclass
class TextChunk(GrammarNode):
    """Literal connective text; matches exactly `value` and binds nothing."""

    value: str = ""

    TAG: ClassVar[str] = "TextChunk"


@register_grammar_node
@dataclass
class Variable(GrammarNode):
    """
    Typed variable slot.

    Attributes:
        name: Field name the bound value is stored under
        type: Declared type (Integer, Double, String, DateTime, Enum)
        value: Allowed literals, for Enum variables only
    """

    name: Optional[str] = None
    type: Optional[str] = None
    value: Optional[List[str]] = None

    TAG: ClassVar[str] = "Variable"


@register_grammar_node
@dataclass
class ConditionalBlock(GrammarNode):
    """Either `when_true` or `when_false` literal text; binds a Boolean."""

    name: Optional[str] = None
    when_true: str = ""
    when_false: str = ""

    TAG: ClassVar[str] = "ConditionalBlock"


@register_grammar_node
@dataclass
class UnorderedListBlock(GrammarNode):
    name: Optional[str] = None

    TAG: ClassVar[str] = "UnorderedListBlock"


@register_grammar_node
@dataclass
class ClauseBlock(GrammarNode):
    """
    Clause; compiles to a compound record tagged with `type`.

    Inside a ContractBlock the clause text must be bracketed by the clause
    boundary markers.
    """

    name: Optional[str] = None
    type: Optional[str] = None

    TAG: ClassVar[str] = "ClauseBlock"


@register_grammar_node
@dataclass
class WithBlock(GrammarNode):
    name: Optional[str] = None
    type: Optional[str] = None

    TAG: ClassVar[str] = "WithBlock"


@register_grammar_node
@dataclass
class ContractBlock(GrammarNode):
    name: Optional[str] = None
    type: Optional[str] = None

    TAG: ClassVar[str] = "ContractBlock"


@dataclass
class UnknownGrammarNode(GrammarNode):
    """Grammar record whose '$class' is not part of the catalog; cannot be compiled."""

    class_name_raw: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        return self.class_name_raw

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"$class": self.class_name_raw, **self.attributes}
        if self.nodes:
            data["nodes"] = [child.to_json() for child in self.nodes]
        return data


def grammar_from_json(data: Dict[str, Any]) -> GrammarNode:
    """
    Deserialize a JSON grammar tree.

    Args:
        data: JSON record with a '$class' discriminator

    Returns:
        Root grammar node

    Raises:
        InvalidGrammarError: If a record is not a dict or has no '$class'
    """
    if not isinstance(data, dict) or "$class" not in data:
        raise InvalidGrammarError(f"Grammar node must be a record with a '$class' field: {data!r}")

    class_name = data["$class"]
    children = data.get("nodes", [])
    if not isinstance(children, list):
        raise InvalidGrammarError(f"Children of {class_name} must be a list")
    nodes = [grammar_from_json(child) for child in children]

    cls = GRAMMAR_TYPES.get(class_name.rsplit(".", 1)[-1])
    if cls is None:
        attributes = {k: v for k, v in data.items() if k not in ("$class", "nodes")}
        return UnknownGrammarNode(nodes=nodes, class_name_raw=class_name, attributes=attributes)

    kwargs: Dict[str, Any] = {"nodes": nodes}
    for f in fields(cls):
        key = _to_camel(f.name)
        if f.name != "nodes" and key in data:
            kwargs[f.name] = data[key]

    return cls(**kwargs)


def as_grammar(grammar: Any) -> Any:
    """
    Accept grammar nodes or their JSON form.

    A list stays a list (of grammar nodes); it compiles as a sequence.
    """
    if isinstance(grammar, list):
        return [as_grammar(item) for item in grammar]
    if isinstance(grammar, GrammarNode):
        return grammar
    return grammar_from_json(grammar)
