"""Typed view of the Weaviate class/property schema.

Weaviate marks a cross-reference by putting a class name in a property's
``dataType`` list (``["Fluxo"]``) where scalar properties carry primitive
type names (``["text"]``, ``["int[]"]``). ``is_reference_data_type`` is the
only place that rule is applied.
"""

from dataclasses import dataclass, field
from typing import Any


def is_reference_data_type(data_type: str) -> bool:
    """Return True if a dataType entry names another class."""
    return bool(data_type) and data_type[0].isalpha() and data_type[0].isupper()


@dataclass(frozen=True)
class PropertySchema:
    """A single class property.

    Attributes:
        name: Property name
        data_type: Raw dataType entries as declared in Weaviate
    """

    name: str
    data_type: tuple[str, ...] = ()

    @property
    def reference_targets(self) -> tuple[str, ...]:
        """Class names this property points at (empty for scalars)."""
        return tuple(dt for dt in self.data_type if is_reference_data_type(dt))

    @property
    def is_reference(self) -> bool:
        return bool(self.reference_targets)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PropertySchema":
        return cls(
            name=data.get("name", ""),
            data_type=tuple(data.get("dataType") or ()),
        )


@dataclass(frozen=True)
class ClassSchema:
    """A Weaviate class (collection) definition.

    Attributes:
        name: Class name, unique within the schema
        properties: Properties in declaration order
        vectorizer: Vectorizer module name, ``None`` when not declared
        module_config: Per-module configuration, treated as opaque
        description: Optional class description
    """

    name: str
    properties: tuple[PropertySchema, ...] = ()
    vectorizer: str | None = None
    module_config: dict[str, Any] = field(default_factory=dict, compare=False)
    description: str | None = None

    @property
    def property_names(self) -> list[str]:
        return [prop.name for prop in self.properties]

    @property
    def scalar_property_names(self) -> list[str]:
        """Properties that can be selected without a sub-selection."""
        return [prop.name for prop in self.properties if not prop.is_reference]

    def get_property(self, name: str) -> PropertySchema | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassSchema":
        """Build from a ``/v1/schema`` class entry."""
        return cls(
            name=data.get("class", ""),
            properties=tuple(
                PropertySchema.from_dict(prop) for prop in data.get("properties") or ()
            ),
            vectorizer=data.get("vectorizer"),
            module_config=dict(data.get("moduleConfig") or {}),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class ReferenceEdge:
    """An outgoing reference property and the classes it may point at."""

    from_class: str
    property_name: str
    to_classes: tuple[str, ...]


@dataclass(frozen=True)
class IncomingReference:
    """A property on another class that points at the class in question."""

    from_class: str
    property_name: str
