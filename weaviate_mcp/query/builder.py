"""
Hybrid query construction.

Every query the server sends goes through ``build_query``: plain hybrid
queries, generative queries and both reference traversals. The builder
decides whether Weaviate can run a hybrid (vector + keyword) search for the
collection and renders the GraphQL ``Get`` request.
"""

import json
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from weaviate_mcp.exceptions import ValidationError
from weaviate_mcp.graph.models import ClassSchema

logger = logging.getLogger(__name__)

HYBRID_SKIPPED_TEMPLATE = (
    "WARNING: hybrid search skipped for collection '{collection}': no vectorizer "
    "or module configuration is declared, results come from keyword/property "
    "retrieval only."
)
GRAPHQL_NAME = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


def dedupe_fields(fields: Iterable[str]) -> list[str]:
    """Drop repeated field names, keeping the order of first occurrence."""
    return list(dict.fromkeys(fields))


def check_field_names(names: Iterable[str]) -> None:
    """Reject caller-supplied names that are not plain GraphQL names.

    Raises:
        ValidationError: On the first name that is not an identifier.
    """
    for name in names:
        if not GRAPHQL_NAME.fullmatch(name):
            raise ValidationError(
                f"Invalid field name '{name}': only letters, digits and "
                "underscores are allowed, and it cannot start with a digit"
            )


def is_hybrid_eligible(class_schema: ClassSchema | None) -> bool:
    """Whether Weaviate can run a hybrid search over this class.

    True when the class declares a vectorizer other than ``none`` or any
    module configuration. An unknown schema is never eligible.
    """
    if class_schema is None:
        return False
    vectorizer = (class_schema.vectorizer or "").strip()
    if vectorizer and vectorizer.lower() != "none":
        return True
    return bool(class_schema.module_config)


def reference_projection(
    property_name: str, target_classes: Sequence[str], fields: Sequence[str]
) -> str:
    """Field selection for a reference property.

    One ``... on Class { fields }`` fragment per possible target class. With
    no known targets the caller's fields are requested directly on the
    reference block; what Weaviate returns in that case is not defined, so
    consumers must render it raw.
    """
    selected = " ".join(dedupe_fields(fields))
    if not target_classes:
        return f"{property_name} {{ {selected} }}"
    fragments = " ".join(
        f"... on {target} {{ {selected} }}" for target in dedupe_fields(target_classes)
    )
    return f"{property_name} {{ {fragments} }}"


def _graphql_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class QuerySpec:
    """A fully built ``Get`` query for one collection."""

    collection: str
    query: str
    fields: list[str]
    limit: int | None = None
    hybrid_eligible: bool = False
    generative_task: str | None = None
    generative_properties: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        """Report lines the caller must see alongside the results."""
        if self.hybrid_eligible:
            return []
        return [HYBRID_SKIPPED_TEMPLATE.format(collection=self.collection)]

    def _arguments(self) -> str:
        args = []
        if self.hybrid_eligible:
            args.append(f"hybrid: {{query: {_graphql_string(self.query)}}}")
        if self.limit is not None:
            args.append(f"limit: {self.limit}")
        return f"({' '.join(args)})" if args else ""

    def _selection(self) -> str:
        selection = list(self.fields)
        if self.generative_task is not None:
            properties = json.dumps(self.generative_properties, ensure_ascii=False)
            selection.append(
                "_additional { generate(groupedResult: {task: "
                f"{_graphql_string(self.generative_task)}, properties: {properties}"
                "}) { groupedResult error } }"
            )
        return " ".join(selection)

    def to_graphql(self) -> str:
        """Render as a Weaviate GraphQL query document."""
        return (
            f"{{ Get {{ {self.collection}{self._arguments()} "
            f"{{ {self._selection()} }} }} }}"
        )


def build_query(
    collection: str,
    query: str,
    fields: Sequence[str],
    limit: int | None,
    class_schema: ClassSchema | None,
    generative_task: str | None = None,
) -> QuerySpec:
    """Build the query for ``collection``.

    Args:
        collection: Target class name
        query: Raw free-text query, passed to the hybrid clause
        fields: Field selections, duplicates removed in order
        limit: Applied only when positive, otherwise Weaviate's default applies
        class_schema: Class definition used for hybrid eligibility, or None
        generative_task: Grouped generative task attached to the query

    Returns:
        QuerySpec ready to be rendered with ``to_graphql``
    """
    selected = dedupe_fields(fields)
    eligible = is_hybrid_eligible(class_schema)
    if not eligible:
        logger.warning(
            "Hybrid search skipped for collection %s: no vectorizer configured",
            collection,
        )

    spec = QuerySpec(
        collection=collection,
        query=query,
        fields=selected,
        limit=limit if limit is not None and limit > 0 else None,
        hybrid_eligible=eligible,
    )
    if generative_task is not None:
        spec.generative_task = generative_task
        spec.generative_properties = [f for f in selected if "{" not in f]
    logger.debug("Built query: %s", spec.to_graphql())
    return spec
