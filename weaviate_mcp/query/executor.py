"""
Query execution and reference traversal.

``QueryExecutor`` runs every query the tools expose. The plain and
generative queries hand back Weaviate's response untouched; the two
traversals flatten their rows into a ``TraversalResult`` and return the
plain-text report built by ``summarize``.
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from weaviate_mcp.exceptions import (
    PropertyNotAllowedError,
    QueryFailedError,
    ReferenceSelectionError,
    StoreError,
    UpstreamUnavailableError,
)
from weaviate_mcp.graph.models import ClassSchema
from weaviate_mcp.graph.references import (
    incoming_refs,
    outgoing_refs,
    targets_for_property,
)
from weaviate_mcp.graph.schema import SchemaCache, SchemaSnapshot
from weaviate_mcp.query.builder import (
    QuerySpec,
    build_query,
    check_field_names,
    dedupe_fields,
    reference_projection,
)
from weaviate_mcp.query.summary import (
    ReferenceGroup,
    TargetFields,
    TraversalResult,
    TraversalRow,
    entity_label,
    missed_fields,
    summarize,
)
from weaviate_mcp.settings import Settings
from weaviate_mcp.store.client import WeaviateClient

logger = logging.getLogger(__name__)

GENERATIVE_TASK_TEMPLATE = "Answer briefly: {query}"


@dataclass(frozen=True)
class OriginShape:
    """Property and class names followed by the origin traversal.

    base --link_property--> link_class.label_field
    base --via_property--> via_class --deep_property--> deep_class.label_field
    """

    label_field: str = "name"
    link_property: str = "belongsToFluxo"
    link_class: str = "Fluxo"
    link_label: str = "fluxo"
    via_property: str = "hasFicheiros"
    via_class: str = "Ficheiro"
    deep_property: str = "hasEntidades"
    deep_class: str = "Entidade"
    deep_label: str = "entidades"


def extract_rows(body: dict[str, Any], collection: str) -> list[dict[str, Any]]:
    """Objects returned for ``collection`` in a ``Get`` response."""
    data = body.get("data") or {}
    rows = (data.get("Get") or {}).get(collection) or []
    return [row for row in rows if isinstance(row, dict)]


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class QueryExecutor:
    """Runs queries and traversals against one Weaviate instance."""

    def __init__(
        self,
        client: WeaviateClient,
        schema_cache: SchemaCache,
        settings: Settings | None = None,
    ):
        self.client = client
        self.schema_cache = schema_cache
        self.settings = settings or Settings()

    async def _class_schema(
        self, collection: str, class_schema: ClassSchema | None
    ) -> ClassSchema | None:
        if class_schema is not None:
            return class_schema
        schema = await self.schema_cache.try_get_schema()
        return schema.get_class(collection) if schema else None

    def _limit(self, limit: int | None) -> int:
        return self.settings.default_limit if limit is None else limit

    async def _execute(self, spec: QuerySpec) -> dict[str, Any]:
        try:
            return await self.client.graphql(spec.to_graphql())
        except (UpstreamUnavailableError, StoreError) as e:
            logger.error("Query on %s failed: %s", spec.collection, e)
            raise QueryFailedError(spec.collection, e) from e

    async def query(
        self,
        collection: str,
        query: str,
        fields: Sequence[str],
        limit: int | None = None,
        class_schema: ClassSchema | None = None,
    ) -> dict[str, Any]:
        """Hybrid query returning the raw Weaviate response.

        A ``warnings`` list is added to the response when the hybrid clause
        had to be dropped.
        """
        limit = self._limit(limit)
        class_schema = await self._class_schema(collection, class_schema)
        spec = build_query(collection, query, fields, limit, class_schema)
        return self._with_warnings(await self._execute(spec), spec)

    async def generate_text(
        self,
        collection: str,
        query: str,
        fields: Sequence[str],
        limit: int | None = None,
        class_schema: ClassSchema | None = None,
    ) -> dict[str, Any]:
        """Grouped generative search over the requested properties."""
        limit = self._limit(limit)
        class_schema = await self._class_schema(collection, class_schema)
        spec = build_query(
            collection,
            query,
            fields,
            limit,
            class_schema,
            generative_task=GENERATIVE_TASK_TEMPLATE.format(query=query),
        )
        return self._with_warnings(await self._execute(spec), spec)

    @staticmethod
    def _with_warnings(body: dict[str, Any], spec: QuerySpec) -> dict[str, Any]:
        if spec.warnings:
            body = {**body, "warnings": spec.warnings}
        return body

    async def query_origin(
        self,
        collection: str,
        query: str,
        limit: int | None = None,
        base_fields: Sequence[str] = ("name",),
        shape: OriginShape = OriginShape(),
    ) -> str:
        """Three-level origin traversal, returned as a text report.

        For every match: ``shape.label_field`` of the first object behind
        ``shape.link_property`` (none when it has no such value) and the
        deduplicated ``shape.label_field`` values reached through
        ``shape.via_property`` then ``shape.deep_property``. Entities without
        the field are skipped.
        """
        limit = self._limit(limit)
        check_field_names(base_fields)
        schema = await self.schema_cache.try_get_schema()
        class_schema = schema.get_class(collection) if schema else None

        followed = {shape.link_property, shape.via_property}
        base = [f for f in dedupe_fields(base_fields) if f not in followed]
        link = reference_projection(
            shape.link_property, [shape.link_class], [shape.label_field]
        )
        deep = reference_projection(
            shape.deep_property, [shape.deep_class], [shape.label_field]
        )
        via = f"{shape.via_property} {{ ... on {shape.via_class} {{ {deep} }} }}"

        spec = build_query(collection, query, [*base, link, via], limit, class_schema)
        rows = extract_rows(await self._execute(spec), collection)
        logger.debug("Origin traversal on %s returned %d rows", collection, len(rows))

        traversal_rows = []
        for row in rows:
            linked = _as_list(row.get(shape.link_property))
            first = _field_value(linked[0], shape.label_field) if linked else None
            deeper = []
            for item in _as_list(row.get(shape.via_property)):
                if not isinstance(item, dict):
                    continue
                for entity in _as_list(item.get(shape.deep_property)):
                    value = _field_value(entity, shape.label_field)
                    if value is not None:
                        deeper.append(value)
            deeper = dedupe_fields(deeper)
            traversal_rows.append(
                TraversalRow(
                    label=entity_label(row, base),
                    references=(
                        ReferenceGroup(shape.link_label, (first,) if first else ()),
                        ReferenceGroup(shape.deep_label, tuple(deeper)),
                    ),
                )
            )

        requested = [*base, shape.link_property, shape.via_property]
        return summarize(
            self._result(
                spec, schema, class_schema, traversal_rows, requested, query, limit
            )
        )

    async def query_with_refs(
        self,
        collection: str,
        ref_property: str,
        query: str,
        limit: int | None = None,
        base_fields: Sequence[str] = ("name",),
        ref_fields: Sequence[str] = ("name",),
    ) -> str:
        """Follow one reference property from each match.

        Target classes come from the schema and get one fragment each. When
        they cannot be resolved the reference block is requested with the
        caller's fields as-is and whatever comes back is rendered raw.
        """
        limit = self._limit(limit)
        check_field_names([*base_fields, ref_property, *ref_fields])
        schema = await self.schema_cache.try_get_schema()
        class_schema = schema.get_class(collection) if schema else None
        targets = targets_for_property(schema, collection, ref_property)
        ref_selected = dedupe_fields(ref_fields)
        if targets:
            self._check_reference_fields(schema, targets, ref_selected)

        base = [f for f in dedupe_fields(base_fields) if f != ref_property]
        projection = reference_projection(ref_property, targets, ref_selected)
        spec = build_query(collection, query, [*base, projection], limit, class_schema)
        rows = extract_rows(await self._execute(spec), collection)
        logger.debug(
            "Traversal %s.%s returned %d rows", collection, ref_property, len(rows)
        )

        traversal_rows = []
        for row in rows:
            referenced = _as_list(row.get(ref_property))
            labels = tuple(
                entity_label(obj, ref_selected) if targets else _raw(obj, ref_selected)
                for obj in referenced
            )
            traversal_rows.append(
                TraversalRow(
                    label=entity_label(row, base),
                    references=(ReferenceGroup(ref_property, labels),),
                )
            )

        if targets:
            note = f"Reference {ref_property} -> {', '.join(targets)}"
        else:
            note = (
                f"Reference {ref_property} -> unknown "
                "(target classes not found in schema, referenced objects shown raw)"
            )

        target_fields = []
        for target in targets:
            target_schema = schema.get_class(target) if schema else None
            if target_schema is None:
                continue
            target_fields.append(
                TargetFields(
                    class_name=target,
                    via=ref_property,
                    missed=missed_fields(target_schema.property_names, ref_selected),
                )
            )

        requested = [*base, ref_property]
        return summarize(
            self._result(
                spec,
                schema,
                class_schema,
                traversal_rows,
                requested,
                query,
                limit,
                target_fields=tuple(target_fields),
                notes=(note,),
            )
        )

    @staticmethod
    def _check_reference_fields(
        schema: SchemaSnapshot,
        targets: Sequence[str],
        fields: Sequence[str],
    ) -> None:
        """Require every field to be a plain property of some target class.

        Raises:
            PropertyNotAllowedError: If no target class declares a field.
            ReferenceSelectionError: If a field is only ever a reference.
        """
        target_schemas = [
            target_schema
            for target_schema in (schema.get_class(target) for target in targets)
            if target_schema is not None
        ]
        if not target_schemas:
            return
        declared = dedupe_fields(
            name for cls in target_schemas for name in cls.property_names
        )
        scalars = dedupe_fields(
            name for cls in target_schemas for name in cls.scalar_property_names
        )
        label = " or ".join(cls.name for cls in target_schemas)
        for name in fields:
            if name in scalars:
                continue
            if name in declared:
                raise ReferenceSelectionError(name, label, scalars)
            raise PropertyNotAllowedError(name, label, declared)

    @staticmethod
    def _result(
        spec: QuerySpec,
        schema: SchemaSnapshot | None,
        class_schema: ClassSchema | None,
        rows: list[TraversalRow],
        requested: Sequence[str],
        query: str,
        limit: int | None,
        target_fields: tuple[TargetFields, ...] = (),
        notes: tuple[str, ...] = (),
    ) -> TraversalResult:
        collection = spec.collection
        declared = class_schema.property_names if class_schema else []
        return TraversalResult(
            collection=collection,
            query=query,
            limit=limit,
            rows=tuple(rows),
            hybrid_eligible=spec.hybrid_eligible,
            schema_known=schema is not None,
            collections=tuple(schema.class_names) if schema else (),
            missed_fields=missed_fields(declared, requested),
            target_fields=target_fields,
            outgoing=tuple(outgoing_refs(schema, collection)),
            incoming=tuple(incoming_refs(schema, collection)),
            notes=notes,
        )


def _field_value(obj: Any, name: str) -> str | None:
    """``obj[name]`` as text, None when it is missing or not a scalar."""
    if not isinstance(obj, dict):
        return None
    value = obj.get(name)
    if value is None or value == "" or isinstance(value, dict | list):
        return None
    return str(value)


def _raw(obj: Any, fields: Sequence[str]) -> str:
    """Label from a requested field, otherwise the object as JSON."""
    if isinstance(obj, dict):
        for key in fields:
            value = obj.get(key)
            if isinstance(value, str | int | float) and value != "":
                return str(value)
        return json.dumps(obj, sort_keys=True, ensure_ascii=False)
    return str(obj)
