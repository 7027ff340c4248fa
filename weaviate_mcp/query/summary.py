"""
Plain-text reports for traversal results.

The report is written for an LLM caller: it lists what matched, what each
match links to, which schema fields were left out of the query and which
one-hop links could be followed next. ``summarize`` is a pure function of
its input, so identical results always produce identical text.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from weaviate_mcp.graph.models import IncomingReference, ReferenceEdge
from weaviate_mcp.query.builder import HYBRID_SKIPPED_TEMPLATE

MISSED_FIELDS_CAP = 12
ELLIPSIS = "…"
LABEL_FIELDS = ("name", "title", "label")
SCHEMA_UNKNOWN_WARNING = (
    "WARNING: schema unavailable, missed fields and available links cannot be listed."
)


@dataclass(frozen=True)
class ReferenceGroup:
    """Labels reached through one reference, e.g. ``fluxo: F1``."""

    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class TraversalRow:
    """One matched base object and the labels it links to."""

    label: str
    references: tuple[ReferenceGroup, ...] = ()


@dataclass(frozen=True)
class TargetFields:
    """Unrequested fields on a class reached through ``via``."""

    class_name: str
    via: str
    missed: tuple[str, ...] = ()


@dataclass(frozen=True)
class TraversalResult:
    """Everything ``summarize`` needs to render a report."""

    collection: str
    query: str
    limit: int | None
    rows: tuple[TraversalRow, ...] = ()
    hybrid_eligible: bool = False
    schema_known: bool = True
    collections: tuple[str, ...] = ()
    missed_fields: tuple[str, ...] = ()
    target_fields: tuple[TargetFields, ...] = ()
    outgoing: tuple[ReferenceEdge, ...] = ()
    incoming: tuple[IncomingReference, ...] = ()
    notes: tuple[str, ...] = ()


def preview_fields(names: Sequence[str], cap: int = MISSED_FIELDS_CAP) -> str:
    """Comma-separated preview of at most ``cap`` names."""
    if not names:
        return "none"
    shown = ", ".join(names[:cap])
    if len(names) > cap:
        return f"{shown}, {ELLIPSIS}"
    return shown


def entity_label(obj: Any, preferred: Sequence[str] = ()) -> str:
    """Human label for a result object.

    Tries the requested fields first, then the usual label fields. Objects
    without any of them are dumped as JSON so nothing is silently dropped.
    """
    if not isinstance(obj, dict):
        return str(obj)
    for key in (*preferred, *LABEL_FIELDS):
        value = obj.get(key)
        if value is None or isinstance(value, dict | list) or value == "":
            continue
        return str(value)
    return json.dumps(obj, sort_keys=True, ensure_ascii=False)


def missed_fields(declared: Sequence[str], requested: Sequence[str]) -> tuple[str, ...]:
    """Declared properties not in ``requested``, in declaration order."""
    requested_set = set(requested)
    return tuple(name for name in declared if name not in requested_set)


def _format_row(row: TraversalRow) -> str:
    if not row.references:
        return f"- {row.label}: none"
    parts = [
        f"{group.name}: {', '.join(group.values) if group.values else 'none'}"
        for group in row.references
    ]
    return f"- {row.label}: {'; '.join(parts)}"


def summarize(result: TraversalResult) -> str:
    """Render a traversal result as a multi-line report."""
    limit = result.limit if result.limit and result.limit > 0 else "default"
    lines = [
        f'Query "{result.query}" on collection {result.collection} (limit: {limit})'
    ]

    if not result.hybrid_eligible:
        lines.append(HYBRID_SKIPPED_TEMPLATE.format(collection=result.collection))
    if not result.schema_known:
        lines.append(SCHEMA_UNKNOWN_WARNING)

    if result.collections:
        lines.append(f"Collections: {', '.join(result.collections)}")
    lines.extend(result.notes)

    lines.append("")
    if not result.rows:
        lines.append("No matches found.")
    else:
        lines.append(f"Matches ({len(result.rows)}):")
        lines.extend(_format_row(row) for row in result.rows)

    lines.append("")
    if result.schema_known:
        lines.append(
            f"Fields not requested on {result.collection}: "
            f"{preview_fields(result.missed_fields)}"
        )
        for target in result.target_fields:
            lines.append(
                f"Fields not requested on {target.class_name} (via {target.via}): "
                f"{preview_fields(target.missed)}"
            )
    else:
        lines.append(f"Fields not requested on {result.collection}: unknown")

    lines.append("")
    lines.append(f"Links from {result.collection}:")
    if not result.schema_known:
        lines.append("- unknown")
    else:
        links = [
            f"- {edge.property_name} -> {target}"
            for edge in result.outgoing
            for target in edge.to_classes
        ]
        lines.extend(links or ["- none"])
    lines.append(f"Links to {result.collection}:")
    if not result.schema_known:
        lines.append("- unknown")
    else:
        links = [
            f"- {ref.from_class}.{ref.property_name} -> {result.collection}"
            for ref in result.incoming
        ]
        lines.extend(links or ["- none"])

    return "\n".join(lines)
