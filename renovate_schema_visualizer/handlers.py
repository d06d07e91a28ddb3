from __future__ import annotations

import json
import logging
import os
from typing import Any, List, Optional, Tuple

import gradio as gr

from .config import DEFAULT_MAX_DEPTH
from .descriptions import annotate
from .filtering import count_text, filter_records, record_to_row
from .flattening import flatten
from .io_utils import (
    fetch_json,
    load_sample,
    mode_for_name,
    parse_document,
    read_json_content,
    read_text_content,
)
from .schema_utils import (
    extract_schema_properties,
    filter_schema_properties,
    is_json_schema,
    sort_schema_properties,
    summarize_schema,
)
from .sorting import sort_by_path

logger = logging.getLogger(__name__)

ASCENDING = "asc"
DESCENDING = "desc"

EXAMPLES = {
    "JSON5 Example": "json5-example.json5",
    "Renovate Config Example": "renovate-config.json5",
}


def _is_descending(direction: Optional[str]) -> bool:
    return (direction or ASCENDING).lower().startswith(DESCENDING)


def sort_button_label(direction: Optional[str]) -> str:
    return "Property ▼" if _is_descending(direction) else "Property ▲"


def build_config_rows(
    document: Any,
    reference_schema: Any = None,
    search_term: str = "",
    direction: str = ASCENDING,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[List[List[Any]], str]:
    """Flatten, describe, sort and filter a config document into table rows."""
    if document is None:
        return [], count_text(0, 0)

    records = annotate(flatten(document, max_depth=max_depth), reference_schema)
    ordered = sort_by_path(records, descending=_is_descending(direction))
    shown = filter_records(ordered, search_term)
    return [record_to_row(r) for r in shown], count_text(len(shown), len(records))


def build_schema_rows(
    schema: Any,
    search_term: str = "",
    sort_field: str = "name",
    direction: str = ASCENDING,
) -> Tuple[List[List[Any]], str]:
    if not isinstance(schema, dict):
        return [], count_text(0, 0)

    props = extract_schema_properties(schema)
    shown = filter_schema_properties(props, search_term)
    shown = sort_schema_properties(shown, sort_field or "name", _is_descending(direction))
    return [p.to_row() for p in shown], count_text(len(shown), len(props))


def schema_link_markdown(schema: Any) -> str:
    if isinstance(schema, dict) and isinstance(schema.get("$schema"), str) and schema["$schema"]:
        return f"Schema: [{schema['$schema']}]({schema['$schema']})"
    return ""


def handle_input_change(text: str, mode: str):
    """Reparse the editor text and pick the view that fits the document."""
    try:
        document = parse_document(text, mode)
    except ValueError as e:
        logger.warning("Could not parse input as %s: %s", mode, e)
        return None, f"Invalid JSON/JSON5: {str(e)}", gr.update(visible=False), gr.update(visible=False)

    if document is None:
        message = "Paste a JSON or JSON5 document to see the visualization."
        return None, message, gr.update(visible=False), gr.update(visible=False)

    schema_mode = is_json_schema(document)
    message = "Detected a JSON Schema." if schema_mode else "Detected a configuration document."
    return document, message, gr.update(visible=not schema_mode), gr.update(visible=schema_mode)


def render_config_view(document, reference_schema, search_term, direction, max_depth=DEFAULT_MAX_DEPTH):
    if document is None or is_json_schema(document):
        return [], ""
    return build_config_rows(document, reference_schema, search_term, direction, max_depth)


def render_schema_view(document, search_term, sort_field, direction):
    if not is_json_schema(document):
        return [], "", ""
    rows, counts = build_schema_rows(document, search_term, sort_field, direction)
    return rows, counts, schema_link_markdown(document)


def render_schema_summary(document) -> str:
    if not is_json_schema(document):
        return ""
    return summarize_schema(document) or "No top-level metadata."


def toggle_sort_direction(direction: str):
    new_direction = ASCENDING if _is_descending(direction) else DESCENDING
    return new_direction, gr.update(value=sort_button_label(new_direction))


def load_example_handler(label: str):
    """Put a bundled example into the editor; examples are JSON5."""
    name = EXAMPLES.get(label)
    if name is None:
        return gr.update(), gr.update(), f"Unknown example: {label}"
    try:
        text = load_sample(name)
    except ValueError as e:
        logger.warning("Failed to load example %s: %s", name, e)
        return gr.update(), gr.update(), f"Failed to load {label}: {str(e)}"
    return text, "JSON5", f"Loaded {label}."


def fetch_schema_example_handler():
    """Fetch the Renovate schema and put it, pretty-printed, into the editor."""
    try:
        data = fetch_json()
    except ValueError as e:
        return gr.update(), gr.update(), str(e)
    return json.dumps(data, indent=2, ensure_ascii=False), "JSON", "Loaded Renovate schema."


def handle_document_upload(file_obj, mode: str):
    if file_obj is None:
        return gr.update(), gr.update(), "No file uploaded."
    try:
        text, name = read_text_content(file_obj)
    except (ValueError, OSError) as e:
        logger.warning("Uploaded document could not be read: %s", e)
        return gr.update(), gr.update(), f"Error reading file: {str(e)}"
    return text, mode_for_name(name, mode), f"Loaded {os.path.basename(name) or 'file'}."


def handle_reference_schema_upload(file_obj):
    if file_obj is None:
        return None, "No reference schema loaded."
    try:
        schema = read_json_content(file_obj)
    except (ValueError, OSError) as e:
        logger.warning("Reference schema could not be read: %s", e)
        return None, f"Error parsing reference schema: {str(e)}"
    return _reference_schema_result(schema)


def fetch_reference_schema_handler():
    try:
        schema = fetch_json()
    except ValueError as e:
        return None, str(e)
    return _reference_schema_result(schema)


def _reference_schema_result(schema):
    if not isinstance(schema, dict) or not isinstance(schema.get("properties"), dict):
        return None, "Reference schema has no top-level properties; descriptions disabled."
    count = len(schema["properties"])
    logger.info("Reference schema loaded with %d top-level properties", count)
    return schema, f"Reference schema loaded ({count} top-level properties)."


def clear_reference_schema():
    return None, "No reference schema loaded."
