from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Optional

COMBINATORS = ("oneOf", "anyOf", "allOf")
SCHEMA_TABLE_HEADERS = ["Property", "Path", "Type", "Description", "Default", "Required", "Deprecated"]


def is_json_schema(obj: Any) -> bool:
    """Guess whether a parsed document is a JSON Schema rather than a config."""
    if not isinstance(obj, dict) or not obj:
        return False
    return bool(
        obj.get('$schema')
        or obj.get('properties')
        or obj.get('type') == 'object'
        or obj.get('definitions')
        or obj.get('$defs')
    )


def _combinator(node: Dict[str, Any]) -> Optional[str]:
    for name in COMBINATORS:
        if node.get(name):
            return name
    return None


def schema_type_label(prop: Any) -> str:
    """Short type label for a schema node, e.g. 'string | null' or 'array<string>'."""
    if not isinstance(prop, dict):
        return 'object'
    prop_type = prop.get('type')
    if isinstance(prop_type, list):
        return ' | '.join(str(t) for t in prop_type)
    items = prop.get('items')
    if prop_type == 'array' and items:
        if isinstance(items, dict) and items.get('type'):
            return f"array<{schema_type_label(items)}>"
        return 'array'
    if prop.get('enum'):
        return f"enum ({len(prop['enum'])} values)"
    if prop.get('oneOf'):
        return f"oneOf ({len(prop['oneOf'])} options)"
    if prop.get('anyOf'):
        return f"anyOf ({len(prop['anyOf'])} options)"
    if prop.get('allOf'):
        return f"allOf ({len(prop['allOf'])} schemas)"
    return prop_type or 'object'


def format_schema_value(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@dataclass
class SchemaProperty:
    name: str
    path: str
    type: str
    description: str = ''
    default: Any = None
    enum: Optional[List[Any]] = None
    required: bool = False
    deprecated: bool = False

    def to_row(self) -> List[Any]:
        return [
            self.name,
            self.path,
            self.type,
            self.description,
            format_schema_value(self.default),
            self.required,
            self.deprecated,
        ]


SORT_FIELDS = tuple(f.name for f in fields(SchemaProperty))


def extract_schema_properties(schema: Any) -> List[SchemaProperty]:
    """Collect every property of a schema as a table row.

    Recurses into nested `type: object` properties and into the
    oneOf/anyOf/allOf sub-schemas that declare properties, the latter under
    `<path>[<option index>]`.
    """
    result: List[SchemaProperty] = []
    if not isinstance(schema, dict):
        return result

    def walk(node: Dict[str, Any], parent_path: str, required: Iterable[str]):
        properties = node.get('properties')
        if not isinstance(properties, dict):
            return
        required = set(required or [])

        for key, value in properties.items():
            path = f"{parent_path}.{key}" if parent_path else key
            if not isinstance(value, dict):
                value = {}
            description = value.get('description')
            result.append(SchemaProperty(
                name=key,
                path=path,
                type=schema_type_label(value),
                description=description if isinstance(description, str) else '',
                default=value.get('default'),
                enum=value.get('enum'),
                required=key in required,
                deprecated=bool(value.get('deprecated', False)),
            ))

            if value.get('type') == 'object' and value.get('properties'):
                walk(value, path, value.get('required') or [])

            combinator = _combinator(value)
            if combinator and isinstance(value[combinator], list):
                for index, sub_schema in enumerate(value[combinator]):
                    if isinstance(sub_schema, dict) and sub_schema.get('properties'):
                        walk(sub_schema, f"{path}[{index}]", sub_schema.get('required') or [])

    walk(schema, '', schema.get('required') or [])
    return result


def filter_schema_properties(props: Iterable[SchemaProperty], term: str) -> List[SchemaProperty]:
    term = (term or '').strip().lower()
    if not term:
        return list(props)
    return [
        p for p in props
        if term in p.name.lower()
        or term in p.path.lower()
        or term in p.description.lower()
        or term in p.type.lower()
    ]


def _sort_key(prop: SchemaProperty, field_name: str):
    value = getattr(prop, field_name)
    if field_name in ('default', 'enum'):
        return json.dumps(value, ensure_ascii=False) if value else ''
    if value is None:
        return ''
    return value


def sort_schema_properties(
    props: Iterable[SchemaProperty],
    field_name: str = 'name',
    descending: bool = False,
) -> List[SchemaProperty]:
    if field_name not in SORT_FIELDS:
        raise ValueError(f"Cannot sort schema properties by {field_name!r}.")
    return sorted(props, key=lambda p: _sort_key(p, field_name), reverse=descending)


def build_schema_tree(schema: Any, label: str = '') -> Dict[str, Any]:
    """Convert a schema into nested nodes for the tree view.

    Each node has: label, kind ('object', 'array', a combinator name or
    'leaf'), type, description and children. Leaves also carry enum and
    default when the schema declares them.
    """
    if not isinstance(schema, dict):
        schema = {}

    schema_type = schema.get('type')
    if isinstance(schema_type, list):
        schema_type = ' | '.join(str(t) for t in schema_type)

    node: Dict[str, Any] = {
        'label': label,
        'kind': 'leaf',
        'type': schema_type or '',
        'description': schema['description'] if isinstance(schema.get('description'), str) else '',
        'children': [],
    }

    combinator = _combinator(schema)
    if isinstance(schema.get('properties'), dict):
        node['kind'] = 'object'
        node['children'] = [build_schema_tree(value, key) for key, value in schema['properties'].items()]
    elif schema.get('items') and schema.get('type') == 'array':
        node['kind'] = 'array'
        node['type'] = 'array'
        node['children'] = [build_schema_tree(schema['items'], 'items')]
    elif combinator and isinstance(schema[combinator], list):
        node['kind'] = combinator
        node['type'] = combinator
        for index, option in enumerate(schema[combinator]):
            option_label = f"Option {index + 1}"
            if isinstance(option, dict) and option.get('title'):
                option_label += f": {option['title']}"
            node['children'].append(build_schema_tree(option, option_label))
    else:
        if 'enum' in schema:
            node['enum'] = schema['enum']
        if 'default' in schema:
            node['default'] = schema['default']

    return node


def summarize_schema(schema: Any) -> str:
    """Markdown summary of a schema's top-level metadata."""
    if not isinstance(schema, dict):
        return ''

    sections: List[str] = []
    if schema.get('title'):
        sections.append(f"### Title\n{schema['title']}")
    if schema.get('description'):
        sections.append(f"### Description\n{schema['description']}")
    if schema.get('type'):
        schema_type = schema['type']
        if isinstance(schema_type, list):
            schema_type = ', '.join(str(t) for t in schema_type)
        sections.append(f"### Type\n{schema_type}")
    if schema.get('$schema'):
        sections.append(f"### Schema\n{schema['$schema']}")
    required = schema.get('required')
    if isinstance(required, list) and required:
        sections.append("### Required Properties\n" + "\n".join(f"- {prop}" for prop in required))
    return "\n\n".join(sections)
