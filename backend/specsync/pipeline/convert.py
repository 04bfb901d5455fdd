"""
specsync — JSON to YAML conversion.

The OpenAPI documents are opaque here: parse, re-serialize, done.
Key order from the JSON source is preserved.
"""

from __future__ import annotations

import json

import yaml

from specsync.errors import ConversionError

_Dumper = getattr(yaml, "CSafeDumper", yaml.SafeDumper)


def json_to_yaml(content: str, source: str = "<string>") -> str:
    """Convert a JSON document to YAML text. Raises ConversionError on bad JSON."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConversionError(source, str(exc)) from exc

    return yaml.dump(
        data,
        Dumper=_Dumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def converted_path_for(path: str) -> str:
    """`openapi/spec3.json` -> `openapi/spec3.yaml`."""
    if path.endswith(".json"):
        return path[: -len(".json")] + ".yaml"
    return path + ".yaml"
