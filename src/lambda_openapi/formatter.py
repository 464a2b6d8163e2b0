"""Serialize generated documents to JSON or YAML text."""

import json
from pathlib import Path

import yaml

FORMATS = ("json", "yaml")


class _NoAliasDumper(yaml.SafeDumper):
    # OpenAPI tooling does not cope with YAML anchors, write repeats out in full
    def ignore_aliases(self, data):
        return True


def to_json(doc: dict, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
    return json.dumps(doc, ensure_ascii=False, separators=(",", ":"))


def to_yaml(doc: dict) -> str:
    return yaml.dump(doc, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True, default_flow_style=False)


def render(doc: dict, fmt: str = "json", pretty: bool = True) -> str:
    """Render a document in the given format ('json' or 'yaml')."""
    if fmt == "yaml":
        return to_yaml(doc)
    if fmt == "json":
        return to_json(doc, pretty=pretty)
    raise ValueError(f"Unsupported output format: {fmt!r} (expected one of {', '.join(FORMATS)})")


def write_document(doc: dict, file_path: Path, fmt: str = "json", pretty: bool = True) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(render(doc, fmt, pretty=pretty), encoding="utf-8")
