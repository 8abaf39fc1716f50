"""Load resolved dependency graphs from YAML/JSON documents.

Every scalar is read as a string, so unquoted versions such as 1.10 keep
their exact text. Expected format:

    configuration: compileClasspath
    nodes:
      - module: "com.google.guava:guava:23.0"
      - {group: org.slf4j, name: slf4j-api, version: 1.7.25}
      - project: ":lib"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from core.errors import GraphFormatError
from core.models import (
    NO_LOCK,
    ComponentId,
    GraphNode,
    LockingState,
    ModuleComponentId,
    ProjectComponentId,
    ResolvedGraph,
    RootGraphNode,
)


def parse_module_notation(notation: str) -> ModuleComponentId:
    """Parse ``group:name:version`` into a ModuleComponentId."""
    parts = [p.strip() for p in str(notation).split(":")]
    if len(parts) != 3 or not all(parts):
        raise GraphFormatError(f"Invalid module notation {notation!r}, expected 'group:name:version'")
    return ModuleComponentId(*parts)


def _parse_component(raw: Any, index: int) -> ComponentId:
    """Parse one node entry: a notation string or a mapping."""
    if isinstance(raw, str):
        return parse_module_notation(raw)
    if not isinstance(raw, dict):
        raise GraphFormatError(f"Node {index}: expected a string or mapping, got {type(raw).__name__}")

    if "project" in raw:
        return ProjectComponentId(str(raw["project"]))
    if "module" in raw:
        return parse_module_notation(raw["module"])
    try:
        return ModuleComponentId(
            group=str(raw["group"]),
            name=str(raw["name"]),
            version=str(raw["version"]),
        )
    except KeyError as exc:
        raise GraphFormatError(f"Node {index}: missing field {exc.args[0]!r}") from exc


def load_graph(data: dict[str, Any], locking_state: LockingState = NO_LOCK) -> ResolvedGraph:
    """Create a ResolvedGraph from a parsed graph document."""
    if not isinstance(data, dict):
        raise GraphFormatError("Graph document must be a mapping")
    configuration = data.get("configuration")
    if not configuration:
        raise GraphFormatError("Graph document has no 'configuration'")

    raw_nodes = data.get("nodes") or []
    if not isinstance(raw_nodes, list):
        raise GraphFormatError("'nodes' must be a list")
    nodes = [GraphNode(_parse_component(raw, i)) for i, raw in enumerate(raw_nodes)]
    return ResolvedGraph(
        root=RootGraphNode(configuration=str(configuration), locking_state=locking_state),
        nodes=nodes,
    )


def read_graph_document(filepath: Path | str) -> dict[str, Any]:
    path = Path(filepath)
    if not path.exists():
        raise GraphFormatError(f"Graph file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise GraphFormatError(f"Cannot parse graph file {path}: {exc}") from exc
    if data is None:
        raise GraphFormatError(f"Graph file is empty: {path}")
    return data


def load_graph_file(filepath: Path | str, locking_state: LockingState = NO_LOCK) -> ResolvedGraph:
    """Read and parse a graph document file."""
    return load_graph(read_graph_document(filepath), locking_state)
