"""Tests for core/loader.py: graph document parsing."""

from __future__ import annotations

import json

import pytest

from core.errors import GraphFormatError
from core.loader import load_graph, load_graph_file, parse_module_notation
from core.models import NO_LOCK, LockingState, ModuleComponentId, ProjectComponentId


SAMPLE_YAML = """\
configuration: compileClasspath
nodes:
  - module: "com.google.guava:guava:23.0"
  - {group: org.slf4j, name: slf4j-api, version: 1.7.25}
  - project: ":lib"
  - "junit:junit:4.12"
"""


class TestParseModuleNotation:

    def test_valid(self):
        assert parse_module_notation("org:a:1") == ModuleComponentId("org", "a", "1")

    @pytest.mark.parametrize("notation", ["org:a", "org:a:1:2", "org::1", ""])
    def test_invalid(self, notation):
        with pytest.raises(GraphFormatError):
            parse_module_notation(notation)


class TestLoadGraph:

    def test_all_node_forms(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text(SAMPLE_YAML, encoding="utf-8")
        graph = load_graph_file(path)

        assert graph.configuration == "compileClasspath"
        assert graph.root.locking_state == NO_LOCK
        assert [n.component_id for n in graph.nodes] == [
            ModuleComponentId("com.google.guava", "guava", "23.0"),
            ModuleComponentId("org.slf4j", "slf4j-api", "1.7.25"),
            ProjectComponentId(":lib"),
            ModuleComponentId("junit", "junit", "4.12"),
        ]
        assert [n.is_module for n in graph.nodes] == [True, True, False, True]

    def test_json_document(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"configuration": "c", "nodes": ["org:a:1"]}), encoding="utf-8")
        graph = load_graph_file(path)
        assert graph.nodes[0].component_id.display_name == "org:a:1"

    def test_numeric_version_kept_as_string(self):
        graph = load_graph({"configuration": "c", "nodes": [{"group": "g", "name": "n", "version": 2}]})
        assert graph.nodes[0].component_id.version == "2"

    def test_locking_state_attached_to_root(self):
        state = LockingState.locked([])
        graph = load_graph({"configuration": "c"}, state)
        assert graph.root.locking_state is state
        assert graph.nodes == []

    def test_missing_configuration(self):
        with pytest.raises(GraphFormatError):
            load_graph({"nodes": []})

    def test_missing_field(self):
        with pytest.raises(GraphFormatError, match="version"):
            load_graph({"configuration": "c", "nodes": [{"group": "g", "name": "n"}]})

    def test_bad_node_type(self):
        with pytest.raises(GraphFormatError):
            load_graph({"configuration": "c", "nodes": [42]})

    def test_not_a_mapping(self):
        with pytest.raises(GraphFormatError):
            load_graph(["org:a:1"])


class TestLoadGraphFile:

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphFormatError, match="not found"):
            load_graph_file(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(GraphFormatError, match="empty"):
            load_graph_file(path)

    def test_unparsable_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("configuration: [unclosed\n", encoding="utf-8")
        with pytest.raises(GraphFormatError, match="Cannot parse"):
            load_graph_file(path)

    @pytest.mark.parametrize("nodes", ["5", '"org:a:1"', "{group: g}"])
    def test_nodes_must_be_a_list(self, tmp_path, nodes):
        path = tmp_path / "graph.yaml"
        path.write_text(f"configuration: c\nnodes: {nodes}\n", encoding="utf-8")
        with pytest.raises(GraphFormatError, match="'nodes' must be a list"):
            load_graph_file(path)

    @pytest.mark.parametrize("version", ["1.10", "1.0", "2.50", "010"])
    def test_unquoted_version_keeps_exact_text(self, tmp_path, version):
        path = tmp_path / "graph.yaml"
        path.write_text(
            f"configuration: c\nnodes:\n  - {{group: g, name: n, version: {version}}}\n",
            encoding="utf-8",
        )
        graph = load_graph_file(path)
        assert graph.nodes[0].component_id.version == version
        assert graph.nodes[0].component_id.display_name == f"g:n:{version}"
