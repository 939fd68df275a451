"""Tests for the exported graph document model."""

from __future__ import annotations

import pytest
from targetgraph.export.document import (
    EdgeRecord,
    GraphDocument,
    NodeRecord,
    join_list_value,
    shape_metadata,
    split_list_value,
)


class TestListValues:
    def test_separator_becomes_sequence(self):
        assert split_list_value("foo;bar;baz") == ["foo", "bar", "baz"]

    def test_plain_value_stays_scalar(self):
        assert split_list_value("foo") == "foo"
        assert split_list_value("") == ""

    @pytest.mark.parametrize("value", ["foo;bar;baz", "a.cpp;b.cpp", "x;", ";y", "a;;b", "plain"])
    def test_round_trip(self, value):
        assert join_list_value(split_list_value(value)) == value

    def test_shape_metadata_sorts_keys(self):
        shaped = shape_metadata({"b": "1;2", "a": "x"})
        assert list(shaped) == ["a", "b"]
        assert shaped["b"] == ["1", "2"]


class TestGraphDocument:
    def test_to_dict_structure(self):
        document = GraphDocument(label="demo", metadata={"project_name": "demo"})
        document.set_node(NodeRecord(name="a", label="a", metadata={"target_type": "EXECUTABLE"}))
        document.set_node(NodeRecord(name="b", label="b"))
        document.add_edge(
            EdgeRecord(source="a", target="b", relation="links", dependency_type="private-link")
        )

        d = document.to_dict()

        graph = d["graph"]
        assert graph["directed"] is True
        assert graph["label"] == "demo"
        assert graph["metadata"] == {"project_name": "demo"}
        assert graph["nodes"]["a"] == {
            "type": "target",
            "label": "a",
            "metadata": {"target_type": "EXECUTABLE"},
        }
        assert graph["edges"] == [
            {
                "source": "a",
                "target": "b",
                "relation": "links",
                "metadata": {"dependency_type": "private-link"},
            }
        ]

    def test_set_node_overwrites(self):
        document = GraphDocument(label="demo")
        document.set_node(NodeRecord(name="a", label="first"))
        document.set_node(NodeRecord(name="a", label="second"))

        assert len(document.nodes) == 1
        assert document.nodes["a"].label == "second"

    def test_edge_requires_both_endpoints(self):
        document = GraphDocument(label="demo")
        document.set_node(NodeRecord(name="a", label="a"))

        with pytest.raises(ValueError):
            document.add_edge(
                EdgeRecord(source="a", target="ghost", relation="links", dependency_type="x")
            )
        assert document.edges == []
