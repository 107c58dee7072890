"""Tests for grph.graph.mapper - NodeIdMapper."""

import pytest

from grph.graph import NodeIdMapper


@pytest.fixture
def mapper():
    return NodeIdMapper()


class TestIdAllocation:
    """Ids come from one node counter and one edge counter."""

    def test_node_ids_are_sequential(self, mapper):
        assert mapper.component_id("App") == "n0"
        assert mapper.binding_id("com.example.Repo") == "n1"
        assert mapper.module_id("com.example.AppModule") == "n2"

    def test_same_key_same_id(self, mapper):
        first = mapper.binding_id("com.example.Repo")
        mapper.binding_id("com.example.Api")
        assert mapper.binding_id("com.example.Repo") == first

    def test_tables_are_separate(self, mapper):
        """A component and a binding spelled the same get different ids."""
        component = mapper.component_id("com.example.App")
        binding = mapper.binding_id("com.example.App")
        module = mapper.module_id("com.example.App")
        assert len({component, binding, module}) == 3

    def test_edge_ids_never_repeat(self, mapper):
        assert [mapper.next_edge_id() for _ in range(3)] == ["e0", "e1", "e2"]

    def test_edge_ids_do_not_consume_node_ids(self, mapper):
        mapper.next_edge_id()
        assert mapper.component_id("App") == "n0"


class TestLookup:
    def test_find_unknown_returns_none(self, mapper):
        assert mapper.find_component_id("App") is None
        assert mapper.find_binding_id("Repo") is None
        assert mapper.find_module_id("AppModule") is None

    def test_find_does_not_allocate(self, mapper):
        mapper.find_binding_id("Repo")
        assert mapper.binding_id("Api") == "n0"

    def test_find_known(self, mapper):
        node_id = mapper.binding_id("Repo")
        assert mapper.find_binding_id("Repo") == node_id
        assert mapper.binding_id("Repo") == node_id


class TestModuleAggregates:
    def test_counts_and_components(self, mapper):
        mapper.record_module_binding("AppModule", "App")
        mapper.record_module_binding("AppModule", "App, Child")
        mapper.record_module_binding("AppModule", "App")
        mapper.record_module_binding("NetworkModule", "App")

        assert mapper.module_binding_counts == {"AppModule": 3, "NetworkModule": 1}
        assert mapper.module_components("AppModule") == ["App", "App, Child"]

    def test_unknown_module_has_no_components(self, mapper):
        assert mapper.module_components("Nope") == []

    def test_counts_are_a_copy(self, mapper):
        mapper.record_module_binding("AppModule", "App")
        mapper.module_binding_counts["AppModule"] = 99
        assert mapper.module_binding_counts["AppModule"] == 1
