"""Tests for grph.sources.metro - metadata parsing and extraction."""

import json

import pytest

from grph.errors import MetadataError
from grph.graph import (
    BindingKind,
    BindingNode,
    ComponentNode,
    DependencyEdge,
    MissingBindingNode,
    ModuleNode,
)
from grph.sources.metro import (
    MetroGraphExtractor,
    MetroGraphMetadata,
    map_binding_kind,
    module_from_origin,
)
from grph.sources.metro.metadata import MetroMultibinding


@pytest.fixture
def extractor():
    return MetroGraphExtractor()


def dependency_edges(graph):
    return [edge for edge in graph.edges if isinstance(edge, DependencyEdge)]


def binding(key, kind="ConstructorInjected", **fields):
    return dict({"key": key, "bindingKind": kind, "dependencies": []}, **fields)


class TestMetadata:
    def test_parses_document(self, metro_document):
        metadata = MetroGraphMetadata.from_dict(metro_document)
        assert metadata.graph == "sample.AppGraph"
        assert [a.key for a in metadata.roots.accessors] == [
            "sample.UserService",
            "sample.AnalyticsService",
        ]
        assert len(metadata.bindings) == 4
        assert metadata.skipped == ()

    def test_unknown_keys_ignored(self, metro_document):
        metro_document["somethingNew"] = {"nested": True}
        metro_document["bindings"][0]["extra"] = 1
        assert len(MetroGraphMetadata.from_dict(metro_document).bindings) == 4

    def test_binding_without_key_skipped(self, metro_document):
        metro_document["bindings"].append({"bindingKind": "Provided"})
        metadata = MetroGraphMetadata.from_dict(metro_document)
        assert len(metadata.bindings) == 4
        assert metadata.skipped == ("bindings[4] has no key",)

    def test_missing_graph_name(self):
        with pytest.raises(MetadataError, match="graph"):
            MetroGraphMetadata.from_dict({"bindings": []})

    def test_not_an_object(self):
        with pytest.raises(MetadataError):
            MetroGraphMetadata.from_json("[1, 2]")

    def test_invalid_json(self):
        with pytest.raises(MetadataError, match="Invalid JSON"):
            MetroGraphMetadata.from_json("{")

    def test_nulls_fall_back_to_defaults(self):
        metadata = MetroGraphMetadata.from_dict(
            {"graph": "a.G", "scopes": None, "roots": None, "bindings": [binding("a.A", isScoped=None)]}
        )
        assert metadata.scopes == ()
        assert metadata.roots.accessors == ()
        assert metadata.bindings[0].is_scoped is False


class TestHelpers:
    @pytest.mark.parametrize(
        "origin, expected",
        [
            ("AppGraph.kt:36:1", "AppGraph"),
            ("src/main/kotlin/sample/Network.kt:3:1", "Network"),
            ("", None),
            (None, None),
        ],
    )
    def test_module_from_origin(self, origin, expected):
        assert module_from_origin(origin) == expected

    def test_kind_table(self):
        assert map_binding_kind("Bound") is BindingKind.DELEGATE
        assert map_binding_kind("Alias") is BindingKind.DELEGATE
        assert map_binding_kind("GraphAccessor") is BindingKind.COMPONENT_PROVISION

    def test_unknown_kind(self):
        assert map_binding_kind("Mystery") is BindingKind.PROVISION
        assert map_binding_kind("Mystery", MetroMultibinding(map_key="a")) is BindingKind.MULTIBOUND_MAP
        assert map_binding_kind("Mystery", MetroMultibinding()) is BindingKind.MULTIBOUND_SET


class TestExtractSample:
    @pytest.fixture
    def graph(self, extractor, metro_json):
        return extractor.extract_from_json(metro_json)

    def test_identity(self, graph):
        assert graph.name == "sample.AppGraph"
        assert graph.id == "sample_AppGraph"
        assert graph.metadata.creator == "grph-metro-source"
        assert "sample.AppGraph" in graph.metadata.description

    def test_graph_is_consistent(self, graph):
        assert graph.validate() == []

    def test_component(self, graph):
        components = [node for node in graph.nodes if isinstance(node, ComponentNode)]
        assert len(components) == 1
        assert components[0].label == "AppGraph"
        assert components[0].qualified_name == "sample.AppGraph"
        assert not components[0].is_subcomponent

    def test_bindings(self, graph):
        bindings = {node.key: node for node in graph.nodes if isinstance(node, BindingNode)}
        assert len(bindings) == 4
        assert bindings["sample.AnalyticsService"].binding_kind is BindingKind.INJECTION
        assert bindings["sample.AppGraph"].binding_kind is BindingKind.BOUND_INSTANCE
        assert bindings["sample.UserService"].is_entry_point
        assert not bindings["sample.UserRepository"].is_entry_point
        assert bindings["sample.UserService"].attributes["nameHint"] == "UserService"
        assert bindings["sample.UserService"].contributing_module == "AppGraph"

    def test_dependency_edges(self, graph):
        plain = [edge for edge in dependency_edges(graph) if not edge.is_entry_point]
        assert len(plain) == 1
        service = graph.find_binding("sample.UserService")
        repository = graph.find_binding("sample.UserRepository")
        assert (plain[0].source, plain[0].target) == (service.id, repository.id)

    def test_entry_point_edges(self, graph):
        component = next(node for node in graph.nodes if isinstance(node, ComponentNode))
        entry = [edge for edge in dependency_edges(graph) if edge.is_entry_point]
        assert len(entry) == 2
        assert all(edge.source == component.id for edge in entry)

    def test_module_from_origins(self, graph):
        modules = [node for node in graph.nodes if isinstance(node, ModuleNode)]
        assert [(m.qualified_name, m.binding_count) for m in modules] == [("AppGraph", 4)]
        assert modules[0].installed_in_components == ("sample.AppGraph",)


class TestExtractDetails:
    def test_missing_dependency(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "bindings": [binding("a.C", dependencies=[{"key": "a.X"}])],
                }
            )
        )
        missing = [node for node in graph.nodes if isinstance(node, MissingBindingNode)]
        assert [node.key for node in missing] == ["a.X"]
        assert missing[0].label == "[MISSING] X"
        assert dependency_edges(graph)[0].target == missing[0].id
        assert graph.validate() == []

    def test_unbound_accessor_is_missing(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {"graph": "a.G", "roots": {"accessors": [{"key": "a.Gone", "isDeferrable": True}]}}
            )
        )
        missing = [node for node in graph.nodes if isinstance(node, MissingBindingNode)]
        assert [node.key for node in missing] == ["a.Gone"]
        edge = dependency_edges(graph)[0]
        assert edge.is_entry_point
        assert edge.attributes == {"deferrable": "true"}

    def test_injectors(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "roots": {"injectors": [{"key": "a.Activity"}, {"key": "a.Unbound"}]},
                    "bindings": [binding("a.Activity", "MembersInjected")],
                }
            )
        )
        injector_edges = [e for e in dependency_edges(graph) if e.attributes.get("type") == "injector"]
        assert len(injector_edges) == 1
        assert not any(isinstance(node, MissingBindingNode) for node in graph.nodes)

    def test_scoped_bindings(self, extractor):
        document = {
            "graph": "a.G",
            "scopes": ["dev.zacsweers.metro.SingleIn"],
            "bindings": [binding("a.A", isScoped=True), binding("a.B")],
        }
        graph = extractor.extract_from_json(json.dumps(document))
        assert graph.find_binding("a.A").scope == "dev.zacsweers.metro.SingleIn"
        assert graph.find_binding("a.B").scope is None

        document["scopes"] = []
        graph = extractor.extract_from_json(json.dumps(document))
        assert graph.find_binding("a.A").scope == "Scoped"

    def test_multibinding(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "bindings": [
                        binding("kotlin.collections.Set<a.Plugin>", "IntoSet", multibinding={}),
                        binding("a.Other", "Multibinding", multibinding={"mapKey": "a.Key"}),
                    ],
                }
            )
        )
        assert graph.find_binding("kotlin.collections.Set<a.Plugin>").is_multibinding
        other = graph.find_binding("a.Other")
        assert other.binding_kind is BindingKind.MULTIBOUND_MAP
        assert other.is_multibinding

    def test_known_kind_with_multibinding_object(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "bindings": [
                        binding("a.Plugin", "Provided", multibinding={"contributionType": "a.Plugin"}),
                        binding("a.Plain", "Provided"),
                    ],
                }
            )
        )
        contribution = graph.find_binding("a.Plugin")
        assert contribution.binding_kind is BindingKind.PROVISION
        assert contribution.is_multibinding
        assert not graph.find_binding("a.Plain").is_multibinding

    def test_optional_wrapper(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {"graph": "a.G", "bindings": [binding("a.A", "Optional", optionalWrapper="java.util.Optional")]}
            )
        )
        assert graph.find_binding("a.A").attributes == {"optionalWrapper": "java.util.Optional"}

    def test_dependency_attributes(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "bindings": [
                        binding("a.A"),
                        binding("a.B", dependencies=[{"key": "a.A", "hasDefault": True, "isAssisted": True}]),
                    ],
                }
            )
        )
        assert dependency_edges(graph)[0].attributes == {"hasDefault": "true", "isAssisted": "true"}

    def test_graph_extensions(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "aggregationScopes": ["a.AppScope"],
                    "extensions": {"accessors": [{"key": "a.LoggedInGraph"}]},
                }
            )
        )
        component = next(node for node in graph.nodes if isinstance(node, ComponentNode))
        assert component.attributes == {"graphExtensions": "a.LoggedInGraph", "aggregationScopes": "a.AppScope"}

    def test_graph_extension_factories(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {
                    "graph": "a.G",
                    "extensions": {
                        "factoryAccessors": [{"key": "a.LoggedInGraph.Factory"}],
                        "factoriesImplemented": ["a.LoggedInGraph.Factory", "a.SettingsGraph.Factory"],
                    },
                }
            )
        )
        component = next(node for node in graph.nodes if isinstance(node, ComponentNode))
        assert component.attributes == {
            "factoryAccessors": "a.LoggedInGraph.Factory",
            "factoriesImplemented": "a.LoggedInGraph.Factory,a.SettingsGraph.Factory",
        }

    def test_duplicate_keys(self, extractor):
        graph = extractor.extract_from_metadata(
            MetroGraphMetadata.from_dict(
                {"graph": "a.G", "bindings": [binding("a.A"), binding("a.A", "Provided")]}
            )
        )
        assert graph.validate() == []
        assert graph.find_binding("a.A").binding_kind is BindingKind.INJECTION

    def test_extract_from_file(self, extractor, tmp_path, metro_json):
        path = tmp_path / "graph-AppGraph.json"
        path.write_text(metro_json, encoding="utf-8")
        assert extractor.extract_from_file(path).name == "sample.AppGraph"
