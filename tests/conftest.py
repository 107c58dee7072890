"""Shared fixtures for grph tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def metro_document():
    """Metro graph report for a small app graph.

    UserService depends on UserRepository; UserService and
    AnalyticsService are exposed as accessors.
    """
    return {
        "graph": "sample.AppGraph",
        "scopes": [],
        "aggregationScopes": [],
        "roots": {
            "accessors": [
                {"key": "sample.UserService", "isDeferrable": False},
                {"key": "sample.AnalyticsService", "isDeferrable": False},
            ],
            "injectors": [],
        },
        "extensions": {"accessors": [], "factoryAccessors": [], "factoriesImplemented": []},
        "bindings": [
            {
                "key": "sample.AnalyticsService",
                "bindingKind": "ConstructorInjected",
                "isScoped": False,
                "nameHint": "AnalyticsService",
                "dependencies": [],
                "isSynthetic": False,
                "origin": "AppGraph.kt:36:1",
                "declaration": "AnalyticsService",
                "multibinding": None,
                "optionalWrapper": None,
            },
            {
                "key": "sample.AppGraph",
                "bindingKind": "BoundInstance",
                "isScoped": False,
                "nameHint": "AppGraphProvider",
                "dependencies": [],
                "isSynthetic": False,
                "origin": "AppGraph.kt:11:1",
                "declaration": "AppGraph",
                "multibinding": None,
                "optionalWrapper": None,
            },
            {
                "key": "sample.UserRepository",
                "bindingKind": "ConstructorInjected",
                "isScoped": False,
                "nameHint": "UserRepository",
                "dependencies": [],
                "isSynthetic": False,
                "origin": "AppGraph.kt:23:1",
                "declaration": "UserRepository",
                "multibinding": None,
                "optionalWrapper": None,
            },
            {
                "key": "sample.UserService",
                "bindingKind": "ConstructorInjected",
                "isScoped": False,
                "nameHint": "UserService",
                "dependencies": [
                    {"key": "sample.UserRepository", "hasDefault": False, "isAssisted": False}
                ],
                "isSynthetic": False,
                "origin": "AppGraph.kt:29:1",
                "declaration": "UserService",
                "multibinding": None,
                "optionalWrapper": None,
            },
        ],
    }


@pytest.fixture
def metro_json(metro_document):
    return json.dumps(metro_document)


@pytest.fixture
def metro_reports(tmp_path, metro_document):
    """Reports directory laid out the way Metro writes it."""
    reports = tmp_path / "reports"
    metadata_dir = reports / "main" / "graph-metadata"
    metadata_dir.mkdir(parents=True)
    (metadata_dir / "graph-AppGraph.json").write_text(json.dumps(metro_document), encoding="utf-8")
    return reports


@pytest.fixture
def snapshot_document():
    """Binding graph dump: App with a Child subcomponent.

    - sample.Repo (INJECTION) depends on sample.Api
    - sample.Api (PROVISION, @Singleton) from sample.NetworkModule
    - java.util.Set<sample.Plugin> (MULTIBOUND_SET) from sample.PluginModule
    - sample.ChildPresenter (INJECTION, in Child) depends on sample.Repo
      and on sample.Missing, which nothing binds
    """
    return {
        "root": ["sample.App"],
        "isModuleBindingGraph": False,
        "components": [
            {"path": ["sample.App"], "isSubcomponent": False, "scopes": ["javax.inject.Singleton"]},
            {"path": ["sample.App", "sample.Child"], "isSubcomponent": True, "scopes": []},
        ],
        "bindings": [
            {
                "key": "sample.Repo",
                "kind": "INJECTION",
                "componentPath": ["sample.App"],
                "dependencies": ["sample.Api"],
            },
            {
                "key": "sample.Api",
                "kind": "PROVISION",
                "scope": "javax.inject.Singleton",
                "contributingModule": "sample.NetworkModule",
                "componentPath": ["sample.App"],
            },
            {
                "key": "java.util.Set<sample.Plugin>",
                "kind": "MULTIBOUND_SET",
                "contributingModule": "sample.PluginModule",
                "componentPath": ["sample.App"],
            },
            {
                "key": "sample.ChildPresenter",
                "kind": "INJECTION",
                "componentPath": ["sample.App", "sample.Child"],
                "dependencies": ["sample.Repo", "sample.Missing"],
            },
        ],
        "missingBindings": [{"key": "sample.Missing"}],
        "entryPoints": [
            {"component": ["sample.App"], "key": "sample.Repo"},
            {"component": ["sample.App", "sample.Child"], "key": "sample.ChildPresenter"},
        ],
    }


@pytest.fixture
def snapshot(snapshot_document):
    from grph.sources.binding_graph import BindingGraphSnapshot

    return BindingGraphSnapshot.from_dict(snapshot_document)


@pytest.fixture
def simple_graph():
    """Two bindings and a dependency between them."""
    from grph.graph import BindingKind, BindingNode, DependencyEdge, Graph, GraphMetadata

    return Graph(
        id="simple",
        name="SimpleGraph",
        nodes=(
            BindingNode(id="n1", label="A", key="com.example.A", binding_kind=BindingKind.INJECTION),
            BindingNode(id="n2", label="B", key="com.example.B", binding_kind=BindingKind.PROVISION),
        ),
        edges=(DependencyEdge(id="e1", source="n1", target="n2"),),
        metadata=GraphMetadata(
            creator="test-creator",
            description="Test description",
            created_at="2024-05-01T12:00:00+00:00",
        ),
    )


@pytest.fixture
def write_dir(tmp_path):
    """Write JSON documents into a directory and return it."""

    def _write(name: str, documents: dict) -> Path:
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        for file_name, document in documents.items():
            content = document if isinstance(document, str) else json.dumps(document)
            (directory / file_name).write_text(content, encoding="utf-8")
        return directory

    return _write
