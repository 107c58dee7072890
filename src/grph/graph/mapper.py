"""NodeIdMapper - Stable id assignment for one extraction.

Ids are allocated from a single node counter ("n0", "n1", ...) and a
single edge counter ("e0", "e1", ...). Components, bindings and modules
are looked up in separate tables, so a component path and a binding key
with the same spelling still get different ids.

A mapper also accumulates the per-module aggregates (binding counts and
installing components) that module synthesis reads at the end of an
extraction. It is created per extraction and thrown away afterwards.
"""

from __future__ import annotations


class NodeIdMapper:
    """Lookup-or-create id tables for one extraction."""

    def __init__(self) -> None:
        self._node_counter = 0
        self._edge_counter = 0
        self._component_ids: dict[str, str] = {}
        self._binding_ids: dict[str, str] = {}
        self._module_ids: dict[str, str] = {}
        self._module_binding_counts: dict[str, int] = {}
        self._module_components: dict[str, dict[str, None]] = {}

    def next_node_id(self) -> str:
        """Allocate a fresh node id."""
        node_id = f"n{self._node_counter}"
        self._node_counter += 1
        return node_id

    def next_edge_id(self) -> str:
        """Allocate a fresh edge id. Edge ids are never shared."""
        edge_id = f"e{self._edge_counter}"
        self._edge_counter += 1
        return edge_id

    def _id_for(self, table: dict[str, str], key: str) -> str:
        node_id = table.get(key)
        if node_id is None:
            node_id = self.next_node_id()
            table[key] = node_id
        return node_id

    # Lookup-or-create
    def component_id(self, component_path: str) -> str:
        """Id for a component path, allocated on first sight."""
        return self._id_for(self._component_ids, component_path)

    def binding_id(self, key: str) -> str:
        """Id for a binding or missing-binding key, allocated on first sight."""
        return self._id_for(self._binding_ids, key)

    def module_id(self, module_name: str) -> str:
        """Id for a module name, allocated on first sight."""
        return self._id_for(self._module_ids, module_name)

    # Lookup only
    def find_component_id(self, component_path: str) -> str | None:
        return self._component_ids.get(component_path)

    def find_binding_id(self, key: str) -> str | None:
        return self._binding_ids.get(key)

    def find_module_id(self, module_name: str) -> str | None:
        return self._module_ids.get(module_name)

    # Module aggregates
    def record_module_binding(self, module_name: str, component_path: str | None) -> None:
        """Attribute one binding to a module, installed in `component_path`."""
        self._module_binding_counts[module_name] = (
            self._module_binding_counts.get(module_name, 0) + 1
        )
        components = self._module_components.setdefault(module_name, {})
        if component_path is not None:
            components[component_path] = None

    @property
    def module_binding_counts(self) -> dict[str, int]:
        """Binding count per module, in first-seen module order."""
        return dict(self._module_binding_counts)

    def module_components(self, module_name: str) -> list[str]:
        """Component paths observed installing a module, in first-seen order."""
        return list(self._module_components.get(module_name, {}))


__all__ = ["NodeIdMapper"]
