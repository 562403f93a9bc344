"""Grouping of components by material and colour."""

from __future__ import annotations

from collections.abc import Iterable

from ..components import ProductComponent
from ..entities import MaterialGroup
from ..value_objects import Color, Material

__all__ = ["group_by_material"]


def group_by_material(components: Iterable[ProductComponent]) -> tuple[MaterialGroup, ...]:
    """Partition components into groups sharing a material and colour.

    Groups are ordered by the first appearance of their key and every
    component id lands in exactly one group.

    Example:
        >>> groups = group_by_material(layout.components)
        >>> [g.name for g in groups]
        ['wood/oak', 'plywood/white']
    """
    members: dict[tuple[Material, Color], list[str]] = {}
    for component in components:
        members.setdefault(component.material_key, []).append(component.id)
    return tuple(
        MaterialGroup(
            id=f"group-{index}",
            name=f"{material.value}/{color.value}",
            material=material,
            color=color,
            component_ids=tuple(ids),
        )
        for index, ((material, color), ids) in enumerate(members.items())
    )
