"""Unit tests for material grouping."""

from configurator.domain.components import BackPanel, FramePanel, Shelf
from configurator.domain.services import group_by_material
from configurator.domain.value_objects import Color, Dimensions, Material, Position3D


def panel(cls, id: str, material: Material, color: Color):
    return cls(
        id=id,
        position=Position3D(0, 0, 0),
        dimensions=Dimensions(1, 1, 1),
        material=material,
        color=color,
    )


class TestGroupByMaterial:
    """Every component lands in exactly one group."""

    def test_groups_in_first_seen_order(self) -> None:
        components = [
            panel(FramePanel, "frame-left", Material.WOOD, Color.OAK),
            panel(BackPanel, "back", Material.PLYWOOD, Color.WHITE),
            panel(Shelf, "shelf-1", Material.WOOD, Color.OAK),
        ]
        groups = group_by_material(components)
        assert [g.name for g in groups] == ["wood/oak", "plywood/white"]
        assert [g.id for g in groups] == ["group-0", "group-1"]
        assert groups[0].component_ids == ("frame-left", "shelf-1")
        assert len(groups[1]) == 1

    def test_colour_splits_groups(self) -> None:
        components = [
            panel(Shelf, "shelf-1", Material.WOOD, Color.OAK),
            panel(Shelf, "shelf-2", Material.WOOD, Color.WALNUT),
        ]
        assert len(group_by_material(components)) == 2

    def test_partition(self) -> None:
        components = [
            panel(Shelf, f"shelf-{i}", material, Color.BLACK)
            for i, material in enumerate([Material.WOOD, Material.GLOSS, Material.WOOD, Material.MATTE])
        ]
        groups = group_by_material(components)
        ids = [cid for g in groups for cid in g.component_ids]
        assert sorted(ids) == sorted(c.id for c in components)
        assert len(ids) == len(set(ids))

    def test_empty(self) -> None:
        assert group_by_material([]) == ()
