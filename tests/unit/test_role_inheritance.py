"""Unit tests for RoleInheritanceResolver."""

import logging

import pytest

from crmrules.domain.entities import RoleTreeNode
from crmrules.domain.exceptions import CycleDetectedError
from crmrules.domain.services import RoleInheritanceResolver

from tests.conftest import PERMISSION_CATALOG, make_role


@pytest.fixture
def resolver() -> RoleInheritanceResolver:
    return RoleInheritanceResolver()


@pytest.fixture
def hierarchy():
    """admin <- manager <- rep, three levels with enabled inheritance."""
    return [
        make_role("admin", {"sys_roles", "fin_edit"}, level=1),
        make_role("manager", {"fin_view", "hr_view"}, "admin", level=2),
        make_role("rep", {"sal_view"}, "manager", level=3),
    ]


@pytest.fixture
def cycle():
    """a -> b -> c -> a."""
    return [
        make_role("a", {"pa"}, "c"),
        make_role("b", {"pb"}, "a"),
        make_role("c", {"pc"}, "b"),
    ]


def _shape(nodes: list[RoleTreeNode]) -> list[tuple]:
    return [(n.role.id, n.depth, _shape(n.children)) for n in nodes]


class TestEffectivePermissions:
    def test_union_with_parent_effective(self, resolver, hierarchy) -> None:
        """Effective permissions are own permissions plus the parent's effective set."""
        admin, manager, rep = hierarchy
        assert resolver.get_effective_permissions(rep, hierarchy) == (
            rep.permissions | resolver.get_effective_permissions(manager, hierarchy)
        )
        assert resolver.get_effective_permissions(rep, hierarchy) == {
            "sal_view",
            "fin_view",
            "hr_view",
            "sys_roles",
            "fin_edit",
        }

    def test_inherited_excludes_direct(self, resolver, hierarchy) -> None:
        _, manager, _ = hierarchy
        assert resolver.get_inherited_permissions(manager, hierarchy) == {"sys_roles", "fin_edit"}

    def test_inheritance_disabled_keeps_only_direct(self, resolver) -> None:
        parent = make_role("parent", {"x", "y"})
        child = make_role("child", {"z"}, "parent", inheritance_enabled=False)
        roles = [parent, child]

        assert resolver.get_effective_permissions(child, roles) == {"z"}
        assert resolver.get_inheritance_chain(child, roles) == []

    def test_disabled_edge_stops_walk(self, resolver) -> None:
        """A parent that does not inherit passes on only its own permissions."""
        roles = [
            make_role("top", {"t"}),
            make_role("mid", {"m"}, "top", inheritance_enabled=False),
            make_role("leaf", {"l"}, "mid"),
        ]
        assert resolver.get_effective_permissions(roles[2], roles) == {"l", "m"}
        assert resolver.get_inheritance_chain(roles[2], roles) == ["mid"]

    def test_dangling_parent_treated_as_root(self, resolver, caplog) -> None:
        orphan = make_role("orphan", {"o"}, "ghost")
        with caplog.at_level(logging.WARNING):
            result = resolver.get_effective_permissions(orphan, [orphan])
        assert result == {"o"}
        assert "ghost" in caplog.text

    def test_cycle_terminates_deterministically(self, resolver, cycle) -> None:
        a = cycle[0]
        first = resolver.get_effective_permissions(a, cycle)
        second = resolver.get_effective_permissions(a, list(reversed(cycle)))
        assert first == second == {"pa", "pb", "pc"}
        assert resolver.get_inheritance_chain(a, cycle) == ["c", "b"]

    def test_strict_mode_raises_on_cycle(self, cycle) -> None:
        strict = RoleInheritanceResolver(strict=True)
        with pytest.raises(CycleDetectedError) as exc_info:
            strict.get_effective_permissions(cycle[0], cycle)
        assert exc_info.value.path == ["a", "c", "b", "a"]

    def test_inputs_not_mutated(self, resolver, hierarchy) -> None:
        before = [(r.id, r.permissions, r.parent_role_id) for r in hierarchy]
        resolver.get_effective_permissions(hierarchy[2], hierarchy)
        resolver.build_role_forest(hierarchy)
        assert [(r.id, r.permissions, r.parent_role_id) for r in hierarchy] == before


class TestRiskAndStats:
    def test_high_risk_count(self, resolver, hierarchy) -> None:
        rep = hierarchy[2]
        # sys_roles and fin_edit are high risk; sal_view is not in the catalog
        assert resolver.get_high_risk_permission_count(rep, hierarchy, PERMISSION_CATALOG) == 2

    def test_high_risk_count_empty_catalog(self, resolver, hierarchy) -> None:
        assert resolver.get_high_risk_permission_count(hierarchy[0], hierarchy, []) == 0

    def test_role_stats(self, resolver, hierarchy) -> None:
        stats = resolver.get_role_stats(hierarchy[1], hierarchy, PERMISSION_CATALOG)
        assert stats.direct_permissions == 2
        assert stats.inherited_permissions == 2
        assert stats.total_permissions == 4
        assert stats.high_risk_permissions == 2


class TestRoleForest:
    def test_roots_sorted_by_level_then_name(self, resolver) -> None:
        roles = [
            make_role("z", level=2, name="Zeta"),
            make_role("a", level=1, name="Alpha"),
            make_role("b", level=1, name="Beta"),
        ]
        forest = resolver.build_role_forest(roles)
        assert [n.role.name for n in forest] == ["Alpha", "Beta", "Zeta"]

    def test_children_nested_with_depth(self, resolver, hierarchy) -> None:
        forest = resolver.build_role_forest(hierarchy)
        assert _shape(forest) == [("admin", 0, [("manager", 1, [("rep", 2, [])])])]

    def test_children_grouped_regardless_of_inheritance_flag(self, resolver) -> None:
        roles = [
            make_role("parent"),
            make_role("child", parent="parent", level=2, inheritance_enabled=False),
        ]
        forest = resolver.build_role_forest(roles)
        assert _shape(forest) == [("parent", 0, [("child", 1, [])])]

    def test_dangling_parent_becomes_root(self, resolver) -> None:
        roles = [make_role("orphan", parent="ghost", level=2), make_role("root")]
        forest = resolver.build_role_forest(roles)
        assert [n.role.id for n in forest] == ["root", "orphan"]

    def test_idempotent(self, resolver, hierarchy) -> None:
        roles = hierarchy + [make_role("auditor", level=2, parent="admin", name="Auditor")]
        assert _shape(resolver.build_role_forest(roles)) == _shape(
            resolver.build_role_forest(roles)
        )

    def test_cycle_members_excluded(self, resolver, cycle, caplog) -> None:
        roles = cycle + [make_role("solo")]
        with caplog.at_level(logging.WARNING):
            forest = resolver.build_role_forest(roles)
        assert _shape(forest) == [("solo", 0, [])]
        assert "unreachable" in caplog.text

    def test_empty(self, resolver) -> None:
        assert resolver.build_role_forest([]) == []


class TestValidation:
    def test_find_cycle_members(self, resolver, cycle) -> None:
        roles = cycle + [make_role("tail", parent="a")]
        assert resolver.find_cycle_members(roles) == {"a", "b", "c"}

    def test_find_cycle_members_ignores_disabled_edges(self, resolver) -> None:
        roles = [
            make_role("a", parent="b"),
            make_role("b", parent="a", inheritance_enabled=False),
        ]
        assert resolver.find_cycle_members(roles) == set()
        assert resolver.find_cycle_members(roles, enabled_only=False) == {"a", "b"}

    def test_find_unresolved_parents(self, resolver) -> None:
        roles = [make_role("ok"), make_role("orphan", parent="ghost")]
        assert [r.id for r in resolver.find_unresolved_parents(roles)] == ["orphan"]

    def test_would_create_cycle(self, resolver, hierarchy) -> None:
        assert resolver.would_create_cycle("admin", "rep", hierarchy)
        assert resolver.would_create_cycle("admin", "admin", hierarchy)
        assert not resolver.would_create_cycle("rep", "admin", hierarchy)

    def test_validate_clean_role(self, resolver, hierarchy) -> None:
        assert resolver.validate_inheritance(hierarchy[2], hierarchy) == []

    def test_validate_reports_cycle(self, resolver, cycle) -> None:
        assert "Circular inheritance detected" in resolver.validate_inheritance(cycle[0], cycle)

    def test_validate_reports_depth(self, resolver) -> None:
        roles = [make_role("r0")] + [
            make_role(f"r{i}", parent=f"r{i - 1}", level=i + 1) for i in range(1, 7)
        ]
        errors = resolver.validate_inheritance(roles[-1], roles, max_depth=5)
        assert errors == ["Inheritance chain too deep (max 5 levels)"]

    def test_validate_reports_missing_parent(self, resolver) -> None:
        orphan = make_role("orphan", parent="ghost")
        assert resolver.validate_inheritance(orphan, [orphan]) == [
            "Parent role ghost does not exist"
        ]
