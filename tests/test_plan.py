from dotfiles_installer.navigation import Navigator
from dotfiles_installer.plan import build_plan
from dotfiles_installer.selection import SelectionMap


def test_defaults_only_required(catalog):
    selection = SelectionMap(catalog)
    plan = build_plan(catalog, selection)
    assert plan.step_ids == ("core",)


def test_toggle_docker_appends_in_catalog_order(catalog):
    selection = SelectionMap(catalog)
    nav = Navigator(catalog, selection)
    nav.move_down()
    nav.toggle_current()
    plan = build_plan(catalog, selection)
    assert list(plan) == ["core", "docker"]


def test_required_included_even_if_map_says_no(catalog):
    plan = build_plan(catalog, {"core": False, "docker": False})
    assert "core" in plan
    assert len(plan) == 1


def test_plan_is_deterministic(multi):
    selection = SelectionMap(multi)
    first = build_plan(multi, selection)
    second = build_plan(multi, selection)
    assert first == second
    assert first.step_ids == ("packages", "zsh")


def test_order_is_catalog_order_not_toggle_order(multi):
    selection = SelectionMap(multi)
    selection.toggle("steam")
    selection.toggle("nvidia")
    plan = build_plan(multi, selection)
    assert plan.step_ids == ("nvidia", "steam", "packages", "zsh")


def test_double_toggle_restores_plan(multi):
    selection = SelectionMap(multi)
    original = build_plan(multi, selection)
    selection.toggle("intel")
    assert build_plan(multi, selection) != original
    selection.toggle("intel")
    assert build_plan(multi, selection) == original
