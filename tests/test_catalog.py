import pytest

from dotfiles_installer.catalog import CatalogError, catalog_from_mapping, load_catalog


def test_bundled_catalog_loads():
    c = load_catalog()
    names = [cat.name for cat in c.categories]
    assert names[0] == "Graphics Drivers"
    assert names[-1] == "System Configuration"
    assert len(c) == 13

    required = [s.id for s in c.steps() if s.required]
    assert required == ["install_packages", "install_aur_helper", "copy_dotfiles"]


def test_bundled_catalog_ids_unique():
    c = load_catalog()
    ids = [s.id for s in c.steps()]
    assert len(ids) == len(set(ids))
    assert c.step_count == len(ids)


def test_get_step(catalog):
    assert catalog.get("docker").name == "Docker"
    with pytest.raises(KeyError):
        catalog.get("nope")


def test_duplicate_ids_rejected():
    raw = {
        "categories": [
            {"name": "A", "steps": [{"id": "x", "name": "X"}]},
            {"name": "B", "steps": [{"id": "x", "name": "X again"}]},
        ]
    }
    with pytest.raises(CatalogError):
        catalog_from_mapping(raw)


def test_empty_category_rejected():
    with pytest.raises(CatalogError):
        catalog_from_mapping({"categories": [{"name": "A", "steps": []}]})


def test_empty_catalog_rejected():
    with pytest.raises(CatalogError):
        catalog_from_mapping({"categories": []})


def test_step_id_must_be_shell_function_name():
    raw = {"categories": [{"name": "A", "steps": [{"id": "rm -rf /", "name": "Bad"}]}]}
    with pytest.raises(CatalogError):
        catalog_from_mapping(raw)


def test_flags_must_be_booleans():
    raw = {"categories": [{"name": "A", "steps": [{"id": "a", "name": "A", "required": "yes"}]}]}
    with pytest.raises(CatalogError):
        catalog_from_mapping(raw)


def test_load_catalog_from_file(tmp_path):
    p = tmp_path / "catalog.yaml"
    p.write_text(
        "categories:\n"
        "  - name: Only\n"
        "    steps:\n"
        "      - id: one\n"
        "        name: One\n"
        "        selected: true\n",
        encoding="utf-8",
    )
    c = load_catalog(str(p))
    assert [s.id for s in c.steps()] == ["one"]
    assert c.get("one").selected is True


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize("name", ["A === B", "Two\nlines", "Carriage\rreturn"])
def test_step_name_must_fit_in_marker_line(name):
    raw = {"categories": [{"name": "A", "steps": [{"id": "a", "name": name}]}]}
    with pytest.raises(CatalogError):
        catalog_from_mapping(raw)


def test_bundled_names_round_trip_through_marker():
    from dotfiles_installer.classifier import classify, step_marker_line
    from dotfiles_installer.events import StepStarted

    for step in load_catalog().steps():
        assert classify(step_marker_line(step.name)) == StepStarted(step.name)
