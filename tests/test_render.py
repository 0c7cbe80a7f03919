from rich.console import Console

from dotfiles_installer.events import LaunchFailed, RunComplete, StepError, StepStarted, StepWarning
from dotfiles_installer.ui.render import render
from dotfiles_installer.ui.state import AppState


def _text(state: AppState) -> str:
    console = Console(record=True, width=120, color_system=None)
    console.print(render(state))
    return console.export_text()


def test_menu_expands_only_current_category(multi):
    state = AppState.from_catalog(multi)
    text = _text(state)

    assert "Dotfiles Installer" in text
    assert "▶ Drivers" in text
    assert "NVIDIA" in text
    assert "Gaming" in text
    assert "Steam" not in text
    assert "Selected: 2/6 components" in text
    assert "Press ENTER to start installation, 'q' to quit" in text


def test_menu_checkboxes(multi):
    state = AppState.from_catalog(multi)
    state.navigator.move_category_forward()
    state.navigator.move_category_forward()
    text = _text(state)

    assert "[●] Core Packages" in text
    assert "[✓] Zsh Shell" in text
    assert "Steam" not in text


def test_menu_shows_description_under_cursor():
    from dotfiles_installer.catalog import catalog_from_mapping

    c = catalog_from_mapping(
        {
            "categories": [
                {
                    "name": "Dev",
                    "steps": [
                        {"id": "a", "name": "Alpha", "description": "first tool"},
                        {"id": "b", "name": "Beta", "description": "second tool"},
                    ],
                }
            ]
        }
    )
    text = _text(AppState.from_catalog(c))
    assert "first tool" in text
    assert "second tool" not in text


def test_running_screen(catalog):
    state = AppState.from_catalog(catalog)
    state.run.start()
    assert "Preparing..." in _text(state)

    state.run.apply(StepStarted("Core"))
    for i in range(5):
        state.run.apply(StepError(f"ERROR: e{i}"))
    text = _text(state)

    assert "Installing Dotfiles" in text
    assert "Current: Core" in text
    assert "Recent errors:" in text
    assert "e1" not in text
    assert "e2" in text and "e4" in text


def test_summary_success(catalog):
    state = AppState.from_catalog(catalog)
    state.run.start()
    state.run.apply(RunComplete(returncode=0))
    text = _text(state)

    assert "Installation Complete!" in text
    assert "All selected components have been installed successfully!" in text
    assert "Errors:" not in text
    assert "Press any key to exit..." in text


def test_summary_with_issues(catalog):
    state = AppState.from_catalog(catalog)
    state.run.start(log_path="~/install.log")
    state.run.apply(StepWarning("WARNING: slow"))
    state.run.apply(StepError("ERROR: broke"))
    state.run.apply(RunComplete(returncode=1))
    text = _text(state)

    assert "Installation completed with some issues." in text
    assert "WARNING: slow" in text
    assert "ERROR: broke" in text
    assert "Check ~/install.log for details." in text


def test_summary_after_launch_failure(catalog):
    state = AppState.from_catalog(catalog)
    state.run.start()
    state.run.apply(LaunchFailed("bash: not found"))
    text = _text(state)

    assert "The installer could not be started." in text
    assert "Launch failed: bash: not found" in text
    assert "restart your system" not in text
