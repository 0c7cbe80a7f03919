from __future__ import annotations

from rich.text import Text

from .state import AppState

PURPLE = "#7C3AED"
GREEN = "#10B981"
BLUE = "#3B82F6"
RED = "#EF4444"
AMBER = "#F59E0B"
GREY = "#A1A1AA"
DIM_GREY = "#6B7280"

TITLE = f"bold {PURPLE}"
SELECTED = f"#FFFFFF on {PURPLE}"
UNSELECTED = GREY
CATEGORY = f"bold {GREEN}"
DESCRIPTION = DIM_GREY
PROGRESS = f"bold {BLUE}"
ERROR = f"bold {RED}"
SUCCESS = f"bold {GREEN}"
WARNING = f"bold {AMBER}"

SPINNER = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
RECENT_ERRORS = 3

HELP = "Use ←→ to navigate categories, ↑↓ to navigate options, SPACE to toggle, ENTER to install"


def _checkbox(required: bool, active: bool) -> str:
    if required:
        return "[●]"
    return "[✓]" if active else "[ ]"


def render_menu(state: AppState) -> Text:
    out = Text()
    out.append("  🚀 Dotfiles Installer\n\n", style=TITLE)
    out.append(HELP + "\n\n")

    cursor = state.navigator.cursor
    for ci, category in enumerate(state.catalog.categories):
        if ci != cursor.category:
            out.append(f"   {category.name}\n", style=CATEGORY)
            continue

        out.append(f" ▶ {category.name} ", style=SELECTED)
        out.append("\n")
        for si, step in enumerate(category.steps):
            active = state.selection.is_active(step.id)
            label = f"{_checkbox(step.required, active)} {step.name}"
            if si == cursor.step:
                out.append(f"   ▶ {label} ", style=SELECTED)
                out.append("\n")
                if step.description:
                    out.append(f"   {step.description}\n", style=DESCRIPTION)
            else:
                out.append(f"     {label}\n", style=SUCCESS if active else UNSELECTED)
        out.append("\n")

    out.append("\n")
    out.append(
        f"Selected: {state.selection.active_count()}/{state.catalog.step_count} components\n"
    )
    out.append("Press ENTER to start installation, 'q' to quit")
    return out


def render_running(state: AppState) -> Text:
    run = state.run
    out = Text()
    out.append("  📦 Installing Dotfiles...\n\n", style=TITLE)

    spinner = SPINNER[state.frame % len(SPINNER)]
    if run.current_step:
        out.append(f"{spinner} Current: {run.current_step}\n", style=PROGRESS)
    else:
        out.append(f"{spinner} Preparing...\n", style=PROGRESS)
    if run.progress:
        out.append(run.progress + "\n")

    out.append("\n")
    out.append("Please wait while the installation completes...\n")
    out.append("This may take several minutes depending on your internet connection.\n\n")

    if run.errors:
        out.append("Recent errors:\n", style=ERROR)
        for err in run.errors[-RECENT_ERRORS:]:
            out.append(f"  • {err}\n", style=ERROR)
        out.append("\n")

    out.append("Press 'q' to quit (the installer is not waited for)")
    return out


def render_summary(state: AppState) -> Text:
    run = state.run
    out = Text()
    out.append("  🎉 Installation Complete!\n\n", style=TITLE)

    if run.launch_failed:
        out.append("The installer could not be started.", style=ERROR)
    elif run.succeeded:
        out.append("All selected components have been installed successfully!", style=SUCCESS)
    else:
        out.append("Installation completed with some issues.", style=WARNING)
    out.append("\n\n")

    if not run.launch_failed:
        out.append("Please restart your system for all changes to take effect.\n")
        out.append("Enjoy your new setup!\n\n")

    if run.warnings:
        out.append("⚠️  Warnings:\n", style=WARNING)
        for warning in run.warnings:
            out.append(f"  • {warning}\n", style=WARNING)
        out.append("\n")

    if run.errors:
        out.append("❌ Errors:\n", style=ERROR)
        for err in run.errors:
            out.append(f"  • {err}\n", style=ERROR)
        if run.log_path:
            out.append(f"\nCheck {run.log_path} for details.\n")

    out.append("\nPress any key to exit...")
    return out


def render(state: AppState) -> Text:
    """Draw the screen for the current state. No side effects."""
    if state.run.is_complete:
        return render_summary(state)
    if state.run.is_running:
        return render_running(state)
    return render_menu(state)
