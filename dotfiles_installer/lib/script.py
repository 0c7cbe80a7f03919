from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import List

from ..catalog import Catalog
from ..classifier import step_marker_line
from ..config import InstallerConfig
from ..plan import ExecutionPlan

logger = logging.getLogger(__name__)

COMPLETION_BANNER = [
    "",
    "🎉 ================================",
    "🎉  SETUP COMPLETE!",
    "🎉 ================================",
    "",
]


def _q(value: str) -> str:
    return shlex.quote(value)


def render_install_script(plan: ExecutionPlan, catalog: Catalog, config: InstallerConfig) -> str:
    """Render the bash script that runs a plan against the lib/ scripts.

    Each step is announced with the step marker line, then its shell function
    is called. A failing step is recorded and reported but does not stop the
    steps after it. The exit status is 1 if any step failed.
    """

    lib_dir = Path(config.library_dir).resolve()
    log_path = str(config.install_log_path)

    lines: List[str] = [
        "#!/bin/bash",
        "",
        f"exec > >(tee -a {_q(log_path)}) 2>&1",
        "",
        "FAILED_STEPS=()",
        "",
        "# Load utilities and sub-scripts",
        f"source {_q(str(lib_dir / config.init_script))}",
        config.init_function,
        "",
    ]
    for script in config.library_scripts:
        lines.append(f"source {_q(str(lib_dir / script))}")
    lines.append("")

    lines.append("# Execute selected installation steps")
    for step_id in plan:
        step = catalog.get(step_id)
        lines.append(f"echo {_q(step_marker_line(step.name))}")
        lines.append(f"if ! {step.id}; then")
        lines.append(f"    FAILED_STEPS+=({_q(step.name)})")
        lines.append(f"    echo {_q(f'ERROR: {step.name} failed')}")
        lines.append("fi")
        lines.append("echo")

    lines.append("")
    lines.append("# Installation complete")
    for banner in COMPLETION_BANNER:
        lines.append(f"echo {_q(banner)}")
    summary = config.summary_function
    lines.append(f"if declare -F {summary} >/dev/null; then")
    lines.append(f"    {summary}")
    lines.append("fi")
    lines.append("")
    lines.append("if [ ${#FAILED_STEPS[@]} -gt 0 ]; then")
    lines.append("    exit 1")
    lines.append("fi")
    lines.append("exit 0")
    lines.append("")

    logger.debug("Rendered install script for %d steps", len(plan))
    return "\n".join(lines)
