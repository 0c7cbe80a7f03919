from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .catalog import CatalogError, load_catalog
from .config import InstallerConfig, load_config
from .logging_utils import configure_logging
from .ui.app import InstallerApp

logger = logging.getLogger(__name__)


def preflight(config: InstallerConfig) -> Optional[str]:
    """Return an error message unless we run from the dotfiles checkout."""
    if not config.sentinel_path.exists():
        return (
            "Error: Please run this installer from the dotfiles directory.\n"
            f"The {config.sentinel_path} file was not found."
        )
    return None


def run(config: InstallerConfig) -> int:
    """Load the catalog and hand the terminal to the menu."""

    catalog = load_catalog(config.catalog_path)
    app = InstallerApp(catalog, config)
    try:
        return app.run()
    except Exception:
        logger.exception("Installer UI failed")
        raise


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="dotfiles-installer",
        description="Pick components from the catalog and run the lib/ installers.",
    )
    p.parse_args(argv)

    try:
        config = load_config()
    except (OSError, ValueError) as e:
        print(f"Error: invalid installer.yaml: {e}", file=sys.stderr)
        return 1

    problem = preflight(config)
    if problem:
        print(problem, file=sys.stderr)
        return 1

    actual_log_path = configure_logging(log_path=config.app_log)
    logger.info("Application log at %s", actual_log_path)

    try:
        return run(config)
    except (CatalogError, FileNotFoundError) as e:
        print(f"Error: could not load catalog: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
