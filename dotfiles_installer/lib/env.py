from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    config_default: str = "installer.yaml"
    library_dir: str = "lib"
    install_log: str = "~/install.log"
    app_log: str = "~/.cache/dotfiles-installer/installer.log"


PATHS = Paths()
