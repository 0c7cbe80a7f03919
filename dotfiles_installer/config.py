from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.env import PATHS

CANCEL_POLICIES = ("detach", "terminate")

_SHELL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_LIBRARY_SCRIPTS = [
    "packages.sh",
    "aur.sh",
    "nvidia.sh",
    "apps.sh",
    "wallpapers.sh",
    "sddm.sh",
    "zsh.sh",
    "fastfetch.sh",
    "dotfiles.sh",
    "node.sh",
    "mongodb.sh",
    "virtualization.sh",
]


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def _library(self) -> Dict[str, Any]:
        return self.raw.get("library") or {}

    @property
    def library_dir(self) -> str:
        return str(self._library.get("dir") or PATHS.library_dir)

    @property
    def sentinel(self) -> str:
        """Library script whose presence proves we run from the dotfiles checkout."""
        return str(self._library.get("sentinel") or "packages.sh")

    @property
    def sentinel_path(self) -> Path:
        return Path(self.library_dir) / self.sentinel

    @property
    def init_script(self) -> str:
        return str(self._library.get("init_script") or "utils.sh")

    @property
    def init_function(self) -> str:
        return str(self._library.get("init_function") or "init_utils")

    @property
    def library_scripts(self) -> List[str]:
        scripts = self._library.get("scripts")
        if scripts is None:
            return list(DEFAULT_LIBRARY_SCRIPTS)
        return [str(s) for s in scripts]

    @property
    def summary_function(self) -> str:
        return str(self._library.get("summary_function") or "report_installation_summary")

    @property
    def install_log(self) -> str:
        return str(self.raw.get("install_log") or PATHS.install_log)

    @property
    def install_log_path(self) -> Path:
        return Path(self.install_log).expanduser()

    @property
    def app_log(self) -> str:
        return str(Path(str(self.raw.get("app_log") or PATHS.app_log)).expanduser())

    @property
    def shell(self) -> str:
        return str(self.raw.get("shell") or "bash")

    @property
    def script_dir(self) -> Optional[str]:
        value = self.raw.get("script_dir")
        return str(value) if value else None

    @property
    def tick_seconds(self) -> float:
        value = self.raw.get("tick_seconds", 0.1)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"tick_seconds must be a number, got {value!r}")
        return float(value)

    @property
    def cancel_policy(self) -> str:
        return str(self.raw.get("cancel_policy") or "detach")

    @property
    def catalog_path(self) -> Optional[str]:
        value = self.raw.get("catalog")
        return str(value) if value else None

    def validate(self) -> "InstallerConfig":
        if not isinstance(self.raw.get("library") or {}, dict):
            raise ValueError("library must be a mapping/object")
        scripts = self._library.get("scripts")
        if scripts is not None and (
            not isinstance(scripts, list) or not all(isinstance(s, str) and s for s in scripts)
        ):
            raise ValueError("library.scripts must be a list of script file names")
        if self.cancel_policy not in CANCEL_POLICIES:
            raise ValueError(
                f"cancel_policy must be one of {', '.join(CANCEL_POLICIES)}, got {self.cancel_policy!r}"
            )
        if self.tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        for name in (self.init_function, self.summary_function):
            if not _SHELL_NAME_RE.match(name):
                raise ValueError(f"not a valid shell function name: {name!r}")
        return self


def load_config(path: Optional[str] = None) -> InstallerConfig:
    """Load installer.yaml if present; otherwise return the defaults."""

    p = Path(path or PATHS.config_default)
    if not p.exists():
        if path:
            raise FileNotFoundError(path)
        return InstallerConfig().validate()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read installer.yaml") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("installer.yaml must contain a mapping/object")

    return InstallerConfig(raw=raw).validate()
