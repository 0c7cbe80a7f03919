from __future__ import annotations

import pytest

from dotfiles_installer.catalog import Catalog, catalog_from_mapping


def small_catalog() -> Catalog:
    return catalog_from_mapping(
        {
            "categories": [
                {
                    "name": "Base",
                    "steps": [
                        {"id": "core", "name": "Core", "required": True, "selected": True},
                        {"id": "docker", "name": "Docker", "selected": False},
                    ],
                }
            ]
        }
    )


def multi_catalog() -> Catalog:
    return catalog_from_mapping(
        {
            "categories": [
                {
                    "name": "Drivers",
                    "steps": [
                        {"id": "nvidia", "name": "NVIDIA"},
                        {"id": "amd", "name": "AMD"},
                        {"id": "intel", "name": "Intel"},
                    ],
                },
                {
                    "name": "Gaming",
                    "steps": [{"id": "steam", "name": "Steam"}],
                },
                {
                    "name": "System",
                    "steps": [
                        {"id": "packages", "name": "Core Packages", "required": True, "selected": True},
                        {"id": "zsh", "name": "Zsh Shell", "selected": True},
                    ],
                },
            ]
        }
    )


@pytest.fixture
def catalog() -> Catalog:
    return small_catalog()


@pytest.fixture
def multi() -> Catalog:
    return multi_catalog()
