"""Dotfiles installer (terminal menu front-end).

Core design goals:
- Catalog-driven: categories and steps are declarative data
- Deterministic plans: execution order is catalog order, never click order
- Installation work stays in the external lib/ shell scripts
- One thread owns UI state; background threads only produce events
- Centralized logging
"""

__all__ = []
