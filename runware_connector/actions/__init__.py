"""Action registry — global name-based lookup for connector actions.

Actions are declared in the modules of this package and added with
``register``. The host invokes them by name through
``runware_connector.runtime.run_action``.
"""

from __future__ import annotations

from dataclasses import dataclass

from runware_connector.constraints import Operation


@dataclass(frozen=True)
class Action:
    name: str
    display_name: str
    description: str
    operation: Operation
    prefilled: frozenset[str] = frozenset()  # fields with a UI-level default


_registry: dict[str, Action] = {}


def register(action: Action) -> Action:
    """Add an Action to the registry by its ``.name``."""
    _registry[action.name] = action
    return action


def resolve_action(name: str) -> Action:
    """Look up an action by name. Raises ValueError if not registered."""
    if name not in _registry:
        raise ValueError(
            f"Unknown action '{name}'. Available: {list(_registry.keys())}"
        )
    return _registry[name]


def list_actions() -> list[Action]:
    """Return all registered actions."""
    return list(_registry.values())


# Auto-import action modules so the registry is populated on first access.
import runware_connector.actions.generation as _generation  # noqa: E402, F401
import runware_connector.actions.background as _background  # noqa: E402, F401
