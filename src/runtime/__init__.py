"""Runtime action exports."""

from .actions import ACTIONS, ActionDependencies, ActionDispatcher
from .status import run_status

__all__ = ["ACTIONS", "ActionDependencies", "ActionDispatcher", "run_status"]
