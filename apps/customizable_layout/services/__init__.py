from .breakpoints import Breakpoints, drag_delay, select_layout_type
from .persistence import LayoutPersistence
from .reconciler import reconcile, resolve_working_config

__all__ = [
    "Breakpoints",
    "LayoutPersistence",
    "drag_delay",
    "reconcile",
    "resolve_working_config",
    "select_layout_type",
]
