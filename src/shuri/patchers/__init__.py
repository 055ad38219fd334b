"""Registry patchers for the documentation integrations."""

from shuri.patchers.barrel import BarrelPatcher
from shuri.patchers.reference_list import ReferenceListPatcher
from shuri.patchers.sidebar import SidebarPatcher

__all__ = [
    "BarrelPatcher",
    "ReferenceListPatcher",
    "SidebarPatcher",
]
