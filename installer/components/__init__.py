"""
Component modules for the installer.

Importing this package registers every component with the
ComponentRegistry. Import order is the declaration order shown in menus.
"""

from installer.components.inputleap import inputleap_installer  # noqa: F401
from installer.components.tailscale import tailscale_installer  # noqa: F401
from installer.components.flatpak import flatpak_inputleap_remover  # noqa: F401
