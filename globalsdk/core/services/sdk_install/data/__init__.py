"""
L0 Data — ``__init__.py`` re-exports the static tables.
"""

from globalsdk.core.services.sdk_install.data.constants import (  # noqa: F401
    ARCH_ALIASES,
    ELEVATION_MARKERS,
    LINUX,
    MACOS,
    REGISTRY_SDK_HIVES,
    REGISTRY_SDK_KEYS,
    WINDOWS,
    WINDOWS_ELEVATED_INSTALLER_FLAGS,
)
from globalsdk.core.services.sdk_install.data.distros import (  # noqa: F401
    DISTRO_VARIANTS,
)
