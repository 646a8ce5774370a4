"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from globalsdk.core.services.sdk_install.detection.distro import (  # noqa: F401
    DistroInfo,
    detect_distro,
    parse_os_release,
)
from globalsdk.core.services.sdk_install.detection.host import (  # noqa: F401
    host_arch,
    host_system,
)
from globalsdk.core.services.sdk_install.detection.privilege import (  # noqa: F401
    is_elevated,
)
from globalsdk.core.services.sdk_install.detection.registry import (  # noqa: F401
    get_global_sdk_installs,
    get_global_sdk_versions_installed,
    query_registry_key,
)
