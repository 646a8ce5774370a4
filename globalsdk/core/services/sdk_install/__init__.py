"""
Global .NET SDK install service — package re-exports.

Callers import from here::

    from globalsdk.core.services.sdk_install import GlobalSdkOrchestrator

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → resolver → detection →
execution → orchestration).
"""

# ── L1: Domain ──
from globalsdk.core.services.sdk_install.domain.compat import (  # noqa: F401
    find_conflicting_version,
    versions_conflict,
)
from globalsdk.core.services.sdk_install.domain.errors import (  # noqa: F401
    ConflictingInstallError,
    CustomInstallExistsError,
    DownloadError,
    InstallTimeoutError,
    PrivilegeDeniedError,
    SdkInstallError,
    UnknownDistroError,
    UnsupportedPlatformError,
)
from globalsdk.core.services.sdk_install.domain.paths import (  # noqa: F401
    get_expected_global_sdk_path,
)

# ── L2: Resolver ──
from globalsdk.core.services.sdk_install.resolver.distro_resolver import (  # noqa: F401
    resolve_distro_provider,
)

# ── L3: Detection ──
from globalsdk.core.services.sdk_install.detection.registry import (  # noqa: F401
    get_global_sdk_installs,
    get_global_sdk_versions_installed,
)

# ── L4: Execution ──
from globalsdk.core.services.sdk_install.execution.command_executor import (  # noqa: F401
    CommandExecutor,
)
from globalsdk.core.services.sdk_install.execution.distro_provider import (  # noqa: F401
    DistroSdkProvider,
)

# ── L5: Orchestration ──
from globalsdk.core.services.sdk_install.orchestration.orchestrator import (  # noqa: F401
    GlobalSdkOrchestrator,
)
from globalsdk.core.services.sdk_install.orchestration.win_mac_installer import (  # noqa: F401
    WinMacGlobalInstaller,
)
