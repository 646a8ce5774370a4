"""
L1 Domain — ``__init__.py`` re-exports the pure domain functions.

NO subprocess calls, NO filesystem access, NO network calls.
Pure input→output.
"""

from globalsdk.core.services.sdk_install.domain.compat import (  # noqa: F401
    find_conflicting_version,
    versions_conflict,
)
from globalsdk.core.services.sdk_install.domain.distro_variant import (  # noqa: F401
    DistroVariant,
)
from globalsdk.core.services.sdk_install.domain.errors import (  # noqa: F401
    CleanupError,
    ConflictingInstallError,
    CustomInstallExistsError,
    DownloadError,
    InstallTimeoutError,
    MalformedVersionError,
    PrivilegeDeniedError,
    SdkInstallError,
    UnknownDistroError,
    UnsupportedPlatformError,
)
from globalsdk.core.services.sdk_install.domain.paths import (  # noqa: F401
    get_expected_global_sdk_path,
    normalize_arch,
)
from globalsdk.core.services.sdk_install.domain.registry_parse import (  # noqa: F401
    extract_versions_from_registry_output,
    extract_versions_from_registry_tokens,
)
from globalsdk.core.services.sdk_install.domain.version import (  # noqa: F401
    SdkVersion,
    get_feature_band,
    get_feature_band_patch,
    get_major_minor,
    is_fully_specified,
    parse_version,
)
