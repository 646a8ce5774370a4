"""
L4 Execution — ``__init__.py`` re-exports all execution code.

These WRITE to the system: subprocesses, downloads, scratch cleanup.
"""

from globalsdk.core.services.sdk_install.execution.command_executor import (  # noqa: F401
    CommandExecutor,
)
from globalsdk.core.services.sdk_install.execution.distro_provider import (  # noqa: F401
    DistroSdkProvider,
)
from globalsdk.core.services.sdk_install.execution.download import (  # noqa: F401
    download_file,
    installer_file_name,
)
from globalsdk.core.services.sdk_install.execution.scratch import (  # noqa: F401
    ensure_scratch_dir,
    wipe_directory,
)
