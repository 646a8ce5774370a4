"""
L0 Data — Well-known locations, flags and names.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Registry keys holding one value per globally installed SDK.
REGISTRY_SDK_KEY_X64 = (
    "HKEY_LOCAL_MACHINE\\SOFTWARE\\WOW6432Node\\dotnet\\Setup\\InstalledVersions\\x64\\sdk"
)
REGISTRY_SDK_KEY_X86 = REGISTRY_SDK_KEY_X64.replace("\\x64\\", "\\x86\\")

# (architecture, key), queried in this order; results are concatenated,
# not de-duplicated.
REGISTRY_SDK_HIVES: tuple[tuple[str, str], ...] = (
    ("x86", REGISTRY_SDK_KEY_X86),
    ("x64", REGISTRY_SDK_KEY_X64),
)
REGISTRY_SDK_KEYS: tuple[str, ...] = tuple(key for _, key in REGISTRY_SDK_HIVES)

REG_EXE = "%SystemRoot%\\System32\\reg.exe"

# Install roots.  Windows paths end in sdk\<version>\dotnet.dll,
# macOS paths in sdk/<version>.
WINDOWS_SDK_ROOTS: dict[str, str] = {
    "x86": "C:\\Program Files (x86)\\dotnet\\sdk",
    "x64": "C:\\Program Files\\dotnet\\sdk",
}
MACOS_SDK_ROOT = "/usr/local/share/dotnet/sdk"
MACOS_X64_SDK_ROOT = "/usr/local/share/dotnet/x64/dotnet/sdk"

# Passed to the Windows installer only when we already hold admin rights.
WINDOWS_ELEVATED_INSTALLER_FLAGS: list[str] = ["/quiet", "/install", "/norestart"]

# Architecture name normalization (dotnet naming).
ARCH_ALIASES: dict[str, str] = {
    "x64": "x64",
    "amd64": "x64",
    "x86_64": "x64",
    "x86": "x86",
    "x32": "x86",
    "i386": "x86",
    "i686": "x86",
    "arm64": "arm64",
    "aarch64": "arm64",
}

# Argv[0] values that mean "run this with admin rights".  Only the
# command executor is allowed to add them.
ELEVATION_MARKERS: frozenset[str] = frozenset(
    {"sudo", "pkexec", "doas", "su", "runas", "gsudo"}
)

# platform.system() values.
WINDOWS = "Windows"
MACOS = "Darwin"
LINUX = "Linux"
