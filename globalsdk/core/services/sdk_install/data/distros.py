"""
L0 Data — Linux distro variants for global .NET SDK installs.

One entry per distro-id + version.  Pure data, no logic.

Command templates use ``{package}`` for the distro package name, which
is ``package_template`` formatted with ``{major_minor}``.  Commands
listed under ``needs_sudo`` are run elevated through the command
executor; they must never carry ``sudo`` themselves.

Adding a distro means adding an entry here, nothing else.
"""

from __future__ import annotations

# ── Package manager command sets ────────────────────────────────

_APT: dict = {
    "package_manager": "apt",
    "refresh": ["apt-get", "update"],
    "install": ["apt-get", "install", "-y", "{package}"],
    "upgrade": ["apt-get", "install", "--only-upgrade", "-y", "{package}"],
    "uninstall": ["apt-get", "remove", "-y", "{package}"],
    "search": ["apt-cache", "search", "--names-only", "^{package}$"],
    "candidate": ["apt-cache", "policy", "{package}"],
    "candidate_pattern": r"Candidate:\s*(\d+\.\d+\.\d+)",
    "needs_sudo": ["refresh", "install", "upgrade", "uninstall"],
}

_DNF: dict = {
    "package_manager": "dnf",
    "refresh": ["dnf", "makecache", "-q"],
    "install": ["dnf", "install", "-y", "{package}"],
    "upgrade": ["dnf", "upgrade", "-y", "{package}"],
    "uninstall": ["dnf", "remove", "-y", "{package}"],
    "search": ["dnf", "list", "-q", "{package}"],
    "candidate": ["dnf", "info", "-q", "--available", "{package}"],
    "candidate_pattern": r"Version\s*:\s*(\d+\.\d+\.\d+)",
    "needs_sudo": ["refresh", "install", "upgrade", "uninstall"],
}

_SDK_PACKAGE = "dotnet-sdk-{major_minor}"


# ── Variants ────────────────────────────────────────────────────
#
# ``support`` maps major.minor → "lts" / "sts".  A major.minor newer than
# every listed one is "unknown" (the table predates it); an older or
# unlisted one is "unsupported".
# ``match_major``: match on the major part of VERSION_ID only
# (RHEL "9.3" → "9").

DISTRO_VARIANTS: dict[str, dict] = {

    "ubuntu-22.04": {
        "label": "Ubuntu 22.04",
        "id": "ubuntu",
        "version": "22.04",
        "match_major": False,
        **_APT,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib/dotnet",
        "support": {"6.0": "lts", "7.0": "sts", "8.0": "lts"},
    },
    "ubuntu-24.04": {
        "label": "Ubuntu 24.04",
        "id": "ubuntu",
        "version": "24.04",
        "match_major": False,
        **_APT,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib/dotnet",
        "support": {"8.0": "lts", "9.0": "sts"},
    },
    "fedora-39": {
        "label": "Fedora 39",
        "id": "fedora",
        "version": "39",
        "match_major": True,
        **_DNF,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib64/dotnet",
        "support": {"6.0": "lts", "7.0": "sts", "8.0": "lts"},
    },
    "fedora-40": {
        "label": "Fedora 40",
        "id": "fedora",
        "version": "40",
        "match_major": True,
        **_DNF,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib64/dotnet",
        "support": {"8.0": "lts"},
    },
    "rhel-8": {
        "label": "Red Hat Enterprise Linux 8",
        "id": "rhel",
        "version": "8",
        "match_major": True,
        **_DNF,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib64/dotnet",
        "support": {"6.0": "lts", "7.0": "sts", "8.0": "lts"},
    },
    "rhel-9": {
        "label": "Red Hat Enterprise Linux 9",
        "id": "rhel",
        "version": "9",
        "match_major": True,
        **_DNF,
        "package_template": _SDK_PACKAGE,
        "install_dir": "/usr/lib64/dotnet",
        "support": {"6.0": "lts", "7.0": "sts", "8.0": "lts"},
    },
}
