"""
L1 Domain — Registry query output parsing (pure).

``reg.exe query <key>`` prints the key, then one row per value::

    HKEY_LOCAL_MACHINE\\SOFTWARE\\...\\x64\\sdk
        7.0.203    REG_DWORD    0x1
        8.0.100    REG_DWORD    0x1

Each row is ``name / type / data``.  Only the value names (the SDK
versions) are kept; the type and hex data are discarded.
"""

from __future__ import annotations

from collections.abc import Sequence


def tokenize_registry_output(raw: str) -> list[str]:
    """Split raw ``reg query`` output into tokens, header first."""
    return raw.split()


def extract_versions_from_registry_tokens(tokens: Sequence[str]) -> list[str]:
    """Pull value names out of tokenized ``reg query`` output.

    The first token is the queried key and is skipped, blank tokens are
    dropped.  A row's value name is the token right before its
    ``REG_*`` type; anchoring on the type keeps rows aligned when the
    data cell is empty.
    """
    values = [t for t in list(tokens)[1:] if t.strip()]
    names: list[str] = []
    for i, token in enumerate(values):
        if token.startswith("REG_") and i > 0:
            name = values[i - 1]
            if name.startswith("REG_") or name == "(Default)":
                continue
            names.append(name)
    return names


def extract_versions_from_registry_output(raw: str) -> list[str]:
    """Convenience wrapper over raw command output."""
    return extract_versions_from_registry_tokens(tokenize_registry_output(raw))
