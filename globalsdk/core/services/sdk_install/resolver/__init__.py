"""
L2 Resolver — ``__init__.py`` re-exports the distro resolver.

Turns detected distro facts plus the variants table into a provider.
"""

from globalsdk.core.services.sdk_install.resolver.distro_resolver import (  # noqa: F401
    load_variants,
    resolve_distro_provider,
    resolve_distro_variant,
)
