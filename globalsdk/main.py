"""
globalsdk — CLI entrypoint.

Usage:
    python -m globalsdk.main --help
    python -m globalsdk.main list
    python -m globalsdk.main install 8.0.204 --url https://.../dotnet-sdk-8.0.204-win-x64.exe
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from globalsdk import __version__
from globalsdk.core.config.loader import ConfigError, load_settings
from globalsdk.core.models.install import InstallContext
from globalsdk.core.observability.logging_config import resolve_level, setup_logging
from globalsdk.core.services.sdk_install.domain.errors import SdkInstallError
from globalsdk.core.services.sdk_install.orchestration.orchestrator import GlobalSdkOrchestrator


def _orchestrator(ctx: click.Context) -> GlobalSdkOrchestrator:
    """Build the orchestrator once per invocation."""
    if "orchestrator" not in ctx.obj:
        try:
            settings = load_settings(ctx.obj.get("config_path"))
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red", err=True)
            sys.exit(2)
        ctx.obj["orchestrator"] = GlobalSdkOrchestrator(settings)
    return ctx.obj["orchestrator"]


def _fail(error: Exception) -> None:
    click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="globalsdk")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to globalsdk.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """globalsdk — install and manage machine-wide .NET SDKs."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
        show_events=not quiet,
    )


@cli.command()
@click.argument("version")
@click.option("--url", "installer_url", default=None, help="Installer URL (Windows/macOS).")
@click.option("--package", "package_id", default=None, help="Distro package name override (Linux).")
@click.option("--arch", default=None, help="Target architecture (default: host).")
@click.pass_context
def install(
    ctx: click.Context,
    version: str,
    installer_url: str | None,
    package_id: str | None,
    arch: str | None,
) -> None:
    """Install a global .NET SDK VERSION."""
    from globalsdk.core.services.sdk_install.detection.host import host_arch

    orch = _orchestrator(ctx)
    context = InstallContext(
        version=version,
        installer_url=installer_url,
        package_id=package_id,
        architecture=arch or host_arch(),
    )
    try:
        result = asyncio.run(orch.install(context))
    except (SdkInstallError, ValueError) as e:
        _fail(e)
        return

    if result.output and not ctx.obj.get("quiet"):
        click.echo(result.output)

    if result.verified:
        click.secho(f"✅ .NET SDK {result.version} installed", fg="green")
    elif result.exit_code is not None:
        click.secho(
            f"❌ .NET SDK {result.version} installer exited {result.exit_code}",
            fg="red",
            err=True,
        )
        sys.exit(1)
    else:
        click.secho(
            f"⚠️  .NET SDK {result.version} install attempted; the outcome could not be verified",
            fg="yellow",
        )


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_sdks(ctx: click.Context, as_json: bool) -> None:
    """List globally installed SDKs."""
    orch = _orchestrator(ctx)
    try:
        records = asyncio.run(orch.installed_records())
    except SdkInstallError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps({
            "system": orch.system,
            "sdks": [r.model_dump() for r in records],
        }, indent=2))
        return
    if not records:
        click.echo("No global .NET SDKs found.")
        return
    for r in records:
        click.echo(f"  • {r.version}  {r.install_dir}")


@cli.command()
@click.argument("version")
@click.option("--arch", default=None, help="Architecture (default: host).")
@click.pass_context
def path(ctx: click.Context, version: str, arch: str | None) -> None:
    """Show where a global SDK VERSION is (or would be) installed."""
    orch = _orchestrator(ctx)
    try:
        click.echo(orch.expected_path(version, arch))
    except SdkInstallError as e:
        _fail(e)


@cli.command("check-conflict")
@click.argument("version")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check_conflict(ctx: click.Context, version: str, as_json: bool) -> None:
    """Check whether installing VERSION would clash with an installed SDK."""
    orch = _orchestrator(ctx)
    try:
        conflict = asyncio.run(orch.find_conflict(version))
    except SdkInstallError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps({"requested": version, "conflicting_version": conflict}))
    elif conflict:
        click.secho(f"❌ {version} conflicts with installed {conflict}", fg="red")
    else:
        click.secho(f"✅ No installed SDK blocks {version}", fg="green")
    if conflict:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def distro(ctx: click.Context, as_json: bool) -> None:
    """Show the Linux distro provider and its .NET support table."""
    orch = _orchestrator(ctx)
    try:
        provider = orch.distro_provider()
    except SdkInstallError as e:
        _fail(e)
        return

    variant = provider.variant
    if as_json:
        click.echo(json.dumps({
            "key": variant.key,
            "label": variant.label,
            "package_manager": variant.package_manager,
            "install_dir": variant.install_dir,
            "support": variant.support,
        }, indent=2))
        return

    click.secho(f"\n🐧 {variant.label}", fg="cyan", bold=True)
    click.echo(f"   Package manager: {variant.package_manager}")
    click.echo(f"   Install dir:     {variant.install_dir}")
    for major_minor, status in sorted(variant.support.items()):
        click.echo(f"     • .NET {major_minor}: {status}")


@cli.command()
@click.argument("version")
@click.pass_context
def upgrade(ctx: click.Context, version: str) -> None:
    """Upgrade VERSION to the newest patch in its feature band (Linux)."""
    orch = _orchestrator(ctx)
    try:
        ok = asyncio.run(orch.upgrade(version))
    except SdkInstallError as e:
        _fail(e)
        return
    if not ok:
        click.secho(f"❌ Upgrade of {version} did not complete", fg="red")
        sys.exit(1)
    click.secho(f"✅ {version} is up to date within its feature band", fg="green")


@cli.command()
@click.argument("version")
@click.pass_context
def uninstall(ctx: click.Context, version: str) -> None:
    """Remove the global SDK VERSION (Linux)."""
    orch = _orchestrator(ctx)
    try:
        ok = asyncio.run(orch.uninstall(version))
    except SdkInstallError as e:
        _fail(e)
        return
    if not ok:
        click.secho(f"❌ {version} was not removed", fg="red")
        sys.exit(1)
    click.secho(f"✅ {version} removed", fg="green")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
