#!/usr/bin/env python3
"""
moviefinder-deploy - command line entry point.

Subcommands:
    deploy <resource-group>   Provision storage + Cosmos DB, import movies, publish the site
    import-data               Import the movie CSV into an existing container
    build-site                Render the static site locally
    search <title>            Query the movie search API
    validate-env              Check environment variables

Exit codes:
    0  success
    1  handled failure (provisioning, configuration, network, ...)
    2  usage error (argparse)
    130 interrupted

Examples:
  # Full deployment into an existing resource group
  moviefinder-deploy deploy movie-rg

  # Re-run against the accounts of an earlier run
  moviefinder-deploy deploy movie-rg --suffix a1b2c3

  # Import only
  moviefinder-deploy import-data --endpoint https://moviedatabasea1b2c3.documents.azure.com:443/ --key ...

  # Search and remember the settings
  moviefinder-deploy search "Inception" --url https://myapim.azure-api.net/movies/search --key ... --save
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import __version__, get_config
from config.env_validation import get_validation_summary, log_validation_results, validate_environment
from core.errors import classify_exception, create_error_response
from core.models import SiteSettings
from exceptions import BusinessLogicError, ConfigurationError, SearchNetworkError
from util_logger import LoggerFactory, ComponentType

console = Console()
logger = LoggerFactory.create_logger(ComponentType.CLI, "moviefinder-deploy")


# ============================================================================
# COMMANDS
# ============================================================================

def _require_valid_environment() -> None:
    if log_validation_results(logger):
        return
    errors = [e for e in validate_environment(include_warnings=False) if e.severity == "error"]
    for error in errors:
        console.print(f"[red]{escape(error.var_name)}[/]: {escape(error.message)}. {escape(error.fix_suggestion)}")
    raise ConfigurationError(f"{len(errors)} environment variable error(s)")


def cmd_deploy(args: argparse.Namespace) -> int:
    from infrastructure import RepositoryFactory
    from services import DeploymentOptions, DeploymentOrchestrator, ResourceProvisioner

    _require_valid_environment()
    config = get_config()

    provisioner = ResourceProvisioner(
        RepositoryFactory.create_control_plane_repository(),
        config=config,
        strict=args.strict,
    )
    orchestrator = DeploymentOrchestrator(provisioner, config=config)
    result = orchestrator.deploy(
        args.resource_group,
        DeploymentOptions(
            import_data=not args.skip_import,
            publish_site=not args.skip_site,
            name_suffix=args.suffix,
        )
    )

    if args.json:
        console.print_json(json.dumps(result.to_dict()))
        return 0

    table = Table(title="MovieFinder deployment")
    table.add_column("Item")
    table.add_column("Value")
    table.add_row("Resource group", result.resource_group)
    table.add_row("Storage account", result.storage_account)
    table.add_row("Cosmos DB account", result.cosmos_account)
    table.add_row("Database / container", f"{result.database_name} / {result.container_name}")
    if result.import_summary is not None:
        summary = result.import_summary
        table.add_row("Movies imported", f"{summary.imported} of {summary.total} ({summary.skipped} skipped)")
    table.add_row("Files uploaded", str(result.uploaded_files))
    table.add_row("Website URL", result.website_url or "-")
    console.print(table)
    return 0


def cmd_import_data(args: argparse.Namespace) -> int:
    from infrastructure import RepositoryFactory
    from services import MovieImporter

    config = get_config()
    csv_path = args.csv or config.dataset.local_path
    if args.download:
        csv_path = str(RepositoryFactory.create_dataset_downloader().fetch(csv_path, force=True))

    documents = RepositoryFactory.create_document_repository(
        args.endpoint, args.key, args.database, args.container
    )
    summary = MovieImporter(documents).import_file(csv_path)

    console.print(
        f"Imported [bold]{summary.imported}[/] of {summary.total} movies "
        f"({summary.skipped} skipped)"
    )
    for failure in summary.failures:
        console.print(f"  [yellow]{failure}[/]")
    return 0


def cmd_build_site(args: argparse.Namespace) -> int:
    from services import StaticSiteBuilder

    config = get_config()
    settings = SiteSettings(url=args.url or "", key=args.key or "").merged_over(
        config.site.default_settings()
    )
    output_dir = args.output_dir or config.site.output_dir
    files = StaticSiteBuilder(config.storage, config.site).build(output_dir, settings)
    for path in files:
        console.print(f"wrote {path}")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    from infrastructure import RepositoryFactory
    from services import SettingsStore, format_search_outcome

    config = get_config()
    store = SettingsStore(
        args.settings_file or config.site.settings_file,
        entry=config.site.settings_entry,
        defaults=config.site.default_settings(),
    )
    settings = SiteSettings(url=args.url or "", key=args.key or "").merged_over(store.load())
    if args.save:
        store.save(settings)

    try:
        result = RepositoryFactory.create_search_client(settings).search(args.title)
    except (SearchNetworkError, ConfigurationError) as e:
        console.print(f"[red]{escape(format_search_outcome(args.title, error=e))}[/]")
        return 1

    console.print(escape(format_search_outcome(args.title, result=result)))
    return 0


def cmd_validate_env(args: argparse.Namespace) -> int:
    summary = get_validation_summary(include_warnings=not args.errors_only)

    if args.json:
        console.print_json(json.dumps(summary))
        return 0 if summary["valid"] else 1

    for error in summary["errors"]:
        console.print(f"[red]ERROR[/] {error['var_name']}: {error['message']}")
        console.print(f"      expected: {error['expected_pattern']}")
        console.print(f"      fix: {error['fix_suggestion']}")
    for warning in summary["warnings"]:
        console.print(f"[yellow]WARN[/]  {warning['var_name']}: {warning['message']} "
                      f"({warning['expected_pattern']})")

    if summary["valid"]:
        console.print("[green]Environment OK[/]")
        return 0
    console.print(f"[red]{summary['error_count']} error(s)[/]")
    return 1


# ============================================================================
# PARSER
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moviefinder-deploy",
        description="Deploy the MovieFinder demo (static site + Cosmos DB) to Azure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    deploy = subparsers.add_parser("deploy", help="Run a full deployment")
    deploy.add_argument("resource_group", help="Existing resource group to deploy into")
    deploy.add_argument("--suffix", default=None,
                        help="Account name suffix (3-6 lowercase alphanumerics); random when omitted")
    deploy.add_argument("--skip-import", action="store_true", help="Do not import the movie dataset")
    deploy.add_argument("--skip-site", action="store_true", help="Do not build/upload the static site")
    deploy.add_argument("--strict", action="store_true",
                        help="Fail if an account already exists instead of reusing it")
    deploy.add_argument("--json", action="store_true", help="Print the result as JSON")
    deploy.set_defaults(handler=cmd_deploy)

    import_data = subparsers.add_parser("import-data", help="Import the movie CSV into Cosmos DB")
    import_data.add_argument("--endpoint", required=True, help="Cosmos DB document endpoint")
    import_data.add_argument("--key", required=True, help="Cosmos DB primary key")
    import_data.add_argument("--csv", default=None, help="CSV path (default: DATASET_PATH)")
    import_data.add_argument("--download", action="store_true", help="Download the CSV first")
    import_data.add_argument("--database", default=None, help="Database name (default: moviedb)")
    import_data.add_argument("--container", default=None, help="Container name (default: movies)")
    import_data.set_defaults(handler=cmd_import_data)

    build_site = subparsers.add_parser("build-site", help="Render the static site locally")
    build_site.add_argument("--output-dir", default=None, help="Output directory (default: website)")
    build_site.add_argument("--url", default=None, help="Default search API URL embedded in the page")
    build_site.add_argument("--key", default=None, help="Default subscription key embedded in the page")
    build_site.set_defaults(handler=cmd_build_site)

    search = subparsers.add_parser("search", help="Search for a movie by title")
    search.add_argument("title", help="Movie title")
    search.add_argument("--url", default=None, help="Search API URL (overrides stored settings)")
    search.add_argument("--key", default=None, help="Subscription key (overrides stored settings)")
    search.add_argument("--settings-file", default=None, help="Settings store path")
    search.add_argument("--save", action="store_true", help="Remember --url/--key in the settings store")
    search.set_defaults(handler=cmd_search)

    validate = subparsers.add_parser("validate-env", help="Validate environment variables")
    validate.add_argument("--json", action="store_true", help="Print the summary as JSON")
    validate.add_argument("--errors-only", action="store_true", help="Hide default-value warnings")
    validate.set_defaults(handler=cmd_validate_env)

    return parser


# ============================================================================
# MAIN
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run one command, return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/]")
        return 130
    except (ConfigurationError, PydanticValidationError) as e:
        logger.error(f"❌ Configuration error: {e}")
        console.print(f"[red]Configuration error:[/] {escape(str(e))}")
        return 1
    except BusinessLogicError as e:
        response = create_error_response(classify_exception(e), str(e), error_type=type(e).__name__)
        logger.error(f"❌ {args.command} failed: {e}", extra={'custom_dimensions': response})
        console.print(f"[red]{args.command} failed:[/] {escape(str(e))}")
        return 1
    except Exception as e:
        response = create_error_response(classify_exception(e), str(e), error_type=type(e).__name__)
        logger.error(f"❌ {args.command} failed unexpectedly: {e}", exc_info=True,
                     extra={'custom_dimensions': response})
        console.print(f"[red]{args.command} failed:[/] {type(e).__name__}: {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
