"""Main CLI entry point for the FHIR Intake Converter.

This module provides the main Click command group for the fhir-intake CLI.
"""

from pathlib import Path
from typing import Optional

import click

from fhir_intake import __version__
from fhir_intake.cli.convert_commands import convert_command, demo_command, validate_command
from fhir_intake.config import load_config
from fhir_intake.i18n import SUPPORTED_LOCALES
from fhir_intake.logging_audit import configure_logging
from fhir_intake.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="fhir-intake")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact PII (names, emails, phone numbers, MRNs) from logs",
)
@click.option(
    "--locale",
    type=click.Choice(SUPPORTED_LOCALES, case_sensitive=False),
    default=None,
    help="Language for messages (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
    locale: Optional[str],
) -> None:
    """FHIR Intake Converter - patient intake to FHIR R4 Patient JSON.

    Validates bilingual (English/Spanish) patient intake records and converts
    them to HL7 FHIR R4 Patient resources.

    Common usage:

        # Validate an intake file
        fhir-intake validate intake.json

        # Convert and save fhir-patient-<date>.json to ./output
        fhir-intake convert intake.json --output output

        # Spanish validation messages
        fhir-intake --locale es convert intake.json --stdout

        # Try it with the built-in demo patient
        fhir-intake demo

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    # CLI flags > config file > defaults
    if locale:
        config_obj.converter.default_locale = locale.lower()

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_pii_setting = redact_pii if redact_pii else config_obj.logging.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )


cli.add_command(convert_command)
cli.add_command(validate_command)
cli.add_command(demo_command)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate_config(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        fhir-intake config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nConverter:")
    click.echo(f"  Locale:          {config_obj.converter.default_locale}")
    click.echo(f"  Filename prefix: {config_obj.converter.filename_prefix}")
    click.echo(f"  Output dir:      {config_obj.converter.output_dir}")

    click.echo("\nLogging:")
    click.echo(f"  Level:       {config_obj.logging.level}")
    click.echo(f"  Log file:    {config_obj.logging.log_file}")
    click.echo(f"  Redact PII:  {config_obj.logging.redact_pii}")


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"fhir-intake version {__version__}")


if __name__ == "__main__":
    cli()
