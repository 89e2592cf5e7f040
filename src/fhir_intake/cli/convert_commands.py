"""Conversion CLI commands for the FHIR Intake Converter.

This module provides the validate, convert and demo commands.
"""

import json as json_lib
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fhir_intake.config.schema import Config
from fhir_intake.converter import IntakeConverter
from fhir_intake.fhir.mapper import FHIR_VERSION
from fhir_intake.i18n import SUPPORTED_LOCALES, field_label, gender_label, get_message
from fhir_intake.intake.loader import demo_intake, load_intake
from fhir_intake.intake.validator import validate
from fhir_intake.logging_audit import PIIRedactingFormatter, get_logger
from fhir_intake.models.intake import FlatIntake
from fhir_intake.utils.exceptions import ExportError, ValidationError

logger = get_logger(__name__)

locale_option = click.option(
    "--locale",
    type=click.Choice(SUPPORTED_LOCALES, case_sensitive=False),
    default=None,
    help="Language for validation messages (default: configured locale)",
)


def _get_config(ctx: click.Context) -> Config:
    obj = ctx.find_object(dict) or {}
    return obj.get("config") or Config()


def _silence_console_logging() -> Optional[tuple[logging.Handler, int]]:
    """Disable the console log handler so stdout carries only JSON."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler.formatter, PIIRedactingFormatter) and not isinstance(
            handler, logging.FileHandler
        ):
            original_level = handler.level
            handler.setLevel(logging.CRITICAL + 1)
            return handler, original_level
    return None


def _run_conversion(
    ctx: click.Context,
    intake: FlatIntake,
    locale: Optional[str],
    output: Optional[Path],
    to_stdout: bool,
) -> None:
    config = _get_config(ctx)
    converter = IntakeConverter(config)
    locale = (locale or config.converter.default_locale).lower()

    outcome = converter.convert(intake, locale=locale)
    if not outcome.is_success:
        click.secho(outcome.validation.format_report(), fg="red", err=True)
        logger.error("Conversion failed with validation errors")
        sys.exit(1)

    record = outcome.record
    if to_stdout:
        click.echo(converter.export_json())
    else:
        click.secho(get_message("output_title", locale), fg="green", bold=True)
        click.echo(f"  {get_message('meta_resource', locale)} {record['resourceType']}")
        click.echo(f"  {get_message('meta_standard', locale)} R4 (v{FHIR_VERSION})")
        click.echo(f"  {get_message('meta_timestamp', locale)} {record.last_updated}")
        click.echo(f"  ID: {record.record_id}")
        click.echo(f"  MRN: {record.mrn}")
        click.echo(f"  {field_label('gender', locale)}: {gender_label(record['gender'], locale)}")

    if output is not None or not to_stdout:
        try:
            path = converter.download(output)
        except ExportError as e:
            click.secho(f"{get_message('error_export', locale)}: {e}", fg="red", err=True)
            sys.exit(1)
        click.echo(f"{get_message('success_download', locale)} {path}", err=to_stdout)


@click.command("convert")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: configured output_dir)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the FHIR JSON to stdout")
@locale_option
@click.pass_context
def convert_command(
    ctx: click.Context,
    file: Path,
    output: Optional[Path],
    to_stdout: bool,
    locale: Optional[str],
) -> None:
    """Convert a patient intake JSON file to a FHIR R4 Patient resource.

    The intake file is a JSON object keyed by form field names (firstName,
    lastName, dob, gender, phone, email, addressLine, city, state, postalCode,
    emergencyName, emergencyRelationship, emergencyPhone).

    With --stdout the JSON is printed and only written to disk when --output
    is also given. Exits with code 1 on validation or export errors.

    Examples:

        # Convert and write output/fhir-patient-<date>.json
        fhir-intake convert intake.json

        # Print JSON only
        fhir-intake convert intake.json --stdout

        # Spanish messages, custom output directory
        fhir-intake convert intake.json --locale es --output exports
    """
    silenced = _silence_console_logging() if to_stdout else None
    try:
        intake = load_intake(file)
        _run_conversion(ctx, intake, locale, output, to_stdout)
    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(1)
    finally:
        if silenced:
            handler, original_level = silenced
            handler.setLevel(original_level)


@click.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@locale_option
@click.pass_context
def validate_command(
    ctx: click.Context, file: Path, json_output: bool, locale: Optional[str]
) -> None:
    """Validate a patient intake JSON file without converting it.

    Checks required fields (first name, last name, date of birth, gender) and
    the format of email and phone numbers. Exits with code 0 when valid,
    code 1 otherwise.

    Examples:

        fhir-intake validate intake.json

        fhir-intake validate intake.json --json --locale es
    """
    config = _get_config(ctx)
    locale = (locale or config.converter.default_locale).lower()

    silenced = _silence_console_logging() if json_output else None
    try:
        intake = load_intake(file)
        result = validate(intake, locale=locale)
    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(1)
    finally:
        if silenced:
            handler, original_level = silenced
            handler.setLevel(original_level)

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif result.is_valid:
        click.secho(result.format_report(), fg="green")
    else:
        click.secho(result.format_report(), fg="red", err=True)

    sys.exit(0 if result.is_valid else 1)


@click.command("demo")
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write the record to this directory",
)
@locale_option
@click.pass_context
def demo_command(ctx: click.Context, output: Optional[Path], locale: Optional[str]) -> None:
    """Convert the built-in synthetic demo patient and print the FHIR JSON."""
    silenced = _silence_console_logging()
    try:
        _run_conversion(ctx, demo_intake(), locale, output, to_stdout=True)
    finally:
        if silenced:
            handler, original_level = silenced
            handler.setLevel(original_level)
