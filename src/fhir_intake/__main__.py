"""Entry point for running fhir_intake as a module.

This allows the package to be executed as:
    python -m fhir_intake
"""

from fhir_intake.cli.main import cli

if __name__ == "__main__":
    cli()
