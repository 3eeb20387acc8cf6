import json
import sys
from pathlib import Path
from typing import Any

import click

from hiera_vault.config.loader import load_lookup_options
from hiera_vault.errors import HieraVaultError
from hiera_vault.lookup import SimpleLookupContext, lookup_key

from .utils import configure_logging, output_error, output_result


def parse_mounts(values: tuple[str, ...]) -> dict[str, list[str]]:
    """Turn repeated ``TYPE=PREFIX`` arguments into a mounts mapping, keeping order."""
    mounts: dict[str, list[str]] = {}
    for value in values:
        backend, sep, prefix = value.partition("=")
        if not sep or not backend or not prefix:
            raise click.BadParameter(f"expected TYPE=PREFIX, got '{value}'", param_hint="--mount")
        mounts.setdefault(backend, []).append(prefix)
    return mounts


def build_options(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge command line overrides over options loaded from file."""
    options = dict(base)
    for name, value in overrides.items():
        if value is None or value == () or value == {}:
            continue
        options[name] = list(value) if isinstance(value, tuple) else value
    return options


@click.command(name="lookup")
@click.argument("key")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML file with lookup options",
)
@click.option("--address", help="Vault address (default: VAULT_ADDR)")
@click.option("--token", help="Vault token or path to a token file (default: VAULT_TOKEN)")
@click.option("--mount", "mounts", multiple=True, help="Mount as TYPE=PREFIX, repeatable, in priority order")
@click.option("--confine", "confine_to_keys", multiple=True, help="Only look up keys matching this regex")
@click.option("--default-field", help="Return only this field of the secret")
@click.option("--default-field-parse", type=click.Choice(["string", "json"]))
@click.option("--default-field-behavior", type=click.Choice(["ignore", "only"]))
@click.option("--explain", is_flag=True, help="Print the lookup trace to stderr")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def lookup(
    key: str,
    config_path: Path | None,
    address: str | None,
    token: str | None,
    mounts: tuple[str, ...],
    confine_to_keys: tuple[str, ...],
    default_field: str | None,
    default_field_parse: str | None,
    default_field_behavior: str | None,
    explain: bool,
    json_output: bool,
    debug: bool,
) -> None:
    """Look up KEY in Vault.

    Options given on the command line override those loaded from the
    options file. Exits with status 1 when the key is not found.

    \b
    Examples:
        hiera-vault lookup db_password --mount kv=puppet
        hiera-vault lookup db_password --config hiera-vault.yaml --json-output
        hiera-vault lookup db_password --default-field value --explain
    """
    configure_logging(debug=debug)

    try:
        options = build_options(
            load_lookup_options(config_path),
            address=address,
            token=token,
            mounts=parse_mounts(mounts),
            confine_to_keys=confine_to_keys,
            default_field=default_field,
            default_field_parse=default_field_parse,
            default_field_behavior=default_field_behavior,
        )
        context = SimpleLookupContext(
            explain_enabled=explain, echo=lambda message: click.echo(message, err=True)
        )
        result = lookup_key(key, options, context)
    except click.ClickException:
        raise
    except (HieraVaultError, OSError, ValueError) as e:
        output_error(e, json_output, debug)
        return

    if context.not_found_count:
        if json_output:
            click.echo(json.dumps({"status": "not_found", "key": key}, indent=2))
        else:
            click.echo(f"Not found: {key}", err=True)
        sys.exit(1)

    output_result(result, json_output)
