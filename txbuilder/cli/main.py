"""
txbuilder.cli.main
==================

`txbuilder` — build and sign ledger transactions from the shell.

Examples
--------
    $ txbuilder version
    $ txbuilder onboard --type ec --name alice --key-out alice.pem
    $ txbuilder build --namespace ns --contract c --input input.json \\
        --signee s1=alice.pem

Configuration
-------------
- Log level : `--log-level` or env `TXB_LOG_LEVEL` (default: WARNING)
- Onboarding namespace/contract and RSA size: env `TXB_*` (see txbuilder.config)
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer

from ..config import BuilderConfig
from ..errors import TxBuilderError
from ..packet.builder import PacketBuilder
from ..tx.builder import TransactionBuilder
from ..tx.signee import Signees
from ..version import __version__
from ..wallet.keys import KeyType, load_key

app = typer.Typer(
    name="txbuilder",
    help="Build, sign and onboard ledger transactions.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main"]

log = logging.getLogger("txbuilder.cli")


def _setup_logging(level: str) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.WARNING),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _fail(msg: str) -> None:
    typer.echo(f"error: {msg}", err=True)
    raise typer.Exit(1)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise typer.BadParameter(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Not valid JSON: {path} ({e})") from e


def _parse_signee(item: str) -> tuple[str, Path]:
    stream_id, sep, path = item.partition("=")
    if not sep or not stream_id or not path:
        raise typer.BadParameter(f"--signee expects STREAM=PEMFILE, got {item!r}")
    return stream_id, Path(path)


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
        envvar="TXB_LOG_LEVEL",
    ),
) -> None:
    cfg = BuilderConfig.from_env()
    if log_level:
        try:
            cfg = BuilderConfig.with_overrides(cfg, log_level=log_level)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
    _setup_logging(cfg.log_level)
    ctx.obj = cfg


@app.command("version")
def version() -> None:
    """Print the package version."""
    typer.echo(f"txbuilder {__version__}")


@app.command("onboard")
def onboard(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Name of the new identity."),
    key_type: str = typer.Option("ec", "--type", "-t", help="Key type: ec | rsa"),
    key_out: Optional[Path] = typer.Option(
        None, "--key-out", help="Write the generated private key PEM here."
    ),
) -> None:
    """Generate a key and print its self-signed onboarding transaction."""
    cfg: BuilderConfig = ctx.obj
    try:
        kind = KeyType.parse(key_type)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    try:
        key, tx = TransactionBuilder.generate_onboard_tx(kind, name, config=cfg)
    except TxBuilderError as e:
        _fail(str(e))

    if key_out is not None:
        key_out.write_text(key.private_pem(), encoding="utf-8")
        log.info("private key written to %s", key_out)
    typer.echo(tx)


@app.command("build")
def build(
    namespace: str = typer.Option(..., "--namespace", help="Target namespace."),
    contract: str = typer.Option(..., "--contract", help="Contract id."),
    input_file: Path = typer.Option(..., "--input", help="JSON file for the $i section."),
    output_file: Optional[Path] = typer.Option(None, "--output", help="JSON file for the $o section."),
    readonly_file: Optional[Path] = typer.Option(None, "--readonly", help="JSON file for the $r section."),
    entry: Optional[str] = typer.Option(None, "--entry", help="Contract entry point."),
    territoriality: Optional[str] = typer.Option(None, "--territoriality", help="Preferred node."),
    selfsign: bool = typer.Option(False, "--selfsign", help="Mark the transaction as self-signed."),
    signee: List[str] = typer.Option([], "--signee", help="STREAM=PEMFILE (repeatable)."),
) -> None:
    """Build and sign a transaction from JSON section files."""
    signees = Signees()
    for item in signee:
        stream_id, path = _parse_signee(item)
        try:
            key = load_key(stream_id, path.read_bytes())
        except FileNotFoundError as e:
            raise typer.BadParameter(f"Key file not found: {path}") from e
        except ValueError as e:
            raise typer.BadParameter(f"Cannot load key {path}: {e}") from e
        signees.add(key, stream_id)

    builder = TransactionBuilder(namespace, contract)
    if entry is not None:
        builder.entry(entry)
    if territoriality is not None:
        builder.territoriality(territoriality)
    if selfsign:
        builder.selfsign()

    try:
        builder.input(PacketBuilder.from_json(_load_json(input_file)).build())
        if output_file is not None:
            builder.output(PacketBuilder.from_json(_load_json(output_file)).build())
        if readonly_file is not None:
            builder.readonly(PacketBuilder.from_json(_load_json(readonly_file)).build())
        tx = builder.build(signees)
    except TxBuilderError as e:
        _fail(str(e))

    typer.echo(tx)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        rc = app(prog_name="txbuilder", standalone_mode=False, args=argv)
        return int(rc or 0)
    except typer.Exit as e:
        return int(e.exit_code)
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
