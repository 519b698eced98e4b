"""
Monnayeur CLI.

Usage:
    monnayeur create --name NAME --symbol SYMBOL --bond-mint MINT --keypair PATH
    monnayeur bonds
    monnayeur status [--watch]
    monnayeur balance --owner OWNER --mint MINT
"""

import asyncio
import sys

import click
from solders.pubkey import Pubkey

from monnayeur.application.use_cases import CreateStablecoin
from monnayeur.config.settings import MonnayeurConfig, load_config
from monnayeur.domain.exceptions import MonnayeurException
from monnayeur.domain.value_objects import StablecoinSpec
from monnayeur.infrastructure.blockchain import (
    BalancePrecondition,
    KeypairWalletSigner,
    SolanaRPCClient,
    SubmissionManager,
)
from monnayeur.infrastructure.catalog import BondCatalogClient
from monnayeur.infrastructure.monitoring import ConnectionMonitor
from shared.reporter import SystemReporter

TARGET_CURRENCIES = ["USD", "EUR", "MXN"]


def _reporter(settings: MonnayeurConfig, verbose: int) -> SystemReporter:
    return SystemReporter(
        name="monnayeur",
        log_dir=settings.log_dir,
        level=settings.log_level,
        verbose=verbose,
    )


def _run(coro):
    """Run a command coroutine, turning domain errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except MonnayeurException as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


def _parse_pubkey(value: str, name: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError:
        raise click.BadParameter(
            f"not a valid Solana address: {value}", param_hint=name
        ) from None


@click.group()
@click.option("--config", "-c", default=None, help="Config file (YAML)")
@click.option("--verbose", "-v", count=True, help="Increase verbosity")
@click.pass_context
def cli(ctx, config, verbose):
    """Monnayeur - bond-backed stablecoin creation on Solana."""
    settings = load_config(config)
    ctx.obj = {
        "settings": settings,
        "reporter": _reporter(settings, 1 + verbose),
    }


@cli.command()
@click.option("--name", required=True, help="Stablecoin name")
@click.option("--symbol", required=True, help="Stablecoin ticker symbol")
@click.option(
    "--currency",
    type=click.Choice(TARGET_CURRENCIES, case_sensitive=False),
    default="USD",
    show_default=True,
    help="Target fiat currency",
)
@click.option("--icon-url", default="", help="Icon URL")
@click.option("--bond-mint", required=True, help="Backing bond mint address")
@click.option(
    "--keypair",
    required=True,
    type=click.Path(dir_okay=False),
    help="Wallet keypair JSON file",
)
@click.pass_context
def create(ctx, name, symbol, currency, icon_url, bond_mint, keypair):
    """Create a stablecoin backed by a bond."""
    settings: MonnayeurConfig = ctx.obj["settings"]
    reporter: SystemReporter = ctx.obj["reporter"]

    async def _create():
        spec = StablecoinSpec(
            name=name,
            symbol=symbol,
            decimals=settings.stablecoin_decimals,
            icon_url=icon_url,
            target_currency=currency.upper(),
            bond_mint=bond_mint,
        )
        wallet = KeypairWalletSigner.from_file(keypair)

        async with SolanaRPCClient(settings=settings, reporter=reporter) as rpc:
            timeouts = settings.resilience.timeouts
            use_case = CreateStablecoin(
                rpc=rpc,
                wallet_signer=wallet,
                program=settings.program_config(),
                submission_manager=SubmissionManager(
                    rpc,
                    commitment=settings.commitment,
                    poll_interval=timeouts.confirmation_poll_interval,
                    timeout=timeouts.transaction_confirmation,
                    reporter=reporter,
                ),
                max_attempts=settings.max_creation_attempts,
                reporter=reporter,
            )
            result = await use_case.execute(spec)

        click.echo(f"Stablecoin mint:  {result.stablecoin_mint}")
        click.echo(f"Stablecoin data:  {result.stablecoin_data}")
        click.echo(f"Signature:        {result.signature}")
        click.echo(f"Attempts:         {result.attempts}")

    _run(_create())


@cli.command()
@click.pass_context
def bonds(ctx):
    """List bonds available as collateral."""
    settings: MonnayeurConfig = ctx.obj["settings"]
    reporter: SystemReporter = ctx.obj["reporter"]

    async def _bonds():
        async with BondCatalogClient(
            settings.bond_catalog_url,
            timeout=settings.resilience.timeouts.catalog_call,
            reporter=reporter,
        ) as catalog:
            items = await catalog.list_bonds()

        if not items:
            click.echo("No bonds available")
            return
        for bond in items:
            click.echo(f"{bond.symbol:<8} {bond.name:<32} {bond.mint}")

    _run(_bonds())


@cli.command()
@click.option("--watch", is_flag=True, help="Keep checking every interval")
@click.option("--interval", default=10.0, show_default=True, help="Seconds")
@click.pass_context
def status(ctx, watch, interval):
    """Check RPC connection status."""
    settings: MonnayeurConfig = ctx.obj["settings"]
    reporter: SystemReporter = ctx.obj["reporter"]

    async def _status():
        async with SolanaRPCClient(settings=settings) as rpc:
            monitor = ConnectionMonitor(
                rpc, endpoint=settings.rpc_url, reporter=reporter
            )
            if watch:
                async for check in monitor.watch(interval):
                    click.echo(f"{check.status.value}: {check.message}")
                return True

            check = await monitor.check()

        click.echo(f"{settings.solana_network}: {check.message}")
        return check.is_healthy

    if not _run(_status()):
        sys.exit(1)


@cli.command()
@click.option("--owner", required=True, help="Wallet address")
@click.option("--mint", required=True, help="Bond mint address")
@click.pass_context
def balance(ctx, owner, mint):
    """Show how much of a bond a wallet holds (raw units)."""
    settings: MonnayeurConfig = ctx.obj["settings"]
    owner_key = _parse_pubkey(owner, "--owner")
    mint_key = _parse_pubkey(mint, "--mint")

    async def _balance():
        async with SolanaRPCClient(settings=settings) as rpc:
            amount = await BalancePrecondition(rpc).check_balance(owner_key, mint_key)
        click.echo(str(amount))

    _run(_balance())


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
