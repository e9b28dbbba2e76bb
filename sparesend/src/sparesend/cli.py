"""
Command-line interface for spare-send.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Annotated

import httpx
import typer
from loguru import logger
from sparecore.models import NetworkType, Tier
from sparewallet.backends.base import WalletBackend, WalletRpcError
from sparewallet.backends.wallet_rpc import WalletRpcBackend

from sparesend.config import SendConfig, get_settings
from sparesend.display import (
    TIER_LABELS,
    format_fee_quote,
    format_total_spend,
    info_message,
)
from sparesend.errors import SendFlowError
from sparesend.session import SendSession

app = typer.Typer(
    name="spare-send",
    help="Prepare and send wallet transactions with a chosen fee tier",
    add_completion=False,
)


def setup_logging(level: str) -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def create_backend(config: SendConfig) -> WalletBackend:
    return WalletRpcBackend(
        rpc_url=config.rpc_url,
        cert_path=config.rpc_cert,
        key_path=config.rpc_key,
        verify=config.verify_tls,
        timeout=config.rpc_timeout,
    )


def show_dialog(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def build_config(
    wallet_id: int | None,
    rpc_url: str | None,
    cert: str | None,
    key: str | None,
    network: str | None,
) -> SendConfig:
    """Merge command-line options over settings from the environment / .env."""
    settings = get_settings()
    config = settings.to_send_config()
    overrides: dict[str, object] = {}
    if wallet_id is not None:
        overrides["wallet_id"] = wallet_id
    if rpc_url:
        overrides["rpc_url"] = rpc_url
    if cert:
        overrides["rpc_cert"] = cert
    if key:
        overrides["rpc_key"] = key
    if network:
        overrides["network"] = NetworkType(network)
        overrides["currency_code"] = None
    if not overrides:
        return config
    return SendConfig(**{**config.model_dump(), **overrides})


def render_tiers(session: SendSession, currency_code: str) -> list[str]:
    """Lines describing every tier and the total spend of the selected one."""
    lines: list[str] = []
    message = info_message(session.form.address, session.is_synced)
    if message:
        lines.append(message)

    fee_tiers = session.fee_tiers
    shown = list(Tier) if session.selected_tier == Tier.CUSTOM else [
        Tier.SHORT,
        Tier.MEDIUM,
        Tier.LONG,
    ]
    for tier in shown:
        quote = fee_tiers.get(tier) if fee_tiers else None
        marker = "*" if session.selected_tier == tier else " "
        value = format_fee_quote(
            quote, currency_code, loading=session.loading, disabled=not session.can_select
        )
        lines.append(f"{marker} {TIER_LABELS[tier]:<20} {value}")

    if fee_tiers is not None:
        lines.append(
            format_total_spend(
                session.form.amount, fee_tiers, session.selected_tier, currency_code
            )
        )
    return lines


async def _prepare(
    backend: WalletBackend,
    config: SendConfig,
    address: str,
    amount: str,
    fee: str | None,
    tier: Tier | None,
) -> SendSession:
    session = await SendSession.start(backend, config.wallet_id, dialog_handler=show_dialog)
    if not session.set_inputs(address, amount, fee or "", tier) and tier is not None:
        logger.warning(f"Tier {tier.value} cannot be selected yet")
    await session.wait_settled()
    return session


async def _run_quote(
    config: SendConfig, address: str, amount: str, fee: str | None, tier: Tier | None
) -> list[str]:
    backend = create_backend(config)
    try:
        session = await _prepare(backend, config, address, amount, fee, tier)
        if session.coordinator.error is not None:
            raise session.coordinator.error
        return render_tiers(session, config.currency_code or config.network.currency_code)
    finally:
        await backend.close()


async def _run_send(
    config: SendConfig,
    address: str,
    amount: str,
    fee: str | None,
    tier: Tier,
    assume_yes: bool,
) -> str | None:
    backend = create_backend(config)
    try:
        session = await _prepare(backend, config, address, amount, fee, tier)
        if session.coordinator.error is not None:
            raise session.coordinator.error
        currency_code = config.currency_code or config.network.currency_code
        for line in render_tiers(session, currency_code):
            typer.echo(line)
        if not assume_yes and not typer.confirm("Send this transaction?"):
            return None
        result = await session.submit()
        return result.tx_id or ""
    finally:
        await backend.close()


WalletIdOption = Annotated[
    int | None, typer.Option("--wallet-id", "-w", help="Wallet id (default from WALLET_ID)")
]
RpcUrlOption = Annotated[
    str | None, typer.Option("--rpc-url", help="Wallet RPC URL (default from WALLET_RPC_URL)")
]
CertOption = Annotated[str | None, typer.Option("--cert", help="Client TLS certificate")]
KeyOption = Annotated[str | None, typer.Option("--key", help="Client TLS private key")]
NetworkOption = Annotated[str | None, typer.Option("--network", help="mainnet | testnet")]
FeeOption = Annotated[
    str | None, typer.Option("--fee", help="Custom fee in coins (used with --tier custom)")
]
LogLevelOption = Annotated[str, typer.Option("--log-level", "-l", help="Log level")]


@app.command()
def quote(
    address: Annotated[str, typer.Argument(help="Recipient address or 0x puzzle hash")],
    amount: Annotated[str, typer.Argument(help="Amount in coins")],
    tier: Annotated[
        Tier | None, typer.Option("--tier", "-t", help="Tier to show the total spend for")
    ] = None,
    fee: FeeOption = None,
    wallet_id: WalletIdOption = None,
    rpc_url: RpcUrlOption = None,
    cert: CertOption = None,
    key: KeyOption = None,
    network: NetworkOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show the fee tiers available for sending AMOUNT to ADDRESS."""
    setup_logging(log_level)
    try:
        config = build_config(wallet_id, rpc_url, cert, key, network)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    try:
        lines = asyncio.run(_run_quote(config, address, amount, fee, tier))
    except SendFlowError as e:
        if not e.is_blocking:
            typer.secho(e.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except (WalletRpcError, httpx.HTTPError) as e:
        logger.error(f"Wallet unavailable: {e}")
        raise typer.Exit(1)

    for line in lines:
        typer.echo(line)


@app.command()
def send(
    address: Annotated[str, typer.Argument(help="Recipient address or 0x puzzle hash")],
    amount: Annotated[str, typer.Argument(help="Amount in coins")],
    tier: Annotated[Tier, typer.Option("--tier", "-t", help="Fee tier to send with")],
    fee: FeeOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
    wallet_id: WalletIdOption = None,
    rpc_url: RpcUrlOption = None,
    cert: CertOption = None,
    key: KeyOption = None,
    network: NetworkOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Prepare AMOUNT to ADDRESS with the chosen fee tier and send it."""
    setup_logging(log_level)
    try:
        config = build_config(wallet_id, rpc_url, cert, key, network)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    try:
        tx_id = asyncio.run(_run_send(config, address, amount, fee, tier, yes))
    except SendFlowError as e:
        if not e.is_blocking:
            typer.secho(e.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except (WalletRpcError, httpx.HTTPError) as e:
        logger.error(f"Send failed: {e}")
        raise typer.Exit(1)

    if tx_id is None:
        typer.echo("Aborted")
        raise typer.Exit(1)
    typer.echo(f"Transaction sent: {tx_id}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
