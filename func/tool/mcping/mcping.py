import asyncio
import contextlib

import aiodns
from aiodns.error import DNSError
from loguru import logger

from models.command import CommandContext
from models.minecraft import ServerAddress

from .status import StatusResponse, strip_formatting
from .statusping import fetch_status


async def srv_dns_resolver(host: str) -> ServerAddress | None:
    resolver = aiodns.DNSResolver()
    with contextlib.suppress(DNSError):
        srv_records = await resolver.query(f"_minecraft._tcp.{host}", "SRV")
        if srv_records:
            return ServerAddress(srv_records[0].host, srv_records[0].port)
    return None


async def resolve_address(ctx: CommandContext) -> ServerAddress:
    if not ctx.srv_lookup:
        return ctx.address
    if srv_address := await srv_dns_resolver(ctx.address.host):
        logger.debug(f"[Func.mcping] SRV record {ctx.address.host} -> {srv_address}")
        return srv_address
    return ctx.address


async def get_server_status(ctx: CommandContext) -> StatusResponse:
    address = await resolve_address(ctx)
    # 协议客户端是阻塞的，放到线程里执行
    status = await asyncio.to_thread(fetch_status, address, ctx.timeout)
    logger.debug(f"[Func.mcping] {address}: {status}")
    return status


def format_status(status: StatusResponse) -> str:
    motd = strip_formatting(status.motd).strip()
    return f"*{motd}* has *{status.online_players}*/{status.max_players} players on."


def format_players(status: StatusResponse) -> str:
    if not status.online_players:
        return "Nobody is online right now."
    if not status.player_names:
        return f"{status.online_players} players are online, but the server does not share their names."
    names = ", ".join(strip_formatting(name) for name in status.player_names)
    hidden = status.online_players - len(status.player_names)
    if hidden > 0:
        return f"Online: {names} and {hidden} more."
    return f"Online: {names}."
