from models.command import CommandContext, FuncType, SlackMessage
from utils.command import build_metadata, command

from .mcping import format_players, format_status, get_server_status


@command(
    "status",
    meta=build_metadata(
        func_type=FuncType.tool,
        name="Server status",
        version="1.1",
        description="Show the MOTD and player count of the Minecraft server",
        cmd_prefix="status",
        usage=["status"],
        example=[{"run": "status", "to": "*A Minecraft Server* has *3*/20 players on."}],
    ),
)
async def status(msg: SlackMessage, ctx: CommandContext) -> str:
    return format_status(await get_server_status(ctx))


@command(
    "players",
    "who",
    meta=build_metadata(
        func_type=FuncType.tool,
        name="Online players",
        version="1.0",
        description="List the players the server reports as online",
        cmd_prefix="players",
        usage=["players"],
    ),
)
async def players(msg: SlackMessage, ctx: CommandContext) -> str:
    return format_players(await get_server_status(ctx))
