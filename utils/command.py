from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from models.command import CommandContext, FuncItem, FuncType, SlackMessage

Handler = Callable[[SlackMessage, CommandContext], Awaitable[str]]


@dataclass
class Command:
    names: tuple[str, ...]
    meta: FuncItem
    handler: Handler


_commands: dict[str, Command] = {}


def build_metadata(
    func_type: FuncType,
    name: str,
    version: str,
    description: str,
    cmd_prefix: str,
    usage: list[str] | None = None,
    example: list[dict[str, str]] | None = None,
    hidden: bool = False,
) -> FuncItem:
    return FuncItem(
        func_type=func_type,
        name=name,
        version=version,
        description=description,
        cmd_prefix=cmd_prefix,
        usage=usage or [],
        example=example or [],
        hidden=hidden,
    )


def command(*names: str, meta: FuncItem) -> Callable[[Handler], Handler]:
    """注册一个指令，names 为触发词（不区分大小写）"""

    def wrapper(handler: Handler) -> Handler:
        cmd = Command(tuple(name.lower() for name in names), meta, handler)
        for name in cmd.names:
            if name in _commands:
                msg = f"command {name!r} is already registered by {_commands[name].meta.name}"
                raise ValueError(msg)
            _commands[name] = cmd
        logger.debug(f"[Core.command] Registered {meta.name}: {', '.join(cmd.names)}")
        return handler

    return wrapper


def get_command(name: str) -> Command | None:
    return _commands.get(name.lower())


def list_commands() -> list[Command]:
    # 同一个指令可能有多个触发词，按注册顺序去重
    seen: list[Command] = []
    for cmd in _commands.values():
        if cmd not in seen:
            seen.append(cmd)
    return seen


async def dispatch(msg: SlackMessage, ctx: CommandContext) -> str:
    name = msg.text.split(maxsplit=1)[0] if msg.text else ""
    cmd = get_command(name)
    if cmd is None:
        text = f"The term “{msg.text}” is not a known command."
    else:
        logger.info(f"[Core.command] {msg.user_name}@{msg.channel_name} -> {cmd.meta.name}")
        text = await cmd.handler(msg, ctx)
    return f"{msg.user_name}: {text}"
