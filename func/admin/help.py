from models.command import CommandContext, FuncItem, FuncType, SlackMessage
from utils.command import build_metadata, command, get_command, list_commands


@command(
    "help",
    meta=build_metadata(
        func_type=FuncType.core,
        name="Help",
        version="1.4",
        description="List the available commands",
        cmd_prefix="help",
        usage=["help", "help <command>"],
        example=[{"run": "help status", "to": "Show how to use the status command"}],
    ),
)
async def main_menu(msg: SlackMessage, ctx: CommandContext) -> str:
    """
    显示指令列表，指定指令时显示该指令的详细帮助信息
    """
    _, _, func_want = msg.text.partition(" ")
    if func_want := func_want.strip():
        cmd = get_command(func_want)
        if cmd is None or cmd.meta.hidden:
            return f"No command named “{func_want}”."
        return describe(cmd.meta)

    func_list = [cmd.meta for cmd in list_commands() if not cmd.meta.hidden]
    # 按照功能类型和指令排序
    func_list.sort(key=lambda meta: (meta.func_type.value, meta.cmd_prefix))
    lines = [f"`{meta.cmd_prefix}` {meta.description}" for meta in func_list]
    lines.append("Send `help <command>` for details.")
    return "Available commands:\n" + "\n".join(lines)


def describe(meta: FuncItem) -> str:
    help_str = f"*{meta.name}* v{meta.version}\n{meta.description}"
    if meta.usage:
        help_str += "\nUsage:\n" + "\n".join(f"• `{usage}`" for usage in meta.usage)
    if meta.example:
        help_str += "\nExample:\n" + "\n".join(f"• `{example['run']}`: {example['to']}" for example in meta.example)
    return help_str
