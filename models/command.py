from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from models.minecraft import ServerAddress


class FuncType(str, Enum):
    core = "core"
    tool = "tool"
    admin = "admin"


@dataclass
class FuncItem:
    func_type: FuncType
    name: str
    version: str
    description: str
    cmd_prefix: str
    usage: list[str] = field(default_factory=list)
    example: list[dict[str, str]] = field(default_factory=list)
    hidden: bool = False


@dataclass
class SlackMessage:
    channel_name: str
    user_name: str
    user_id: str
    text: str
    trigger: str = ""
    timestamp: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "SlackMessage":
        trigger = form.get("trigger_word", "")
        text = form.get("text", "").removeprefix(trigger).strip()
        return cls(
            channel_name=form.get("channel_name", ""),
            user_name=form.get("user_name", ""),
            user_id=form.get("user_id", ""),
            text=text,
            trigger=trigger,
            timestamp=form.get("timestamp", ""),
        )


@dataclass(frozen=True)
class CommandContext:
    address: ServerAddress
    timeout: float = 5
    srv_lookup: bool = False
