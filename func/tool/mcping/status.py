import json
import math
import re
from dataclasses import dataclass
from typing import Any

from .exceptions import StatusDecodeError, StatusSchemaError

FORMATTING_CODE = re.compile("§.", re.DOTALL)


@dataclass(frozen=True)
class StatusResponse:
    protocol_version: int
    server_version: str
    motd: str
    online_players: int
    max_players: int
    player_names: tuple[str, ...] = ()


def strip_formatting(text: str) -> str:
    return FORMATTING_CODE.sub("", text)


def _get(obj: dict[str, Any], path: str) -> Any:
    node: Any = obj
    walked = []
    for key in path.split("."):
        walked.append(key)
        if not isinstance(node, dict):
            raise StatusSchemaError(".".join(walked[:-1]), "expected an object")
        if key not in node:
            raise StatusSchemaError(".".join(walked), "missing")
        node = node[key]
    return node


def _get_count(obj: dict[str, Any], path: str) -> int:
    value = _get(obj, path)
    # bool 是 int 的子类，需要单独排除
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise StatusSchemaError(path, f"expected a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise StatusSchemaError(path, "expected a finite number")
    if value < 0:
        raise StatusSchemaError(path, f"expected a non-negative number, got {value}")
    return int(value)


def _get_str(obj: dict[str, Any], path: str) -> str:
    value = _get(obj, path)
    if not isinstance(value, str):
        raise StatusSchemaError(path, f"expected a string, got {type(value).__name__}")
    return value


def _get_description(obj: dict[str, Any]) -> str:
    desc = _get(obj, "description")
    if isinstance(desc, str):
        return desc
    if isinstance(desc, dict) and isinstance(desc.get("text"), str):
        # 新版本服务端使用聊天组件，extra 中的文本拼接在 text 之后
        extra = desc.get("extra")
        parts = [desc["text"]]
        if isinstance(extra, list):
            for component in extra:
                if isinstance(component, str):
                    parts.append(component)
                elif isinstance(component, dict) and isinstance(component.get("text"), str):
                    parts.append(component["text"])
        return "".join(parts)
    raise StatusSchemaError("description", "expected a string or an object with a text field")


def _get_player_names(obj: dict[str, Any]) -> tuple[str, ...]:
    sample = obj["players"].get("sample")
    if not isinstance(sample, list):
        return ()
    return tuple(
        player["name"] for player in sample if isinstance(player, dict) and isinstance(player.get("name"), str)
    )


def _reject_constant(name: str) -> float:
    # NaN、Infinity 不是标准 JSON
    msg = f"status payload contains non-standard constant {name}"
    raise StatusDecodeError(msg)


def decode_status(data: bytes | str) -> StatusResponse:
    try:
        status = json.loads(data, parse_constant=_reject_constant)
    except UnicodeDecodeError as e:
        msg = f"status payload is not valid UTF-8: {e}"
        raise StatusDecodeError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"status payload is not valid JSON: {e}"
        raise StatusDecodeError(msg) from e
    except RecursionError as e:
        msg = "status payload is nested too deeply"
        raise StatusDecodeError(msg) from e

    if not isinstance(status, dict):
        raise StatusSchemaError("$", "expected an object")

    return StatusResponse(
        protocol_version=_get_count(status, "version.protocol"),
        server_version=_get_str(status, "version.name"),
        motd=_get_description(status),
        online_players=_get_count(status, "players.online"),
        max_players=_get_count(status, "players.max"),
        player_names=_get_player_names(status),
    )
