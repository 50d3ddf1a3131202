from dataclasses import dataclass, field

from kayaku import config


@dataclass
class MinecraftConfig:
    host: str = "localhost"
    """Minecraft 服务器地址，可写成 host:port，此时忽略 port"""
    port: int = 25565
    timeout: float = 5.0
    """单次查询的总超时（秒），包含连接、发送和读取"""
    srv_lookup: bool = False
    """是否先查询 _minecraft._tcp SRV 记录"""


@config("main")
class BasicConfig:
    debug: bool = False
    """是否启用调试模式，启动时会立即查询一次服务器状态"""
    web_host: str = "0.0.0.0"  # noqa: S104
    web_port: int = 8080
    webhook_path: str = "/jack/"
    """Webhook 的 URL 路径"""
    minecraft: MinecraftConfig = field(default_factory=MinecraftConfig)
    """Minecraft 服务器配置"""
