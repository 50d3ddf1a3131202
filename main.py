#!/usr/bin/env python3.12

import asyncio
import importlib
import pkgutil
import sys
from pathlib import Path

import kayaku
from launart import Launart
from loguru import logger

from utils.logger_patcher import patch as patch_logger

# 在 import 需要 kayaku 的包前需要先初始化 kayaku
kayaku.initialize({"{**}": "./config/{**}"})

# ruff: noqa: E402
from models.command import CommandContext
from models.minecraft import ServerAddress
from services import DebugProbeService, WebhookService
from utils.config import BasicConfig

loop = asyncio.new_event_loop()
asyncio.set_event_loop(loop)
launart = Launart()

for module_dir in Path("func").iterdir():
    if not module_dir.is_dir():
        continue
    for module in pkgutil.iter_modules([str(module_dir)]):
        if module.name.startswith("_"):
            continue
        importlib.import_module(f"{module_dir.parent}.{module_dir.name}.{module.name}")

# import 完各种包之后再启动 kayaku
kayaku.bootstrap()

config = kayaku.create(BasicConfig)
kayaku.save_all()

patch_logger(loop, level="DEBUG" if config.debug else "INFO")

try:
    address = ServerAddress.parse(config.minecraft.host, config.minecraft.port)
except ValueError as e:
    logger.error(f"Invalid Minecraft address in config: {e}")
    sys.exit(1)

ctx = CommandContext(address=address, timeout=config.minecraft.timeout, srv_lookup=config.minecraft.srv_lookup)

launart.add_component(WebhookService(ctx, config.web_host, config.web_port, config.webhook_path))
# 调试模式下立即尝试查询一次
if config.debug:
    launart.add_component(DebugProbeService(ctx))

del config
launart.launch_blocking(loop=loop)
