import logging
from pathlib import Path
from typing import Dict

import pytest

# Sample documents shared across tests
SAMPLE_TOML = """\
# Global title
title = "Example"
enabled = true

# Server settings
[server]

# Listening port
port = 25565
motd = "A Minecraft Server # not a comment"
tags = ["survival", "pvp"]
ratio = 0.75 # load factor

[server.limits]
players = 20
"""

SAMPLE_YAML = """\
# Plugin settings
name: MyPlugin
version: 1.5
debug: off

database:
  # Connection host
  host: localhost
  port: 3306
  options:
    ssl: yes

worlds:
  - world
  - world_nether

motd: "Welcome: friend"
"""

SAMPLE_JSON = """\
{
  // Display name
  "name": "modpack",
  "limits": {
    // Max players
    "max": 20,
    "min": 1,
  },
  "mods": [
    {
      // Mod identifier
      "id": "jei"
    }
  ]
}
"""

SAMPLE_PROPERTIES = """\
#Minecraft server properties
server-port=25565
motd:A Minecraft Server
online-mode=true
view-distance = 10
level-name=world
"""

CONFIG_FILES: Dict[str, str] = {
    "server.properties": SAMPLE_PROPERTIES,
    "mods/modpack.json": SAMPLE_JSON,
    "mods/sodium.toml": SAMPLE_TOML,
    "plugins/MyPlugin/config.yml": SAMPLE_YAML,
    "notes.txt": "free text",
    "logs/latest.log": "not a config file",
}


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Configure logging for tests"""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s [%(levelname)s] %(message)s'
    )


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """Create a config folder with one file per supported format"""
    root = tmp_path / "config"
    for relative_path, content in CONFIG_FILES.items():
        file_path = root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    return root
