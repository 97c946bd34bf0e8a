"""Server configuration loaded from an XML file."""

from __future__ import annotations

import re
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ConfigError(Exception):
    """Raised when the configuration cannot be read."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _stoi(name: str, text: str) -> int:
    match = _LEADING_INT.match(text)
    if not match:
        raise ConfigError(f"invalid integer value [{text}] for node [{name}]")
    return int(match.group(1))


def _child(parent: ET.Element, name: str) -> ET.Element:
    node = parent.find(name)
    if node is None:
        raise ConfigError(f"failed to read node[{name}]")
    return node


def _text(parent: ET.Element, name: str) -> str:
    node = parent.find(name)
    text = node.text.strip() if node is not None and node.text else ""
    if not text:
        raise ConfigError(f"failed to read config file {name}")
    return text


@dataclass
class Config:
    """Logging and server settings."""

    log_level: str = "DEBUG"
    log_file_name: str = ""
    log_file_path: str = ""
    log_max_file_size: int = 0
    log_sync_interval: int = 0
    port: int = 0
    io_threads: int = 0
    ip: str = ""

    @classmethod
    def from_xml(cls, path: str | Path) -> "Config":
        """Read the configuration from an XML document whose root is <root>."""
        try:
            tree = ET.parse(path)
        except (OSError, ET.ParseError) as exc:
            raise ConfigError(
                f"failed to read config file {path}, error info [{exc}]"
            ) from exc

        root = tree.getroot()
        if root.tag != "root":
            raise ConfigError("failed to read node[root]")
        log_node = _child(root, "log")
        server_node = _child(root, "server")

        config = cls(
            log_level=_text(log_node, "log_level"),
            log_file_name=_text(log_node, "log_file_name"),
            log_file_path=_text(log_node, "log_file_path"),
            log_max_file_size=_stoi(
                "log_max_file_size", _text(log_node, "log_max_file_size")
            ),
            log_sync_interval=_stoi(
                "log_sync_interval", _text(log_node, "log_sync_interval")
            ),
        )
        print(
            f"LOG -- CONFIG LEVEL[{config.log_level}], "
            f"FILE_NAME[{config.log_file_name}], "
            f"FILE_PATH[{config.log_file_path}] "
            f"MAX_FILE_SIZE[{config.log_max_file_size}], "
            f"LOG_SYNC_INTERVAL[{config.log_sync_interval} ms]"
        )

        port_text = _text(server_node, "port")
        io_threads_text = _text(server_node, "io_threads")
        config.ip = _text(server_node, "ip")
        config.port = _atoi(port_text)
        config.io_threads = _atoi(io_threads_text)
        print(f"Server -- PORT[{config.port}], IO_THREADS[{config.io_threads}]")
        return config


_global_config: Config | None = None
_global_lock = threading.Lock()


def get_global_config() -> Config | None:
    """Return the process-wide configuration, or None if not yet set."""
    return _global_config


def set_global_config(xmlfile: str | Path | None) -> Config:
    """Set the process-wide configuration once; later calls keep the first."""
    global _global_config
    with _global_lock:
        if _global_config is None:
            _global_config = Config.from_xml(xmlfile) if xmlfile is not None else Config()
        return _global_config