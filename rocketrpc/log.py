"""Buffered logging with background file writers."""

from __future__ import annotations

import os
import sys
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import BinaryIO

from rocketrpc.config import Config, ConfigError, get_global_config
from rocketrpc.runtime import get_run_time
from rocketrpc.util import get_pid, get_thread_id


class LogLevel(IntEnum):
    DEBUG = 1
    INFO = 2
    ERROR = 3
    UNKNOWN = 4


_LEVEL_NAMES = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.ERROR: "ERROR",
}
_NAME_LEVELS = {name: level for level, name in _LEVEL_NAMES.items()}


def log_level_to_string(level: LogLevel) -> str:
    """Return the name of a level, or "UNKNOWN"."""
    return _LEVEL_NAMES.get(level, "UNKNOWN")


def string_to_log_level(level: str) -> LogLevel:
    """Parse a level name; anything unrecognised is UNKNOWN."""
    return _NAME_LEVELS.get(level, LogLevel.UNKNOWN)


@dataclass
class LogEvent:
    """The prefix of one log line."""

    level: LogLevel

    def to_string(self) -> str:
        now = datetime.now()
        stamp = f"{now.strftime('%y-%m-%d %H:%M:%S')}.{now.microsecond // 1000}"
        parts = [
            f"[{log_level_to_string(self.level)}]\t",
            f"[{stamp}]\t",
            f"[{get_pid()}:{get_thread_id()}]\t",
        ]
        run_time = get_run_time()
        if run_time.msg_id:
            parts.append(f"[{run_time.msg_id}]\t")
        if run_time.method_name:
            parts.append(f"[{run_time.method_name}]\t")
        return "".join(parts)


class AsyncLogger:
    """Writes batches of lines to dated, size-rotated files on its own thread.

    Files are named <path><name>_<YYYYMMDD>_log.<n>.
    """

    def __init__(self, file_name: str, file_path: str, max_file_size: int) -> None:
        self.file_name = file_name
        self.file_path = file_path
        self.max_file_size = max_file_size
        self._queue: deque[list[str]] = deque()
        self._cond = threading.Condition()
        self._stopped = False
        self._date = ""
        self._file: BinaryIO | None = None
        self._no = 0
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def push_log_buffer(self, lines: list[str]) -> None:
        """Queue a batch of lines and wake the writer."""
        with self._cond:
            self._queue.append(list(lines))
            self._cond.notify()

    def stop(self) -> None:
        """Write whatever is queued, then end the writer thread."""
        with self._cond:
            self._stopped = True
            self._cond.notify()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def flush(self) -> None:
        """Flush the current file to disk."""
        if self._file is not None:
            self._file.flush()

    def _file_name(self, date: str) -> str:
        return f"{self.file_path}{self.file_name}_{date}_log.{self._no}"

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._queue and not self._stopped:
                    self._cond.wait()
                if not self._queue:
                    break
                lines = self._queue.popleft()
            self._write(lines)
        if self._file is not None:
            self._file.close()
            self._file = None

    def _write(self, lines: list[str]) -> None:
        date = datetime.now().strftime("%Y%m%d")
        reopen = self._file is None
        if date != self._date:
            self._no = 0
            self._date = date
            reopen = True
        if reopen:
            if self._file is not None:
                self._file.close()
            self._file = open(self._file_name(date), "ab")
        if self._file.tell() > self.max_file_size:
            self._file.close()
            self._no += 1
            self._file = open(self._file_name(date), "ab")
        for line in lines:
            if line:
                self._file.write(line.encode("utf-8"))
        self._file.flush()


class Logger:
    """Collects log lines and hands them to file writers periodically.

    With log_type 0 lines go straight to standard output instead.
    """

    def __init__(self, level: LogLevel, log_type: int = 1, config: Config | None = None) -> None:
        self.level = LogLevel(level)
        self.log_type = log_type
        self._lock = threading.Lock()
        self._app_lock = threading.Lock()
        self._buffer: list[str] = []
        self._app_buffer: list[str] = []
        self._sync_stop = threading.Event()
        self._sync_thread: threading.Thread | None = None
        self._async_logger: AsyncLogger | None = None
        self._async_app_logger: AsyncLogger | None = None
        self._config = config
        if log_type == 0:
            return
        cfg = config or get_global_config()
        if cfg is None:
            raise ConfigError("global config is not set")
        self._config = cfg
        self._async_logger = AsyncLogger(
            cfg.log_file_name + "_rpc", cfg.log_file_path, cfg.log_max_file_size
        )
        self._async_app_logger = AsyncLogger(
            cfg.log_file_name + "_app", cfg.log_file_path, cfg.log_max_file_size
        )

    @staticmethod
    def _print(msg: str) -> None:
        sys.stdout.write(msg if msg.endswith("\n") else msg + "\n")

    def push_log(self, msg: str) -> None:
        if self.log_type == 0:
            self._print(msg)
            return
        with self._lock:
            self._buffer.append(msg)

    def push_app_log(self, msg: str) -> None:
        if self.log_type == 0:
            self._print(msg)
            return
        with self._app_lock:
            self._app_buffer.append(msg)

    def init(self) -> None:
        """Start moving buffered lines to the writers every sync interval."""
        if self.log_type == 0 or self._sync_thread is not None:
            return
        interval = max(self._config.log_sync_interval / 1000, 0.01)
        self._sync_stop.clear()
        self._sync_thread = threading.Thread(
            target=self._sync_forever, args=(interval,), daemon=True
        )
        self._sync_thread.start()

    def _sync_forever(self, interval: float) -> None:
        while not self._sync_stop.wait(interval):
            self.sync_loop()

    def sync_loop(self) -> None:
        """Hand everything buffered so far to the file writers."""
        with self._lock:
            lines, self._buffer = self._buffer, []
        if lines and self._async_logger is not None:
            self._async_logger.push_log_buffer(lines)
        with self._app_lock:
            app_lines, self._app_buffer = self._app_buffer, []
        if app_lines and self._async_app_logger is not None:
            self._async_app_logger.push_log_buffer(app_lines)

    def stop(self) -> None:
        """Stop syncing, write out what remains and end the writers."""
        self._sync_stop.set()
        if self._sync_thread is not None:
            self._sync_thread.join()
            self._sync_thread = None
        if self.log_type == 0:
            return
        self.sync_loop()
        for writer in (self._async_logger, self._async_app_logger):
            if writer is not None:
                writer.stop()


_global_logger: Logger | None = None


def get_global_logger() -> Logger | None:
    return _global_logger


def init_global_logger(log_type: int = 1) -> Logger:
    """Create the process-wide logger from the global configuration."""
    global _global_logger
    config = get_global_config()
    if config is None:
        raise ConfigError("global config is not set")
    level = string_to_log_level(config.log_level)
    logger = Logger(level, log_type, config)
    previous, _global_logger = _global_logger, logger
    if previous is not None:
        previous.stop()
    print(f"init log level [{log_level_to_string(level)}]")
    logger.init()
    return logger


def _emit(level: LogLevel, app: bool, fmt: str, args: tuple) -> None:
    logger = _global_logger
    if logger is None or logger.level > level:
        return
    frame = sys._getframe(2)
    where = f"[{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}]\t"
    text = fmt % args if args else fmt
    line = LogEvent(level).to_string() + where + text + "\n"
    if app:
        logger.push_app_log(line)
    else:
        logger.push_log(line)


def debug_log(fmt: str, *args) -> None:
    _emit(LogLevel.DEBUG, False, fmt, args)


def info_log(fmt: str, *args) -> None:
    _emit(LogLevel.INFO, False, fmt, args)


def error_log(fmt: str, *args) -> None:
    _emit(LogLevel.ERROR, False, fmt, args)


def app_debug_log(fmt: str, *args) -> None:
    _emit(LogLevel.DEBUG, True, fmt, args)


def app_info_log(fmt: str, *args) -> None:
    _emit(LogLevel.INFO, True, fmt, args)


def app_error_log(fmt: str, *args) -> None:
    _emit(LogLevel.ERROR, True, fmt, args)