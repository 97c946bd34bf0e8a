"""RPC building blocks: the TinyPB frame format, a service dispatcher, timers, buffers and logging."""

__version__ = "0.1.0"