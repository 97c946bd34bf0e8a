# rocketrpc

rocketrpc provides the pieces an RPC server is built from: the TinyPB
frame format and its coder, a dispatcher that routes a decoded request to a
registered service by its `Service.method` name, per-call controllers,
timer events, a growable byte buffer, IPv4 addresses, a listening socket
wrapper, XML configuration and buffered, file-rotating logging.

## Modules

- `rocketrpc.config` – `Config.from_xml(path)` reads an XML document whose
  root is `<root>`, with a `<log>` node (`log_level`, `log_file_name`,
  `log_file_path`, `log_max_file_size`, `log_sync_interval`) and a
  `<server>` node (`port`, `io_threads`, `ip`). A missing node or value
  raises `ConfigError`. `set_global_config(path)` sets the process-wide
  configuration once (passing `None` gives the defaults);
  `get_global_config()` returns it.
- `rocketrpc.log` – `LogLevel`, `Logger`, `AsyncLogger` and the functions
  `debug_log`, `info_log`, `error_log`, `app_debug_log`, `app_info_log`,
  `app_error_log`, which take a `%`-style format and arguments.
  `init_global_logger(1)` writes framework lines and application lines to
  separate files named `<path><name>_rpc_<YYYYMMDD>_log.<n>` and
  `<path><name>_app_<YYYYMMDD>_log.<n>`, moving buffered lines to them every
  `log_sync_interval` milliseconds and starting a new numbered file once the
  current one exceeds `log_max_file_size` bytes. `init_global_logger(0)`
  prints every line to standard output instead. `Logger.stop()` writes out
  what remains. Each line carries the level, time, process and thread ids,
  and, when set, the message id and method name from `rocketrpc.runtime`.
- `rocketrpc.runtime` – `get_run_time()` returns the calling thread's
  `RunTime` (`msg_id`, `method_name`).
- `rocketrpc.msg_id` – `gen_msg_id()` returns 20-digit ids that start from
  a random value per thread and count up.
- `rocketrpc.errors` – `ErrorCode`, the numeric error codes
  (`PEER_CLOSE` = 10000000 through `RPC_CHANNEL_INIT` = 10000011).
- `rocketrpc.util` – `get_pid`, `get_thread_id`, `get_now_ms` and
  `get_int32_from_net_bytes`.
- `rocketrpc.timer_event`, `rocketrpc.timer` – `TimerEvent(interval_ms,
  is_repeated, callback)` and `Timer`, which keeps events ordered by arrive
  time. `Timer.on_timer()` runs every due, uncancelled event and reschedules
  repeating ones; `Timer.next_timeout_ms()` says how long until the next one.
- `rocketrpc.fd_event`, `rocketrpc.fd_event_group` – `FdEvent` holds read,
  write and error callbacks for a descriptor; `WakeUpFdEvent` is a socket
  pair for interrupting a waiting poller; `get_fd_event_group()` returns a
  table of `FdEvent` objects indexed by descriptor number.
- `rocketrpc.tcp_buffer` – `TcpBuffer`, a byte buffer with read and write
  positions that grows on write and compacts once a third has been read.
- `rocketrpc.net_addr` – `IPNetAddr(ip, port)`,
  `IPNetAddr.from_string("127.0.0.1:12345")` and `check_valid()`.
- `rocketrpc.tcp_acceptor` – `TcpAcceptor(addr)` binds and listens;
  `accept()` returns the client socket and its `IPNetAddr`. Failures raise
  `AcceptorError`. It is a context manager.
- `rocketrpc.protocol` – `AbstractProtocol`, `AbstractCoder`, and the plain
  text `StringProtocol` / `StringCoder`.
- `rocketrpc.tinypb` – `TinyPBProtocol`, `TinyPBCoder` and `encode_tinypb`.
- `rocketrpc.rpc_controller` – `RpcController` (error code and text,
  message id, addresses, a 1000 ms default timeout) and `RpcClosure`.
- `rocketrpc.rpc_dispatcher` – `Service`, `MethodDescriptor`,
  `RpcDispatcher`, `parse_service_full_name` and `get_rpc_dispatcher()`.

## The TinyPB frame

```
0x02 | pk_len | msg_id_len | msg_id | method_name_len | method_name
     | err_code | err_info_len | err_info | pb_data | check_sum | 0x03
```

All integers are signed 32-bit big-endian; `pk_len` covers the whole frame.
`TinyPBCoder.decode` consumes every complete frame in the buffer, drops any
bytes before a frame, and leaves an incomplete frame in place.

```python
from rocketrpc.tcp_buffer import TcpBuffer
from rocketrpc.tinypb import TinyPBCoder, TinyPBProtocol

request = TinyPBProtocol(msg_id="99998888", method_name="Order.makeOrder", pb_data=b"payload")

buffer = TcpBuffer(128)
coder = TinyPBCoder()
coder.encode([request], buffer)

for message in coder.decode(buffer):
    print(message.msg_id, message.method_name, message.pb_data)
```

## Dispatching a request

A service lists its methods as name → (request type, response type) and
implements each as a method taking `(controller, request, response, done)`.
Message types need `SerializeToString()` and `ParseFromString(data)`, so
protobuf messages fit as they are.

```python
from rocketrpc.rpc_dispatcher import RpcDispatcher, Service
from rocketrpc.tinypb import TinyPBProtocol


class Text:
    def __init__(self):
        self.value = b""

    def SerializeToString(self):
        return self.value

    def ParseFromString(self, data):
        self.value = data


class Echo(Service):
    service_name = "Echo"
    methods = {"say": (Text, Text)}

    def say(self, controller, request, response, done):
        response.value = request.value.upper()


dispatcher = RpcDispatcher()
dispatcher.register_service(Echo())

request = TinyPBProtocol(msg_id="1", method_name="Echo.say", pb_data=b"hello")
response = TinyPBProtocol()
dispatcher.dispatch(request, response, None)
print(response.err_code, response.pb_data)  # 0 b'HELLO'
```

A method name without a dot is answered with
`ErrorCode.PARSE_SERVICE_NAME`; an unknown service or method with
`ErrorCode.SERVICE_NOT_FOUND`; a payload the request type cannot parse with
`ErrorCode.FAILED_DESERIALIZE`; a response that cannot be serialized with
`ErrorCode.FAILED_SERIALIZE`. In each case `err_info` holds a short text.

## What the package does not do

There is no event loop, no IO thread group, no connection handling, no TCP
client or server, and no client-side channel. The package does not run a
server or make calls over the network by itself: it gives you the frame
coder, the dispatcher, timers, the listening socket and the logging, and
you drive them from your own loop (for example with `selectors`). There is
no command-line program.

## Testing

The test suite uses pytest, installed through the `test` extra.