"""Routing of decoded requests to registered services."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Protocol

from rocketrpc.errors import ErrorCode
from rocketrpc.log import error_log, info_log
from rocketrpc.rpc_controller import RpcClosure, RpcController
from rocketrpc.runtime import get_run_time
from rocketrpc.tinypb import TinyPBProtocol


class Message(Protocol):
    """What a request or response message must provide (protobuf compatible)."""

    def SerializeToString(self) -> bytes: ...

    def ParseFromString(self, data: bytes) -> Any: ...


@dataclass(frozen=True)
class MethodDescriptor:
    """A method of a service together with its message types."""

    name: str
    service_name: str
    request_type: type
    response_type: type

    @property
    def full_name(self) -> str:
        return f"{self.service_name}.{self.name}"


class Service:
    """Base class for services.

    Subclasses list their methods in `methods` as name -> (request type,
    response type) and implement each as a method of the same name taking
    (controller, request, response, done).
    """

    service_name: ClassVar[str] = ""
    methods: ClassVar[Mapping[str, tuple[type, type]]] = {}

    @property
    def full_name(self) -> str:
        return self.service_name or type(self).__name__

    def find_method(self, name: str) -> Optional[MethodDescriptor]:
        """Return the descriptor of the named method, or None."""
        types = self.methods.get(name)
        if types is None:
            return None
        request_type, response_type = types
        return MethodDescriptor(name, self.full_name, request_type, response_type)

    def call_method(
        self,
        method: MethodDescriptor,
        controller: RpcController,
        request: Message,
        response: Message,
        done: Optional[RpcClosure],
    ) -> None:
        handler = getattr(self, method.name, None)
        if handler is None or not callable(handler):
            controller.set_failed(f"Method {method.name}() not implemented.")
            if done is not None:
                done.run()
            return
        handler(controller, request, response, done)


def parse_service_full_name(full_name: str) -> tuple[str, str]:
    """Split "Service.method" at the first dot; raise ValueError if impossible."""
    if not full_name:
        error_log("full name empty")
        raise ValueError("full name empty")
    service_name, sep, method_name = full_name.partition(".")
    if not sep:
        error_log("not find.in full name[%s]", full_name)
        raise ValueError(f"no '.' in full name [{full_name}]")
    info_log(
        "parse service_name[%s] and method_name[%s] from full name [%s]",
        service_name, method_name, full_name,
    )
    return service_name, method_name


class RpcDispatcher:
    """Finds the service method a request names, runs it and fills the response."""

    def __init__(self) -> None:
        self.service_map: dict[str, Service] = {}

    def register_service(self, service: Service) -> None:
        self.service_map[service.full_name] = service

    def set_tinypb_error(self, msg: TinyPBProtocol, err_code: int, err_info: str) -> None:
        msg.err_code = err_code
        msg.err_info = err_info
        msg.err_info_len = len(err_info.encode("utf-8"))

    def dispatch(self, request: TinyPBProtocol, response: TinyPBProtocol, connection: Any) -> None:
        """Handle request and write the outcome into response."""
        response.msg_id_len = request.msg_id_len
        response.msg_id = request.msg_id
        response.method_name_len = request.method_name_len
        response.method_name = request.method_name

        try:
            service_name, method_name = parse_service_full_name(request.method_name)
        except ValueError:
            self.set_tinypb_error(
                response, ErrorCode.PARSE_SERVICE_NAME, "parse service name error"
            )
            return

        service = self.service_map.get(service_name)
        if service is None:
            error_log("%s | service name [%s] not found", request.msg_id, service_name)
            self.set_tinypb_error(response, ErrorCode.SERVICE_NOT_FOUND, "service not found")
            return

        method = service.find_method(method_name)
        if method is None:
            error_log(
                "%s | method name[%s] not found in service[%s]",
                request.msg_id, method_name, service_name,
            )
            self.set_tinypb_error(response, ErrorCode.SERVICE_NOT_FOUND, "service not found")
            return

        req_msg = method.request_type()
        try:
            req_msg.ParseFromString(bytes(request.pb_data))
        except Exception as exc:
            error_log("%s | deserilize error, %s", request.msg_id, exc)
            self.set_tinypb_error(response, ErrorCode.FAILED_DESERIALIZE, "deserialize error")
            return
        info_log("%s | get rpc request[%s]", request.msg_id, req_msg)

        rsp_msg = method.response_type()
        controller = RpcController()
        if connection is not None:
            controller.local_addr = connection.local_addr
            controller.peer_addr = connection.peer_addr
        controller.msg_id = request.msg_id

        run_time = get_run_time()
        run_time.msg_id = request.msg_id
        run_time.method_name = method_name

        service.call_method(method, controller, req_msg, rsp_msg, None)

        try:
            response.pb_data = bytes(rsp_msg.SerializeToString())
        except Exception as exc:
            error_log("%s | serilize error,origin message[%s], %s", request.msg_id, rsp_msg, exc)
            self.set_tinypb_error(response, ErrorCode.FAILED_SERIALIZE, "serilize error")
            return

        response.err_code = 0
        info_log(
            "%s | dispatch success,request[%s],response[%s]",
            request.msg_id, req_msg, rsp_msg,
        )


_global_dispatcher: RpcDispatcher | None = None
_global_lock = threading.Lock()


def get_rpc_dispatcher() -> RpcDispatcher:
    """Return the process-wide dispatcher."""
    global _global_dispatcher
    with _global_lock:
        if _global_dispatcher is None:
            _global_dispatcher = RpcDispatcher()
        return _global_dispatcher