"""Error codes reported by the RPC framework."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """System error codes, all prefixed with 1000."""

    PEER_CLOSE = 10000000
    FAILED_CONNECT = 10000001
    FAILED_GET_REPLY = 10000002
    FAILED_DESERIALIZE = 10000003
    FAILED_SERIALIZE = 10000004
    FAILED_ENCODE = 10000005
    FAILED_DECODE = 10000006
    RPC_CALL_TIMEOUT = 10000007
    SERVICE_NOT_FOUND = 10000008
    METHOD_NOT_FOUND = 10000009
    PARSE_SERVICE_NAME = 10000010
    RPC_CHANNEL_INIT = 10000011