__all__ = [
    # Client
    "RpcClient",
    # Models
    "JsonValue",
    "RpcRequest",
    "RpcResponse",
    "RpcErrorObject",
    "parse_response",
    # Errors
    "RpcError",
    "TransportError",
    "ProtocolError",
    "RemoteError",
    "ConfigError",
    # Config
    "EndpointConfig",
    "load_config",
    # Logging
    "setup_logging",
]

__version__ = "0.3.0"

from .config import ConfigError, EndpointConfig, load_config
from .log import setup_logging
from .rpc.client import RpcClient
from .rpc.errors import ProtocolError, RemoteError, RpcError, TransportError
from .rpc.models import JsonValue, RpcErrorObject, RpcRequest, RpcResponse, parse_response
