from .options import ResizeMethod, ResizeOptions, StoreTarget, TransformOptions
from .response import CompressionResult, ResponseInput, ResponseOutput
from .status import ApiError, RequestOutcome, RequestStatus, StreamResult

__all__ = [
    "ApiError",
    "CompressionResult",
    "RequestOutcome",
    "RequestStatus",
    "ResizeMethod",
    "ResizeOptions",
    "ResponseInput",
    "ResponseOutput",
    "StoreTarget",
    "StreamResult",
    "TransformOptions",
]
