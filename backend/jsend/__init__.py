from jsend.encoding import EncodeOption, EncodeResult, JsonError, encode, error_message
from jsend.envelope import ERROR, FAIL, LENIENT, STRICT, SUCCESS, Envelope, EnvelopePolicy, ResponseCarrier
from jsend.errors import EnvelopeError, InvalidStatusError, MissingKeyError

__version__ = "1.1.0"

__all__ = [
    "ERROR",
    "FAIL",
    "LENIENT",
    "STRICT",
    "SUCCESS",
    "EncodeOption",
    "EncodeResult",
    "Envelope",
    "EnvelopeError",
    "EnvelopePolicy",
    "InvalidStatusError",
    "JsonError",
    "MissingKeyError",
    "ResponseCarrier",
    "encode",
    "error_message",
]
