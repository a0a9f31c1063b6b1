__all__ = [
    # Codecs
    "ArgumentObject",
    "DecodedCall",
    "Envelope",
    "coerce_parameters",
    "convert_token_amount",
    "decode_call_body",
    "pack_envelope",
    "render_output",
    "unpack_envelope",
    # Chain
    "ChainMessage",
    "ContractAbi",
    "ContractClient",
    "FunctionSignature",
    # Config
    "Config",
    # Errors
    "BodyDecodeError",
    "ClientError",
    "ConfigError",
    "ConversionError",
    "CorruptToken",
    "CourierError",
    "DecodeError",
    "DeserializeError",
    "FieldMissing",
    "MalformedToken",
    "MissingArgument",
    "MissingArgumentValue",
    "RenderError",
    "SchemaError",
]

from .config import Config
from .errors import (
    BodyDecodeError,
    ClientError,
    ConfigError,
    ConversionError,
    CorruptToken,
    CourierError,
    DecodeError,
    DeserializeError,
    FieldMissing,
    MalformedToken,
    MissingArgument,
    MissingArgumentValue,
    RenderError,
    SchemaError,
)
from .missive import (
    ArgumentObject,
    DecodedCall,
    Envelope,
    coerce_parameters,
    convert_token_amount,
    decode_call_body,
    pack_envelope,
    render_output,
    unpack_envelope,
)
from .pneuma.abi import ContractAbi, FunctionSignature
from .pneuma.message import ChainMessage
from .pneuma.tx import ContractClient
