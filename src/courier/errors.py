"""
Courier error hierarchy.

Every failure raised by the codecs and the contract client derives from
``CourierError``.  Each class carries the process exit code the CLI uses
when the error reaches the top level.
"""

from __future__ import annotations


class CourierError(RuntimeError):
    exit_code: int = 1


class ConfigError(CourierError):
    exit_code = 2


class SchemaError(CourierError):
    exit_code = 3


class MissingArgument(CourierError):
    exit_code = 4

    def __init__(self, name: str, kind: object) -> None:
        super().__init__(f'argument "{name}" of type "{kind}" not found')
        self.name = name
        self.kind = kind


class MissingArgumentValue(CourierError):
    exit_code = 4

    def __init__(self, name: str, kind: object) -> None:
        super().__init__(f'argument "{name}" of type "{kind}" has no value')
        self.name = name
        self.kind = kind


class ConversionError(CourierError):
    exit_code = 5


# ---------------------------------------------------------------------------
# Transport token errors
# ---------------------------------------------------------------------------

class TokenError(CourierError):
    exit_code = 6


class MalformedToken(TokenError):
    pass


class CorruptToken(TokenError):
    pass


class DecodeError(TokenError):
    pass


class FieldMissing(TokenError):
    def __init__(self, field: str) -> None:
        super().__init__(f'couldn\'t find "{field}" key in message')
        self.field = field


# ---------------------------------------------------------------------------
# Call body errors
# ---------------------------------------------------------------------------

class DeserializeError(CourierError):
    exit_code = 7


class BodyDecodeError(CourierError):
    exit_code = 7


class RenderError(CourierError):
    exit_code = 7


class ClientError(CourierError):
    exit_code = 8


class ExpiredMessage(CourierError):
    exit_code = 9
