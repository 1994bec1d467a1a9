"""Wire format for content requests.

Pydantic models with snake_case attributes and the JSON field names used by
existing frontends as aliases. Byte buffers travel as base64 strings, the
way Go encodes ``[][]byte``.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator, model_validator

from .constants import EngineConstants


class RequestDecodeError(ValueError):
    """Raised when a request payload cannot be decoded or validated."""

    def __init__(self, message: str, error_count: int = 1):
        super().__init__(message)
        self.error_count = error_count


def _decode_buffer(value: Any) -> list[bytes]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Buffer must be a list of base64 strings")
    segments = []
    for item in value:
        if isinstance(item, bytes):
            segments.append(item)
            continue
        if not isinstance(item, str):
            raise ValueError("Buffer segments must be base64 strings")
        try:
            segments.append(base64.b64decode(item, validate=True))
        except binascii.Error as e:
            raise ValueError(f"invalid base64 segment: {e}") from e
    return segments


def _encode_buffer(segments: list[bytes]) -> list[str]:
    return [base64.b64encode(s).decode("ascii") for s in segments]


# --- Sub-requests ---


class CopyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    x0: int = Field(default=0, alias="X0")
    y0: int = Field(default=0, alias="Y0")
    x1: int = Field(default=0, alias="X1")
    y1: int = Field(default=0, alias="Y1")


class WriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    x: int = Field(default=0, alias="X")
    y: int = Field(default=0, alias="Y")
    key: str = Field(default="", alias="Key")
    insert: bool = Field(default=False, alias="Insert")


class PasteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    x: int = Field(default=0, alias="X")
    y: int = Field(default=0, alias="Y")
    buffer: list[bytes] = Field(default_factory=list, alias="Buffer")

    @field_validator("buffer", mode="before")
    @classmethod
    def decode_buffer(cls, value: Any) -> list[bytes]:
        return _decode_buffer(value)

    @field_serializer("buffer")
    def encode_buffer(self, value: list[bytes]) -> list[str]:
        return _encode_buffer(value)


class ContentRequest(BaseModel):
    """One combined request: optional edits plus the viewport to render."""

    model_config = ConfigDict(populate_by_name=True)

    xpos: int = Field(alias="Xpos")
    ypos: int = Field(alias="Ypos")
    width: int = Field(alias="Width", ge=0)
    height: int = Field(alias="Height", ge=0)
    copy_request: CopyRequest | None = Field(default=None, alias="Copy")
    write: WriteRequest | None = Field(default=None, alias="Write")
    paste: PasteRequest | None = Field(default=None, alias="Paste")

    @model_validator(mode="after")
    def check_viewport_size(self) -> ContentRequest:
        if self.width * self.height > EngineConstants.MAX_VIEWPORT_CELLS:
            raise ValueError(
                f"viewport of {self.width}x{self.height} exceeds "
                f"{EngineConstants.MAX_VIEWPORT_CELLS} cells"
            )
        return self


# --- Responses ---


class CopyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    buffer: list[bytes] = Field(default_factory=list, alias="Buffer")

    @field_validator("buffer", mode="before")
    @classmethod
    def decode_buffer(cls, value: Any) -> list[bytes]:
        return _decode_buffer(value)

    @field_serializer("buffer")
    def encode_buffer(self, value: list[bytes]) -> list[str]:
        return _encode_buffer(value)


class WriteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    move_x: int = Field(default=0, alias="MoveX")
    move_y: int = Field(default=0, alias="MoveY")


class ContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: list[str] = Field(default_factory=list, alias="Content")
    fg_color: list[list[int]] = Field(default_factory=list, alias="FgColor")
    copy_response: CopyResponse | None = Field(default=None, alias="Copy")
    write: WriteResponse | None = Field(default=None, alias="Write")


def decode_request(payload: bytes | str) -> ContentRequest:
    """Parse and validate a JSON content request.

    Raises:
        RequestDecodeError: if the payload is not JSON or fails validation
    """
    try:
        return ContentRequest.model_validate_json(payload)
    except ValidationError as e:
        raise RequestDecodeError(
            f"malformed content request: {e.error_count()} error(s)",
            error_count=e.error_count(),
        ) from e


def encode_response(response: ContentResponse) -> str:
    """Serialize a response with the wire field names."""
    return response.model_dump_json(by_alias=True)
