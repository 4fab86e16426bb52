"""Wire bodies produced by request builders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import IO, Any, Union

from aiohttp import FormData

MEDIA_TYPE_JSON = "application/json"
MEDIA_TYPE_MULTIPART = "multipart/form-data"
MEDIA_TYPE_OCTET = "application/octet-stream"

# Attachment sources are handed to the transport unread
DataSource = Union[bytes, bytearray, memoryview, IO[bytes]]


def encode_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


@dataclass
class FormPart:
    name: str
    value: Any
    filename: str | None = None
    content_type: str | None = None


@dataclass
class RequestBody:
    content_type: str
    data: bytes | None = None
    parts: list[FormPart] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> RequestBody:
        return cls(MEDIA_TYPE_JSON, data=encode_json(payload).encode("utf-8"))

    @classmethod
    def from_parts(cls, parts: list[FormPart]) -> RequestBody:
        return cls(MEDIA_TYPE_MULTIPART, parts=list(parts))

    @property
    def is_multipart(self) -> bool:
        return self.content_type == MEDIA_TYPE_MULTIPART

    def get_part(self, name: str) -> FormPart | None:
        for part in self.parts:
            if part.name == name:
                return part
        return None

    def json(self) -> dict[str, Any]:
        """Decode the JSON payload, from ``payload_json`` when multipart."""
        if self.is_multipart:
            part = self.get_part("payload_json")
            if part is None:
                raise ValueError("multipart body has no payload_json part")
            return json.loads(part.value)
        if self.data is None:
            raise ValueError("body has no JSON data")
        return json.loads(self.data)

    def to_form_data(self) -> FormData:
        """Build an aiohttp form; the transport owns reading and closing sources."""
        if not self.is_multipart:
            raise ValueError("only multipart bodies convert to form data")
        form = FormData()
        for part in self.parts:
            if part.filename is None:
                form.add_field(part.name, part.value, content_type=part.content_type)
            else:
                value = bytes(part.value) if isinstance(part.value, (bytearray, memoryview)) else part.value
                form.add_field(
                    part.name,
                    value,
                    filename=part.filename,
                    content_type=part.content_type,
                )
        return form
