"""
Multipart/form-data encoder for single file uploads (RFC 2046 layout).
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

CRLF = "\r\n"
DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass
class MultipartField:
    """
    One file part of a multipart body.

    Args:
        field_name: Form field name
        filename: File name reported to the server
        data: Raw file bytes
        mime_type: Content-Type of the part

    Example:
        >>> MultipartField("avatar", "a.jpg", b"\\x01\\x02")
    """

    field_name: str
    filename: str
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @classmethod
    def from_path(
        cls,
        field_name: str,
        path: Union[str, Path],
        mime_type: Optional[str] = None
    ) -> "MultipartField":
        """
        Read a file from disk into a field.

        The MIME type is guessed from the file extension when not given,
        falling back to application/octet-stream.
        """
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(
            field_name=field_name,
            filename=path.name,
            data=path.read_bytes(),
            mime_type=mime_type,
        )


@dataclass(frozen=True)
class MultipartPayload:
    """Encoded multipart body together with the boundary it was built with."""

    content: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def is_empty(self) -> bool:
        return not self.content

    def __len__(self) -> int:
        return len(self.content)


class MultipartEncoder:
    """
    Builds multipart/form-data bodies.

    One boundary is generated per encoder instance and reused for every
    section of the part, so the body and the Content-Type header agree.

    Example:
        >>> encoder = MultipartEncoder(boundary="B")
        >>> payload = encoder.encode(MultipartField("avatar", "a.jpg", b"\\x01\\x02"))
        >>> payload.content_type
        'multipart/form-data; boundary=B'
    """

    def __init__(self, boundary: Optional[str] = None):
        self.boundary = boundary or f"------------{uuid.uuid4().hex.upper()}"

    @property
    def initial_boundary(self) -> bytes:
        return f"--{self.boundary}{CRLF}".encode("utf-8")

    def disposition(self, field_name: str, filename: str) -> bytes:
        return (
            f'Content-Disposition: form-data; name="{field_name}"; '
            f'filename="{filename}"{CRLF}'
        ).encode("utf-8")

    def mime(self, mime_type: str) -> bytes:
        return f"Content-Type: {mime_type}{CRLF}{CRLF}".encode("utf-8")

    def file_data(self, data: bytes) -> bytes:
        return bytes(data) + CRLF.encode("utf-8")

    @property
    def final_boundary(self) -> bytes:
        return f"{CRLF}--{self.boundary}--{CRLF}".encode("utf-8")

    def encode(self, field: MultipartField) -> MultipartPayload:
        """
        Encode a single file field.

        Returns:
            MultipartPayload; its content is empty when any header section
            could not be encoded, which callers must treat as a failure.
        """
        try:
            content = b"".join([
                self.initial_boundary,
                self.disposition(field.field_name, field.filename),
                self.mime(field.mime_type),
                self.file_data(field.data),
                self.final_boundary,
            ])
        except UnicodeEncodeError as e:
            logger.warning(
                "Multipart section for field %r could not be encoded: %s",
                field.field_name, e
            )
            content = b""

        return MultipartPayload(content=content, boundary=self.boundary)
