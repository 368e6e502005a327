"""
Tests for multipart/form-data encoding.
"""

import pytest

from src.quickfire.core.multipart import (
    DEFAULT_MIME_TYPE,
    MultipartEncoder,
    MultipartField,
    MultipartPayload,
)


class TestMultipartEncoder:
    """Tests for MultipartEncoder.encode()."""

    def test_exact_byte_layout(self):
        """Single field encodes to the RFC 2046 layout byte-for-byte."""
        field = MultipartField("avatar", "a.jpg", b"\x01\x02", mime_type="image/jpeg")

        payload = MultipartEncoder(boundary="B").encode(field)

        assert payload.content == (
            b'--B\r\n'
            b'Content-Disposition: form-data; name="avatar"; filename="a.jpg"\r\n'
            b'Content-Type: image/jpeg\r\n\r\n'
            b'\x01\x02\r\n'
            b'\r\n--B--\r\n'
        )

    def test_content_type_shares_boundary(self):
        """Content-Type header uses the body's boundary."""
        encoder = MultipartEncoder(boundary="XYZ")
        payload = encoder.encode(MultipartField("f", "f.bin", b"data"))

        assert payload.boundary == "XYZ"
        assert payload.content_type == "multipart/form-data; boundary=XYZ"
        assert payload.content.startswith(b"--XYZ\r\n")
        assert payload.content.endswith(b"\r\n--XYZ--\r\n")

    def test_generated_boundary_is_unique(self):
        """Every encoder instance generates its own boundary."""
        first = MultipartEncoder().boundary
        second = MultipartEncoder().boundary

        assert first != second
        assert first.startswith("------------")

    def test_default_mime_type(self):
        """MIME type defaults to image/jpeg."""
        field = MultipartField("avatar", "a.jpg", b"\x00")

        assert field.mime_type == DEFAULT_MIME_TYPE
        assert b"Content-Type: image/jpeg\r\n\r\n" in MultipartEncoder("B").encode(field).content

    def test_utf8_filename(self):
        """Non-ASCII file names are UTF-8 encoded."""
        payload = MultipartEncoder("B").encode(MultipartField("doc", "отчёт.pdf", b"%PDF"))

        assert 'filename="отчёт.pdf"'.encode("utf-8") in payload.content

    def test_unencodable_section_gives_empty_body(self):
        """A section that cannot be encoded empties the whole body."""
        # Lone surrogates are not valid UTF-8
        payload = MultipartEncoder("B").encode(MultipartField("f", "bad\ud800.jpg", b"\x01"))

        assert payload.is_empty
        assert len(payload) == 0
        assert payload.content_type == "multipart/form-data; boundary=B"

    def test_payload_length(self):
        """len() of payload is the body size."""
        payload = MultipartEncoder("B").encode(MultipartField("f", "f", b"12345"))

        assert len(payload) == len(payload.content)
        assert not payload.is_empty


class TestMultipartField:
    """Tests for MultipartField.from_path()."""

    def test_from_path_guesses_mime_type(self, tmp_path):
        """MIME type is guessed from the extension."""
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG")

        field = MultipartField.from_path("avatar", path)

        assert field.filename == "photo.png"
        assert field.data == b"\x89PNG"
        assert field.mime_type == "image/png"

    def test_from_path_unknown_extension(self, tmp_path):
        """Unknown extensions fall back to application/octet-stream."""
        path = tmp_path / "blob.qfdata"
        path.write_bytes(b"raw")

        field = MultipartField.from_path("file", str(path))

        assert field.mime_type == "application/octet-stream"

    def test_from_path_explicit_mime_type(self, tmp_path):
        """Explicit MIME type wins over guessing."""
        path = tmp_path / "photo.png"
        path.write_bytes(b"x")

        field = MultipartField.from_path("avatar", path, mime_type="image/webp")

        assert field.mime_type == "image/webp"

    def test_payload_is_immutable(self):
        """MultipartPayload is frozen."""
        payload = MultipartPayload(content=b"x", boundary="B")

        with pytest.raises(AttributeError):
            payload.boundary = "C"
