"""
Тесты сборки частей multipart тела
"""

import io
import json

from watson_client.constants import NOTSET
from watson_client.internal.request.files import MultipartField, build_file_object


class TestBuildFileObject:
    """Тесты build_file_object"""

    def test_missing_data(self):
        assert build_file_object(None) is None
        assert build_file_object(NOTSET) is None

    def test_bytes(self):
        field = build_file_object(b"<tmx/>")
        assert field.data == b"<tmx/>"
        assert field.content_type == "application/octet-stream"
        assert not field.is_stream

    def test_bytes_with_content_type(self):
        field = build_file_object(bytearray(b"hola"), "text/plain")
        assert field.data == b"hola"
        assert field.content_type == "text/plain"

    def test_file_object_is_not_read(self):
        buffer = io.BytesIO(b"content")
        buffer.name = "/tmp/glossary.tmx"

        field = build_file_object(buffer, "application/octet-stream")

        assert field.data is buffer
        assert field.is_stream
        assert field.filename == "glossary.tmx"
        assert buffer.tell() == 0

    def test_explicit_filename_wins(self):
        buffer = io.BytesIO(b"content")
        buffer.name = "glossary.tmx"
        field = build_file_object(buffer, filename="custom.tmx")
        assert field.filename == "custom.tmx"

    def test_pseudo_file_name_ignored(self):
        buffer = io.BytesIO(b"")
        buffer.name = "<stdin>"
        assert build_file_object(buffer).filename is None

    def test_structured_value(self):
        field = build_file_object({"Creator": "Johnny Appleseed"})
        assert json.loads(field.data) == {"Creator": "Johnny Appleseed"}
        assert field.content_type == "application/json"

    def test_string_without_type_is_plain_field(self):
        field = build_file_object("value")
        assert field.data == "value"
        assert field.content_type is None

    def test_multipart_field_passthrough(self):
        original = MultipartField(data=b"x", content_type="text/html", filename="a.html")
        assert build_file_object(original) is original
