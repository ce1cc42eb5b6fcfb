"""
Unit tests for response helpers.
"""
from fastapi import HTTPException

from src.core.errors import DuplicateEntryError, NotFoundError, StorageError
from src.web.responses import content_disposition, http_error, json_attachment


class TestContentDisposition:

    def test_ascii_name_is_unchanged(self):
        value = content_disposition("Acme_premium_export_2026-01-01.json")
        assert value.startswith('attachment; filename="Acme_premium_export_2026-01-01.json";')
        assert value.endswith("filename*=UTF-8''Acme_premium_export_2026-01-01.json")

    def test_non_latin1_name_is_percent_encoded(self):
        value = content_disposition("टाटा ₹.json")
        value.encode("latin-1")
        assert 'filename="???? ?.json"' in value
        assert "filename*=UTF-8''%E0%A4%9F" in value

    def test_quotes_cannot_break_out(self):
        value = content_disposition('say "hi"\\.json')
        assert 'filename="say _hi__.json"' in value


class TestJsonAttachment:

    def test_body_and_headers(self):
        response = json_attachment({"when": "object"}, "x.json")
        assert response.media_type == "application/json"
        assert response.headers["content-disposition"].startswith("attachment;")
        assert b'"when": "object"' in response.body


class TestHttpError:

    def test_duplicate_is_conflict(self):
        exc = http_error(DuplicateEntryError("dup"))
        assert isinstance(exc, HTTPException)
        assert exc.status_code == 409

    def test_status_mapping(self):
        assert http_error(NotFoundError("x")).status_code == 404
        assert http_error(StorageError("x")).status_code == 500
