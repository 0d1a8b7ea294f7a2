"""Unit tests for legacy export pre-flight checks."""

from __future__ import annotations

import pytest

from churchadmin.core.exceptions import PayloadError, ValidationError
from churchadmin.services.payload_validator import (
    ensure_valid_payload,
    parse_legacy_export,
    preview_legacy_payload,
    read_legacy_collection,
    validate_legacy_payload,
)


class TestParseLegacyExport:
    def test_parses_bytes(self):
        assert parse_legacy_export(b'{"membros": {}}') == {"membros": {}}

    def test_strips_utf8_bom(self):
        assert parse_legacy_export(b"\xef\xbb\xbf{\"eventos\": {}}") == {"eventos": {}}

    def test_invalid_json(self):
        with pytest.raises(PayloadError, match="Could not read file"):
            parse_legacy_export(b"{not json")

    def test_invalid_encoding(self):
        with pytest.raises(PayloadError):
            parse_legacy_export(b"\xff\xfe\x00")


class TestValidateLegacyPayload:
    def test_accepts_single_collection(self):
        validation = validate_legacy_payload({"membros": {}})
        assert validation.valid is True
        assert validation.errors == []

    def test_rejects_empty_object(self):
        validation = validate_legacy_payload({})
        assert validation.valid is False
        assert validation.errors == ["No valid collection found in the file"]

    @pytest.mark.parametrize("data", [None, [], "assistidos", 42])
    def test_rejects_non_objects(self, data):
        validation = validate_legacy_payload(data)
        assert validation.valid is False
        assert validation.errors == ["Invalid data file"]

    def test_unrecognized_keys_only(self):
        assert validate_legacy_payload({"usuarios": {}}).valid is False

    def test_ensure_valid_payload_raises_with_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid_payload({})
        assert exc_info.value.errors == ["No valid collection found in the file"]

    def test_ensure_valid_payload_returns_data(self):
        payload = {"eventos": {}}
        assert ensure_valid_payload(payload) is payload


class TestReadLegacyCollection:
    def test_absent_or_null(self):
        assert read_legacy_collection({}, "membros") is None
        assert read_legacy_collection({"membros": None}, "membros") is None

    def test_object_keeps_order(self):
        records = read_legacy_collection({"membros": {"-b": 1, "-a": 2}}, "membros")
        assert list(records) == ["-b", "-a"]

    def test_array_skips_holes(self):
        records = read_legacy_collection({"eventos": [None, {"nome": "A"}, None, {"nome": "B"}]}, "eventos")
        assert records == {"1": {"nome": "A"}, "3": {"nome": "B"}}

    def test_scalar_collection_raises(self):
        with pytest.raises(PayloadError):
            read_legacy_collection({"assistidos": 3}, "assistidos")


class TestPreviewLegacyPayload:
    def test_counts(self, legacy_payload):
        preview = preview_legacy_payload(legacy_payload)
        assert preview.collections == {"assistidos": 1, "membros": 1, "eventos": 1}
        assert preview.ignored == ["configuracoes"]

    def test_non_object_raises(self):
        with pytest.raises(PayloadError, match="Invalid data file"):
            preview_legacy_payload([1, 2])
