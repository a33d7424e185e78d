"""Tests for QR payloads and PNG rendering."""

import base64
import io
import json
from unittest.mock import patch

import pytest
from PIL import Image
from qrcode.exceptions import DataOverflowError

from mrlister.core.models import QrPayload
from mrlister.identifiers.qr import QrCodeEncoder, build_qr_payload, parse_qr_payload

DATA_URL_PREFIX = "data:image/png;base64,"


class TestPayload:

    def test_id_defaults_to_zero(self):
        payload = build_qr_payload("VIN-00214", "Abbey Road Vinyl")
        assert payload.id == 0

    def test_json_has_exactly_three_keys(self):
        payload = build_qr_payload("VIN-00214", "Abbey Road Vinyl", item_id=7)
        assert json.loads(payload.to_json()) == {
            "sku": "VIN-00214",
            "title": "Abbey Road Vinyl",
            "id": 7,
        }

    def test_parse_recovers_payload(self):
        payload = build_qr_payload("MUS-41614", 'The "White" Album, 2LP', item_id=3)
        assert parse_qr_payload(payload.to_json()) == payload

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_qr_payload("https://example.com/not-a-payload")

    def test_parse_rejects_missing_sku(self):
        with pytest.raises(ValueError):
            parse_qr_payload('{"title": "x", "id": 1}')


class TestQrCodeEncoder:

    def test_encode_returns_png_data_url(self):
        url = QrCodeEncoder().encode(QrPayload(sku="VIN-00214", title="Abbey Road Vinyl"))
        assert url.startswith(DATA_URL_PREFIX)
        png = base64.b64decode(url[len(DATA_URL_PREFIX):])
        assert png.startswith(b"\x89PNG")

    @pytest.mark.parametrize("size", [200, 300])
    def test_image_is_configured_size(self, size):
        png = QrCodeEncoder(image_size=size).render_png(QrPayload(sku="A-1", title="t"))
        image = Image.open(io.BytesIO(png))
        assert image.size == (size, size)

    def test_long_title_still_encodes(self):
        url = QrCodeEncoder().encode(QrPayload(sku="BOO-44913", title="word " * 200))
        assert url.startswith(DATA_URL_PREFIX)

    def test_failure_returns_empty_string(self):
        encoder = QrCodeEncoder()
        with patch.object(encoder, "render_png", side_effect=DataOverflowError("too big")):
            assert encoder.encode(QrPayload(sku="A-1", title="t")) == ""
