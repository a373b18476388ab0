import pytest

from lapor_sarpras.services.qr import (
    DATA_URL_PREFIX,
    decode_data_url,
    generate_qr_data_url,
    generate_qr_png,
)


def test_same_code_same_encoding():
    assert generate_qr_data_url("AC-101") == generate_qr_data_url("AC-101")


def test_different_codes_differ():
    assert generate_qr_data_url("AC-101") != generate_qr_data_url("AC-102")


def test_data_url_wraps_png():
    url = generate_qr_data_url("AC-101")

    assert url.startswith(DATA_URL_PREFIX)
    png = decode_data_url(url)
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    assert png == generate_qr_png("AC-101")


def test_decode_rejects_other_payloads():
    with pytest.raises(ValueError):
        decode_data_url("data:image/jpeg;base64,AAAA")
