# tests/test_codec_service.py

import io

import pytest
from PIL import Image

from filetailor.services.codec_service import (
    CodecError,
    ImageDecodeError,
    PillowJpegCodec,
    quality_to_jpeg,
)


@pytest.mark.parametrize(
    "quality, expected",
    [(0.0, 1), (0.001, 1), (0.01, 1), (0.5, 50), (0.75, 75), (0.999, 100), (1.0, 100)],
)
def test_quality_to_jpeg(quality, expected):
    assert quality_to_jpeg(quality) == expected


def test_decode_flattens_alpha_to_rgb(rgba_png_bytes):
    image = PillowJpegCodec().decode(rgba_png_bytes)
    try:
        assert image.mode == "RGB"
        assert image.size == (200, 150)
    finally:
        image.close()


def test_transparent_pixels_become_black():
    buffer = io.BytesIO()
    Image.new("RGBA", (4, 4), (255, 0, 0, 0)).save(buffer, format="PNG")

    image = PillowJpegCodec().decode(buffer.getvalue())
    try:
        assert image.getpixel((0, 0)) == (0, 0, 0)
    finally:
        image.close()


def test_decode_rejects_garbage():
    with pytest.raises(ImageDecodeError):
        PillowJpegCodec().decode(b"\x00\x01\x02garbage")


def test_decode_error_is_value_error():
    assert issubclass(ImageDecodeError, CodecError)
    assert issubclass(CodecError, ValueError)


def test_encode_is_deterministic_and_grows_with_quality(noisy_jpeg_bytes):
    codec = PillowJpegCodec()
    image = codec.decode(noisy_jpeg_bytes)
    try:
        low = codec.encode(image, 0.1)
        high = codec.encode(image, 0.9)
        assert codec.encode(image, 0.1) == low
        assert len(low) < len(high)
        assert Image.open(io.BytesIO(high)).format == "JPEG"
    finally:
        image.close()
