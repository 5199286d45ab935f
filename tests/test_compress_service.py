# tests/test_compress_service.py

import logging

import pytest

from filetailor.models.tailoring_model import FailureKind, TailoringFailure, TailoringResult
from filetailor.services.codec_service import PillowJpegCodec
from filetailor.services.compress_service import AdaptiveQualityCompressor, compressed_name


@pytest.fixture
def photo(make_source):
    return make_source(b"\xff\xd8" + bytes(200_000), name="holiday.photo.png", media_type="image/png")


# --- Search over the stub codec ---

def test_search_samples_ten_midpoints(stub_codec_factory, photo):
    codec = stub_codec_factory()
    AdaptiveQualityCompressor(codec=codec).compress(photo, 50_000)

    assert len(codec.qualities) == 10
    assert codec.qualities[0] == 0.5
    assert codec.qualities[1] == 0.25  # 0.5 -> 51 000 bytes, too big
    assert codec.qualities[2] == 0.375


def test_result_is_highest_fitting_sample(stub_codec_factory, photo, linear_curve):
    codec = stub_codec_factory()
    result = AdaptiveQualityCompressor(codec=codec).compress(photo, 50_000)

    fitting = [q for q in codec.qualities if linear_curve(q) <= 50_000]
    assert isinstance(result, TailoringResult)
    assert result.quality == max(fitting)
    assert result.achieved_size == linear_curve(max(fitting))
    assert result.achieved_size <= 50_000


def test_generous_target_climbs_towards_top_quality(stub_codec_factory, photo):
    codec = stub_codec_factory()
    result = AdaptiveQualityCompressor(codec=codec).compress(photo, 10_000_000)

    assert result.quality == 1 - 0.5 ** 10
    assert codec.qualities == sorted(codec.qualities)


def test_fallback_when_nothing_fits(stub_codec_factory, photo, linear_curve, caplog):
    codec = stub_codec_factory()
    with caplog.at_level(logging.WARNING, logger="filetailor"):
        result = AdaptiveQualityCompressor(codec=codec).compress(photo, 500)

    assert len(codec.qualities) == 11
    assert codec.qualities[-1] == 0.01
    assert result.quality == 0.01
    # best effort: the fallback is used even though it misses the budget
    assert result.achieved_size == linear_curve(0.01) > 500
    assert "Falling back" in caplog.text


def test_fallback_is_deterministic(stub_codec_factory, photo):
    first = AdaptiveQualityCompressor(codec=stub_codec_factory()).compress(photo, 1)
    second = AdaptiveQualityCompressor(codec=stub_codec_factory()).compress(photo, 1)
    assert first == second


def test_decode_failure_is_returned_not_raised(stub_codec_factory, photo):
    codec = stub_codec_factory(fail_decode=True)
    result = AdaptiveQualityCompressor(codec=codec).compress(photo, 50_000)

    assert isinstance(result, TailoringFailure)
    assert result.kind == FailureKind.DECODE_ERROR
    assert codec.qualities == []


@pytest.mark.parametrize("failing_call", [1, 4, 11])
def test_encode_failure_releases_image(stub_codec_factory, photo, failing_call):
    codec = stub_codec_factory(fail_encode_at_call=failing_call)
    # target 500 forces the fallback, so an 11th encode happens
    result = AdaptiveQualityCompressor(codec=codec).compress(photo, 500)

    assert isinstance(result, TailoringFailure)
    assert result.kind == FailureKind.ENCODE_ERROR
    assert "encoder failed" in result.message
    assert codec.images[0].closed


def test_image_released_on_success(stub_codec_factory, photo):
    codec = stub_codec_factory()
    AdaptiveQualityCompressor(codec=codec).compress(photo, 50_000)
    assert codec.images[0].closed


def test_output_is_named_and_typed_as_jpeg(stub_codec_factory, photo):
    result = AdaptiveQualityCompressor(codec=stub_codec_factory()).compress(photo, 50_000)

    assert result.suggested_name == "holiday.photo-compressed.jpg"
    assert result.media_type == "image/jpeg"


@pytest.mark.parametrize(
    "source_name, expected",
    [
        ("photo.png", "photo-compressed.jpg"),
        ("photo.JPEG", "photo-compressed.jpg"),
        ("archive.tar.webp", "archive.tar-compressed.jpg"),
        ("noextension", "noextension-compressed.jpg"),
    ],
)
def test_compressed_name(source_name, expected):
    assert compressed_name(source_name) == expected


# --- Real Pillow codec ---

def test_jpeg_compressed_under_half_its_size(noisy_jpeg_bytes, make_source):
    source = make_source(noisy_jpeg_bytes, name="noise.jpg", media_type="image/jpeg")
    target = source.size // 2

    result = AdaptiveQualityCompressor().compress(source, target)

    assert isinstance(result, TailoringResult)
    assert result.achieved_size <= target
    assert result.output_bytes[:2] == b"\xff\xd8"
    assert 0 < result.quality < 1


def test_unreachable_target_uses_fixed_fallback_encode(noisy_jpeg_bytes, make_source):
    source = make_source(noisy_jpeg_bytes, name="noise.jpg", media_type="image/jpeg")
    codec = PillowJpegCodec()

    result = AdaptiveQualityCompressor().compress(source, 100)

    image = codec.decode(noisy_jpeg_bytes)
    try:
        expected = codec.encode(image, 0.01)
    finally:
        image.close()
    assert result.output_bytes == expected
    assert result.quality == 0.01


def test_png_with_alpha_becomes_jpeg(rgba_png_bytes, make_source):
    source = make_source(rgba_png_bytes, name="sprite.png", media_type="image/png")

    result = AdaptiveQualityCompressor().compress(source, source.size)

    assert isinstance(result, TailoringResult)
    assert result.output_bytes[:2] == b"\xff\xd8"
    assert result.suggested_name == "sprite-compressed.jpg"


def test_corrupt_image_is_decode_error(make_source):
    source = make_source(b"definitely not an image" * 1000, name="broken.jpg", media_type="image/jpeg")

    result = AdaptiveQualityCompressor().compress(source, 10_240)

    assert isinstance(result, TailoringFailure)
    assert result.kind == FailureKind.DECODE_ERROR
