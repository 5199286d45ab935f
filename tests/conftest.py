# tests/conftest.py

import io
from typing import Callable, List, Optional

import numpy as np
import pytest
from PIL import Image

from filetailor.models.tailoring_model import SourceFile
from filetailor.services.codec_service import ImageDecodeError, ImageEncodeError


class StubImage:
    """Decoded image stand-in that records whether it was released."""
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class StubCodec:
    """Codec with a controllable size-vs-quality curve."""
    def __init__(
        self,
        size_for_quality: Callable[[float], int],
        fail_decode: bool = False,
        fail_encode_at_call: Optional[int] = None,
    ) -> None:
        self.size_for_quality = size_for_quality
        self.fail_decode = fail_decode
        self.fail_encode_at_call = fail_encode_at_call
        self.qualities: List[float] = []
        self.images: List[StubImage] = []

    def decode(self, data: bytes) -> StubImage:
        if self.fail_decode:
            raise ImageDecodeError("stub: not an image")
        image = StubImage()
        self.images.append(image)
        return image

    def encode(self, image: StubImage, quality: float) -> bytes:
        assert not image.closed
        self.qualities.append(quality)
        if self.fail_encode_at_call is not None and len(self.qualities) == self.fail_encode_at_call:
            raise ImageEncodeError("stub: encoder failed")
        return b"\x00" * self.size_for_quality(quality)


def linear_curve(quality: float) -> int:
    """1000 bytes of headers plus up to 100 000 bytes of payload."""
    return 1000 + int(quality * 100_000)


@pytest.fixture
def stub_codec_factory():
    def _factory(size_for_quality=linear_curve, **kwargs) -> StubCodec:
        return StubCodec(size_for_quality, **kwargs)
    return _factory


@pytest.fixture
def make_source():
    def _make(data: bytes, name: str = "file.bin", media_type: str = "application/octet-stream") -> SourceFile:
        return SourceFile(name=name, data=data, media_type=media_type)
    return _make


def _noise_image(width: int, height: int, channels: int = 3, seed: int = 0) -> Image.Image:
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def noisy_jpeg_bytes() -> bytes:
    """Incompressible-ish 640x480 JPEG, several hundred KB at quality 95."""
    buffer = io.BytesIO()
    _noise_image(640, 480).save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


@pytest.fixture
def rgba_png_bytes() -> bytes:
    buffer = io.BytesIO()
    _noise_image(200, 150, channels=4, seed=1).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture(name="linear_curve")
def linear_curve_fixture():
    return linear_curve
