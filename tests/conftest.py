import io

import numpy as np
import pytest
from PIL import Image


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def noise_image(width: int, height: int, seed: int = 42) -> Image.Image:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    return Image.fromarray(arr, "RGBA")


def split_image(width: int, height: int, left, right) -> Image.Image:
    """Left half one colour, right half another."""
    img = Image.new("RGBA", (width, height), right)
    img.paste(Image.new("RGBA", (width // 2, height), left), (0, 0))
    return img


@pytest.fixture
def noise_png():
    return encode_png(noise_image(100, 50))


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "split.png"
    split_image(8, 4, (255, 0, 0, 255), (0, 0, 255, 255)).save(path)
    return path
