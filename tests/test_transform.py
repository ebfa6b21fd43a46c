import io
import threading
import time

import pytest
from PIL import Image

from receitas.common.deadline import Deadline
from receitas.common.errors import TransformError, UpstreamTimeout
from receitas.imaging.transform import target_size, to_webp


def _encode(img: Image.Image, fmt: str) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def test_target_size_only_shrinks():
    assert target_size((1000, 500), 240) == (240, 120)
    assert target_size((100, 80), 240) == (100, 80)
    assert target_size((3000, 1), 300) == (300, 1)


def test_palette_with_transparency_keeps_alpha():
    img = Image.new("P", (50, 50))
    img.info["transparency"] = 0
    out = to_webp(_encode(img, "PNG"), width=20, quality=60)
    with Image.open(io.BytesIO(out)) as decoded:
        assert decoded.size == (20, 20)
        assert decoded.mode == "RGBA"


def test_cmyk_jpeg_is_converted():
    img = Image.new("CMYK", (64, 32), (0, 50, 100, 0))
    out = to_webp(_encode(img, "JPEG"), width=32, quality=80)
    with Image.open(io.BytesIO(out)) as decoded:
        assert decoded.size == (32, 16)


def test_garbage_raises_transform_error():
    with pytest.raises(TransformError):
        to_webp(b"\x00\x01\x02", width=100, quality=50)


def test_deadline_remaining():
    now = [100.0]
    d = Deadline(8.0, clock=lambda: now[0])
    assert d.remaining() == 8.0
    now[0] = 105.0
    assert d.remaining() == 3.0
    assert not d.expired
    now[0] = 200.0
    assert d.remaining() == 0.0
    assert d.expired


def test_deadline_run_returns_result():
    assert Deadline(1.0).run(lambda: 42) == 42


def test_deadline_run_stops_waiting_for_slow_task():
    release = threading.Event()
    started = time.monotonic()
    with pytest.raises(UpstreamTimeout):
        Deadline(0.2).run(lambda: release.wait(5))
    assert time.monotonic() - started < 1.0
    release.set()
