from __future__ import annotations

import io

from PIL import Image

from receitas.common.errors import TransformError

OUTPUT_FORMAT = "WEBP"
OUTPUT_MEDIA_TYPE = "image/webp"


def _encodable(img: Image.Image) -> Image.Image:
    if img.mode in ("RGB", "RGBA"):
        return img
    has_alpha = img.mode in ("LA", "PA", "La") or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def target_size(size: tuple[int, int], width: int) -> tuple[int, int]:
    """Scale ``size`` down to ``width`` keeping the aspect ratio; never up."""
    src_w, src_h = size
    if src_w <= width:
        return src_w, src_h
    return width, max(1, round(src_h * width / src_w))


def to_webp(data: bytes, width: int, quality: int) -> bytes:
    try:
        with Image.open(io.BytesIO(data)) as img:
            # animated sources: first frame only
            img.load()
            frame = _encodable(img)
            size = target_size(frame.size, width)
            if size != frame.size:
                frame = frame.resize(size, Image.Resampling.LANCZOS)

            out = io.BytesIO()
            frame.save(out, format=OUTPUT_FORMAT, quality=quality)
            return out.getvalue()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise TransformError("Failed to transform image") from e
