"""Image encode/decode capability.

Background images arrive as raw bytes in any format the picker produced and
are stored as JPEG. ``PillowImageCodec`` is the default; ``QtImageCodec`` does
the same with QImage for environments that only ship Qt's image plugins.
"""

from __future__ import annotations

import io
from typing import Any, Protocol, runtime_checkable

from ibanner.utils.config import JPEG_QUALITY


class ImageCodecError(ValueError):
    """Raised when image bytes cannot be decoded or encoded."""


@runtime_checkable
class ImageCodec(Protocol):
    """Encode raw image bytes to compressed bytes, and decode them back."""

    def encode(self, raw: bytes) -> bytes:
        """Return JPEG bytes for *raw*. Raises ImageCodecError."""
        ...

    def decode(self, data: bytes) -> Any:
        """Return a backend image object for *data*. Raises ImageCodecError."""
        ...


class PillowImageCodec:
    """ImageCodec implemented with Pillow."""

    def __init__(self, quality: int = JPEG_QUALITY):
        self._quality = quality

    def decode(self, data: bytes):
        from PIL import Image, UnidentifiedImageError

        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageCodecError(f"Cannot decode image: {e}") from e
        return img

    def encode(self, raw: bytes) -> bytes:
        img = self.decode(raw)
        if img.mode != "RGB":
            # JPEG has no alpha channel
            img = img.convert("RGB")
        buf = io.BytesIO()
        try:
            img.save(buf, format="JPEG", quality=self._quality)
        except (OSError, ValueError) as e:
            raise ImageCodecError(f"Cannot encode image: {e}") from e
        return buf.getvalue()


class QtImageCodec:
    """ImageCodec implemented with QImage."""

    def __init__(self, quality: int = JPEG_QUALITY):
        self._quality = quality

    def decode(self, data: bytes):
        from PySide6.QtGui import QImage

        img = QImage.fromData(data)
        if img.isNull():
            raise ImageCodecError("Cannot decode image")
        return img

    def encode(self, raw: bytes) -> bytes:
        from PySide6.QtCore import QBuffer, QByteArray, QIODevice
        from PySide6.QtGui import QImage

        img = self.decode(raw).convertToFormat(QImage.Format.Format_RGB32)
        array = QByteArray()
        buffer = QBuffer(array)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        ok = img.save(buffer, "JPG", self._quality)
        buffer.close()
        if not ok:
            raise ImageCodecError("Cannot encode image")
        return bytes(array.data())


def default_image_codec() -> ImageCodec:
    return PillowImageCodec()
