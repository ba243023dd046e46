"""
Tabular codec factory.

Picks the interchange codec by configured format or by file extension.
"""

from pathlib import PurePath

from src.config import get_settings
from src.core.exceptions import UnsupportedFileTypeError
from src.core.interfaces.tabular import ITabularCodec
from src.infrastructure.tabular.csv_codec import CsvCodec
from src.infrastructure.tabular.xlsx_codec import XLSX_MEDIA_TYPE, XlsxCodec

_CODECS: dict[str, type[ITabularCodec]] = {
    "xlsx": XlsxCodec,
    "csv": CsvCodec,
}


def get_codec(format: str | None = None) -> ITabularCodec:
    """
    Get a codec instance.

    Args:
        format: "xlsx" or "csv" (default from settings)
    """
    format = (format or get_settings().exchange.format).lower().lstrip(".")
    codec_cls = _CODECS.get(format)
    if codec_cls is None:
        raise ValueError(f"Unknown tabular format: {format}")
    return codec_cls()


def get_codec_for_filename(filename: str) -> ITabularCodec:
    """Pick the codec matching a file's extension."""
    extension = PurePath(filename).suffix.lower()
    codec_cls = _CODECS.get(extension.lstrip("."))
    if codec_cls is None:
        raise UnsupportedFileTypeError(
            filename, extension or "(none)", [f".{name}" for name in _CODECS]
        )
    return codec_cls()


__all__ = [
    "CsvCodec",
    "XlsxCodec",
    "XLSX_MEDIA_TYPE",
    "get_codec",
    "get_codec_for_filename",
]
