from __future__ import annotations

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes_simple(size_bytes: int, decimals: int = 2) -> str:
    """Размер в наиболее подходящей единице: "1.5 MB", "0 Bytes"."""
    if size_bytes == 0:
        return "0 Bytes"
    decimals = max(0, decimals)
    index = 0
    while size_bytes >= 1024 ** (index + 1) and index < len(_UNITS) - 1:
        index += 1
    text = f"{size_bytes / 1024 ** index:.{decimals}f}"
    if decimals:
        # убираем хвостовые нули: 1.50 -> 1.5, 2.00 -> 2
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[index]}"


def format_bytes(size_bytes: int) -> str:
    """Размер одновременно в KB и MB: "12.3 KB / 0.01 MB"."""
    kb = size_bytes / 1024
    mb = kb / 1024
    return f"{kb:.1f} KB / {mb:.2f} MB"
