"""
Local file helpers for uploads and byte formatting for quota display.
"""
from pathlib import Path

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB", "PB"]
BYTE_BASE = 1024


def format_bytes(num_bytes: int|float) -> str:
    """
    Human readable size, 0 -> '0 Bytes', 1536 -> '1.5 KB', 1073741824 -> '1 GB'
    Up to 2 decimals, trailing zeros dropped.
    """
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    # integer steps, log() rounding can land just under an exact power
    while num_bytes >= BYTE_BASE ** (exponent + 1) and exponent < len(SIZE_UNITS) - 1:
        exponent += 1
    value = round(num_bytes / (BYTE_BASE ** exponent), 2)
    formatted = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{formatted} {SIZE_UNITS[exponent]}"


def normalize_file_path(file_path: str|Path) -> Path:
    """Absolute, normalized path.  Relative paths resolve from the cwd."""
    return Path(file_path).expanduser().resolve()


def validate_file_exists(file_path: str|Path) -> bool:
    """True if the path is an existing regular file."""
    try:
        return Path(file_path).is_file()
    except OSError:
        return False


def get_file_info(file_path: str|Path) -> dict|None:
    """
    Name, extension, directory and size of a local file, None if it doesn't exist.
    """
    p = normalize_file_path(file_path)
    if not validate_file_exists(p):
        return None
    size = p.stat().st_size
    return {
        "name": p.name,
        "extension": p.suffix.lstrip("."),
        "directory": str(p.parent),
        "size": size,
        "size_formatted": format_bytes(size),
    }
