from __future__ import annotations


def hex_to_rgb(value: int) -> tuple[float, float, float]:
    """Split a 24-bit 0xRRGGBB integer into an RGB triple in [0, 1]."""
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"Color out of range: {value:#x}")
    r = (value >> 16) & 0xFF
    g = (value >> 8) & 0xFF
    b = value & 0xFF
    return (r / 255.0, g / 255.0, b / 255.0)


def parse_hex_color(text: str) -> int:
    """Parse '#0b0c10', '0x0b0c10' or '0b0c10' into an integer."""
    s = text.strip().lower()
    if s.startswith("#"):
        s = s[1:]
    elif s.startswith("0x"):
        s = s[2:]
    if len(s) != 6:
        raise ValueError(f"Expected 6 hex digits, got {text!r}")
    return int(s, 16)
