"""Deterministic country fill colours derived from the country name."""

_MASK32 = 0xFFFFFFFF


def _rotate_left_5(value: int) -> int:
    return ((value << 5) | (value >> 27)) & _MASK32


def hash_name(name: str) -> int:
    """Rotate-left-5 / xor fold over the UTF-8 bytes, 32-bit unsigned.

    Stable across runs and platforms, unlike the builtin ``hash``.
    """
    result = 0
    for byte in name.encode("utf-8"):
        result = _rotate_left_5(result) ^ byte
    return result


def country_color(name: str, latitude: float) -> tuple[float, float, float]:
    """RGB in [0, 1] for a country, darkened towards the poles.

    Args:
        name: Country name; picks the hue.
        latitude: Latitude of the polygon's first point. |lat| = 90 halves the brightness.

    Returns:
        (r, g, b) floats.
    """
    h = hash_name(name)
    brightness = 1.0 - (abs(latitude) / 90.0) * 0.5
    return (
        ((h & 0xFF0000) >> 16) / 255.0 * brightness,
        ((h & 0x00FF00) >> 8) / 255.0 * brightness,
        (h & 0x0000FF) / 255.0 * brightness,
    )


def country_color_css(name: str, latitude: float) -> str:
    r, g, b = country_color(name, latitude)
    return f"rgb({round(r * 255)},{round(g * 255)},{round(b * 255)})"
