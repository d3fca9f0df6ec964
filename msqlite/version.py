"""Library version information."""

VERSION_MAJOR = 1
VERSION_MINOR = 99
VERSION_PATCH = 8
VERSION_TWEAK = 0

VERSION = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}.{VERSION_TWEAK}"


def version() -> int:
    """Return the version packed as 0xMMmmppTT."""
    return (
        (VERSION_MAJOR << 24)
        | (VERSION_MINOR << 16)
        | (VERSION_PATCH << 8)
        | VERSION_TWEAK
    )


def version_string() -> str:
    """Return the dotted version string."""
    return VERSION