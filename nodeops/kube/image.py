"""Parsing of container image references."""


def parse_image_version(image_ref: str) -> str:
    """Return the tag of image_ref, or "latest" if it has none."""
    parts = image_ref.split(":")
    if len(parts) != 2 or not parts[1]:
        return "latest"
    return parts[1]