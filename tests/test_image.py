import pytest

from nodeops.kube.image import parse_image_version


@pytest.mark.parametrize(
    "image_ref, want",
    [
        ("", "latest"),
        ("busybox", "latest"),
        ("busybox:stable", "stable"),
        ("ghcr.io/strangelove-ventures/heighliner/osmosis:v9.0.0", "v9.0.0"),
        ("busybox:", "latest"),
    ],
)
def test_parse_image_version(image_ref, want):
    assert parse_image_version(image_ref) == want