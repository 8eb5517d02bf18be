"""Build version of the package."""

# Set by the release build; empty for development builds.
_BUILD_VERSION = ""


def docker_tag() -> str:
    """Return the build version, or "latest" if unknown."""
    return _BUILD_VERSION or "latest"


def app_version() -> str:
    """Return the build version, or "(devel)" if unknown."""
    return _BUILD_VERSION or "(devel)"