"""
Build version stamping.

Release pipelines usually stamp the version into a module variable; installs
from a source checkout or a plain `pip install` leave it empty. fix_version()
fills the gap from the installed distribution metadata.

Example
    # stamped by the release pipeline
    version = ""

    version = fix_version(version, "cmdset")
"""
from importlib import metadata

DEVEL = "(devel)"


def build_version(distribution, /):
    """
    return the installed version of `distribution`, or "(devel)" when no
    distribution metadata is available (e.g. running from a source tree).
    """
    if not isinstance(distribution, str) or not distribution:
        raise TypeError("build_version() argument must be a non-empty string")
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return DEVEL


def fix_version(version, distribution, /):
    """
    return `version` when it is non-empty, otherwise the build version of
    `distribution`.
    """
    return version or build_version(distribution)


__all__ = (
    "DEVEL",
    "build_version",
    "fix_version",
)
