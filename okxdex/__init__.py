"""Top-level package for OKX DEX quote and swap utilities."""

from importlib import metadata


def __getattr__(name: str) -> str:
    """Expose the package version via ``okxdex.__version__``."""
    if name == "__version__":
        try:
            return metadata.version("okx-dex")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


__all__ = ["__version__"]
