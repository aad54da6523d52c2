"""VHDL test bench runner."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vhdl-test")
except PackageNotFoundError:
    __version__ = "Unknown"
