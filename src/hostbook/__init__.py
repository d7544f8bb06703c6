"""hostbook - grouped SSH host list backed by ~/.ssh/config."""

__version__ = "0.1.0"
