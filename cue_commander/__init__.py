"""cue-commander: read, write and combine CUE sheets for disc images."""

__version__ = "0.1.0"
