"""Utility modules for cue-commander."""
