"""Click commands registered on the top-level ``cue-commander`` group."""
