"""Internal implementation of the extraction engine."""
