"""Dataset construction and experiment running."""
