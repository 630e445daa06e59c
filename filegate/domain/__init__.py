"""Domain layer: capability tokens, storage contract and error taxonomy."""
