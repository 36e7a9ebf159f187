"""Builder, reachability check and lookup table."""
