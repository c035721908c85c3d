"""Supporting systems: random source, dice and roster loading."""
