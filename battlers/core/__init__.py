"""Core data models: attributes, locations, players and battle snapshots."""
