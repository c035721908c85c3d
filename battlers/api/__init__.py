"""HTTP presentation layer: battle state polling and step controls."""
