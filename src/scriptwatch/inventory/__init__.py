"""Script inventory core — models, fingerprinting, classification, indexing, diffing."""
