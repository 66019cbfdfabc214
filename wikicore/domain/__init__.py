"""
Domain layer: entities, capability lattice, repository ports and pure
authority rules. No infrastructure or framework imports.
"""
