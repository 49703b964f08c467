"""
Infrastructure layer: completion providers and database persistence.
"""
