"""
API Layer

HTTP surface and DTO mapping. Imports the engine, never the reverse.
"""
