"""Core engine types: random source, enums and data models."""
