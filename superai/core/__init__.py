"""Ambient configuration and logging shared by the whole package."""
