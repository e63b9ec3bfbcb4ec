"""Shared HTTP utilities for the SpaceGDN SDK."""
