"""Core library for the site ratings backend."""
