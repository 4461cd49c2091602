"""Narrow contracts for collaborators that live outside the blog core."""
