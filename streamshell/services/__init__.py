"""Collaborators that supply templates and rendering functions."""
