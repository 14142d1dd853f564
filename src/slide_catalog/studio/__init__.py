"""Collaborator-facing services returning bridge response dicts."""
