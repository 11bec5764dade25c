"""Interfaces exposing the notification pipeline."""
