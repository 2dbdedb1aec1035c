"""Interfaces exposing the notification core."""
