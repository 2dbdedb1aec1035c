"""Application layer orchestrating domain logic."""
