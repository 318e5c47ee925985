"""Cosmos DB persistence — client and per-container repositories."""
