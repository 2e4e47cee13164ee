"""Core engine: registries, stores, rendering and the drain coordinator."""
