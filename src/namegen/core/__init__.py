"""Core services: configuration, logging, providers, catalog and pipeline."""
