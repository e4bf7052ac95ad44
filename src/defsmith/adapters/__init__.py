"""Output adapters for the publishing pipeline."""
