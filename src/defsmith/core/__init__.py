"""Core publishing primitives: configuration, diagnostics, tags and the publisher."""
