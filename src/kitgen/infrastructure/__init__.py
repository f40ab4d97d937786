"""Infrastructure layer: Go source loading, analyzers, templates, formatting."""
