"""Infrastructure layer - persistence, providers, auth and telemetry."""
