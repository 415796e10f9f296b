"""Rule engine components: stage transitions, dependencies, readiness and suggestions."""
