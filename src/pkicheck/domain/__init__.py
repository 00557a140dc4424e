"""Domain layer — settings snapshot, value objects, and resolution errors."""
