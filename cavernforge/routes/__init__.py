"""HTTP blueprints for the world API."""
