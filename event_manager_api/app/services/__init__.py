"""Service layer: business rules between the API and the event store."""
