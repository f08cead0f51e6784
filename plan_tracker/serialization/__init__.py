"""Dict and JSON encoding of plans for transport between layers."""
