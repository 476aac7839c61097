"""Feed reader API with keyset-paginated feed and article listings."""
