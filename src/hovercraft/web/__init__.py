"""Web wrapper around the search core."""
