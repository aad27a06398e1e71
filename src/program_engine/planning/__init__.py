"""Week layout and day allocation."""
