"""Generation fallback for descriptions the catalog cannot satisfy."""
