"""Domain rules for the stellar life engine."""
