"""Application logging (labeled prefixes + SUMMARY level)."""
