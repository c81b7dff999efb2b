"""Small shared helpers: timestamps and count-distribution arithmetic."""
