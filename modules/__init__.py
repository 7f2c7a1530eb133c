"""Check modules: record readers, checkers, adapters and reporting."""
