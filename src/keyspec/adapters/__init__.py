"""Host adapters for keyspec."""
