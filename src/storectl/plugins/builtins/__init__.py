"""Built-in plugins shipped with storectl."""
