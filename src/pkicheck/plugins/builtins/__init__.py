"""Built-in plugins shipped with pkicheck."""
