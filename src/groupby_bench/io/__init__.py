"""IO subpackage."""
