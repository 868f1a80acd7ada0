"""Utils subpackage."""
