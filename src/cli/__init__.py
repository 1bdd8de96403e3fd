"""mood-diary command-line interface."""
