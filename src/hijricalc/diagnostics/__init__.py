"""Diagnostics tools. Modules with a main(argv) are wired to `hijricalc diag ...`."""
