"""Code generation — validator emission and module rendering."""
