"""Infrastructure layer — source introspection, locale loading, templates, and file output."""
