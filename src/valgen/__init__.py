"""valgen — validation-rule compiler for annotated record types."""

__version__ = "0.3.0"
