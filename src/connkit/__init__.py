"""Connection-profile manager core: model, command resolver, converters and merge engine."""

__version__ = "0.1.0"
