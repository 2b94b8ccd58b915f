from .client import SchemaICUClient

__all__ = ["SchemaICUClient"]
