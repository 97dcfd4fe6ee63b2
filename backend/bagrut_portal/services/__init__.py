"""CRUD functions over the local store collections."""

from bagrut_portal.services.results import ErrorKind, Result, ServiceError, service_operation

__all__ = ["ErrorKind", "Result", "ServiceError", "service_operation"]
