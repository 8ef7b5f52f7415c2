"""
Desktop IPC channels for customers.
"""

from apps.core.ipc import channel, require_id

from .services import CustomerService


@channel("customer:getAll")
def get_all(payload=None):
    service = CustomerService()
    return service.serialize_many(service.list())


@channel("customer:add")
def add(payload):
    service = CustomerService()
    return service.serialize(service.create(payload))


@channel("customer:update")
def update(payload):
    """Payload: {"id": 1, "data": {"name": ..., "mobile": ..., "address": ...}}"""
    payload = payload or {}
    service = CustomerService()
    customer = service.update(require_id(payload.get("id"), "Customer"), payload.get("data"))
    return service.serialize(customer)


@channel("customer:delete")
def delete(payload):
    """Payload: the customer id."""
    CustomerService().delete(require_id(payload, "Customer"))
    return {"success": True}
