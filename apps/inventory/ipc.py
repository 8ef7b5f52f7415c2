"""
Desktop IPC channels for products.
"""

from apps.core.ipc import channel, require_id

from .services import ProductService


@channel("product:getAll")
def get_all(payload=None):
    service = ProductService()
    return service.serialize_many(service.list())


@channel("product:add")
def add(payload):
    service = ProductService()
    return service.serialize(service.create(payload))


@channel("product:update")
def update(payload):
    """Payload: {"id": 1, "data": {"name": ..., "rate": ...}}"""
    payload = payload or {}
    service = ProductService()
    product = service.update(require_id(payload.get("id"), "Product"), payload.get("data"))
    return service.serialize(product)


@channel("product:delete")
def delete(payload):
    """Payload: the product id."""
    ProductService().delete(require_id(payload, "Product"))
    return {"success": True}
