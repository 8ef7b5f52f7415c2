"""
API views for the product catalogue.
"""

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.decorators import ledger_errors

from .services import ProductService


@api_view(["GET", "POST"])
@ledger_errors
def product_list(request):
    """
    List all products ordered by name, or create a new product.

    POST body: {"name": "Pen", "rate": 10.5}
    """
    service = ProductService()
    if request.method == "POST":
        product = service.create(request.data)
        return Response(service.serialize(product), status=status.HTTP_201_CREATED)
    return Response(service.serialize_many(service.list()))


@api_view(["PUT", "DELETE"])
@ledger_errors
def product_detail(request, pk):
    """Update or delete one product."""
    service = ProductService()
    if request.method == "DELETE":
        service.delete(pk)
        return Response({"success": True})
    product = service.update(pk, request.data)
    return Response(service.serialize(product))
