"""
API views for customers.
"""

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.decorators import ledger_errors

from .services import CustomerService


@api_view(["GET", "POST"])
@ledger_errors
def customer_list(request):
    """
    List all customers ordered by name, or register a new customer.

    POST body: {"name": "Asha", "mobile": "9876543210", "address": "..."}
    """
    service = CustomerService()
    if request.method == "POST":
        customer = service.create(request.data)
        return Response(service.serialize(customer), status=status.HTTP_201_CREATED)
    return Response(service.serialize_many(service.list()))


@api_view(["PUT", "DELETE"])
@ledger_errors
def customer_detail(request, pk):
    """
    Update or delete one customer.

    Customers that already have invoices cannot be deleted (409).
    """
    service = CustomerService()
    if request.method == "DELETE":
        service.delete(pk)
        return Response({"success": True})
    customer = service.update(pk, request.data)
    return Response(service.serialize(customer))
