from apps.core.services import RecordService

from .models import Customer
from .serializers import CustomerSerializer


class CustomerService(RecordService):
    """CRUD for customers, listed by name."""

    model = Customer
    serializer_class = CustomerSerializer
    ordering = "name"
