from apps.core.services import RecordService

from .models import Product
from .serializers import ProductSerializer


class ProductService(RecordService):
    """CRUD for the product catalogue, listed by name."""

    model = Product
    serializer_class = ProductSerializer
    ordering = "name"
