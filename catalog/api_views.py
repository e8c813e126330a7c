import logging

from django.db.models import Q
from django.http import Http404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from users.permissions import IsAdminRoleOrReadOnly
from .models import Product
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


def get_product(id_or_slug):
    """Numeric ids hit the pk, anything else is treated as a slug."""
    lookup = {'pk': int(id_or_slug)} if id_or_slug.isdigit() else {'slug': id_or_slug}
    try:
        return Product.objects.get(**lookup)
    except Product.DoesNotExist:
        raise Http404('Product not found')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminRoleOrReadOnly])
def product_list(request):
    if request.method == 'POST':
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        logger.info(f"Product created: {product.slug}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    products = Product.objects.all()

    # ?category=Vitamins&search=zinc
    category = request.query_params.get('category')
    search = request.query_params.get('search')
    if category:
        products = products.filter(category=category)
    if search:
        products = products.filter(Q(name__icontains=search) | Q(description__icontains=search))

    return Response(ProductSerializer(products, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminRoleOrReadOnly])
def product_detail(request, id_or_slug):
    product = get_product(id_or_slug)

    if request.method == 'GET':
        return Response(ProductSerializer(product).data)

    if request.method == 'DELETE':
        product.delete()
        logger.info(f"Product removed: {product.slug}")
        return Response({'message': 'Product removed'})

    serializer = ProductSerializer(product, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)
