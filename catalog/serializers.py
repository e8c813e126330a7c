from django.utils.text import slugify
from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, coerce_to_string=False, required=False)
    key_benefits = serializers.ListField(child=serializers.CharField(), required=False)
    image_urls = serializers.ListField(child=serializers.URLField(), required=False)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'price', 'category', 'stock_quantity',
            'image_urls', 'scientific_name', 'key_benefits', 'suggested_dosage',
            'contraindications', 'average_rating', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'created_at', 'updated_at']
        extra_kwargs = {
            'description': {'required': False},
            'category': {'required': False},
        }

    def validate(self, attrs):
        name = attrs.get('name')
        if name is not None:
            slug = slugify(name)
            if not slug:
                raise serializers.ValidationError({'name': "Name must contain letters or numbers"})
            clash = Product.objects.filter(slug=slug)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError({'name': f"A product with slug '{slug}' already exists"})
            attrs['slug'] = slug
        return attrs

    def create(self, validated_data):
        # admin form sends partial data, fill the gaps
        validated_data.setdefault('description', 'No description provided.')
        validated_data.setdefault('price', 0)
        validated_data.setdefault('category', 'General')
        validated_data.setdefault('stock_quantity', 0)
        return super().create(validated_data)
