from rest_framework import serializers

from .models import TrackingEvent


class TrackingEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrackingEvent
        fields = ['status', 'location', 'message', 'source', 'timestamp']


class PublicTrackingSerializer(serializers.Serializer):
    """What anyone holding a tracking number may see. No customer data."""

    id = serializers.IntegerField(source='pk')
    tracking_number = serializers.CharField()
    carrier = serializers.CharField()
    tracking_status = serializers.CharField()
    tracking_url = serializers.CharField()
    tracking_history = TrackingEventSerializer(many=True)
    last_updated = serializers.DateTimeField(source='updated_at')
