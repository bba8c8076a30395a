"""Subscriber DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.subscribers.models import Subscriber


class SubscriberSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subscriber
        fields = ["id", "email", "created_at"]
        read_only_fields = fields
