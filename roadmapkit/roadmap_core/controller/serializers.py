from __future__ import annotations

from rest_framework import serializers

from roadmapkit.roadmap_core.domain.template_source import TemplateSource


class PositionSerializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()


class PlacedNodeSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.CharField()
    position = PositionSerializer()
    data = serializers.JSONField()


class LayoutRequestSerializer(serializers.Serializer):
    nodes = serializers.ListField(child=serializers.JSONField(), allow_empty=True)
    edges = serializers.ListField(child=serializers.JSONField(), allow_empty=True, required=False, default=list)


class LayoutResponseSerializer(serializers.Serializer):
    nodes = PlacedNodeSerializer(many=True)
    edges = serializers.ListField(child=serializers.JSONField())


class ImportRequestSerializer(serializers.Serializer):
    input = serializers.CharField(allow_blank=True, trim_whitespace=True)
    persist = serializers.BooleanField(required=False, default=True)


class TemplateSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField(allow_blank=True)
    source = serializers.ChoiceField(choices=[source.value for source in TemplateSource])
    nodes = serializers.ListField(child=serializers.JSONField())
    edges = serializers.ListField(child=serializers.JSONField())
    createdAt = serializers.IntegerField()
    updatedAt = serializers.IntegerField()
    sourceUrl = serializers.CharField(required=False)
    thumbnail = serializers.CharField(required=False)
    isPublic = serializers.BooleanField()
    author = serializers.CharField(required=False)
    description = serializers.CharField(required=False)
    tags = serializers.ListField(child=serializers.CharField())
    likes = serializers.IntegerField()
    views = serializers.IntegerField()


class TemplateInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False)
    title = serializers.CharField(allow_blank=True)
    source = serializers.ChoiceField(
        choices=[TemplateSource.CUSTOM.value, TemplateSource.IMPORTED.value],
        default=TemplateSource.CUSTOM.value,
    )
    nodes = serializers.ListField(child=serializers.JSONField(), required=False, default=list)
    edges = serializers.ListField(child=serializers.JSONField(), required=False, default=list)
    createdAt = serializers.IntegerField(required=False)
    sourceUrl = serializers.CharField(required=False, allow_null=True)
    thumbnail = serializers.CharField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class PublishRequestSerializer(serializers.Serializer):
    isPublic = serializers.BooleanField()
    tags = serializers.ListField(child=serializers.CharField(), required=False)


class ShowcaseSerializer(serializers.Serializer):
    templates = TemplateSerializer(many=True)
    tags = serializers.ListField(child=serializers.CharField())


class ErrorSerializer(serializers.Serializer):
    detail = serializers.CharField()


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    version = serializers.CharField()
    services = serializers.DictField(child=serializers.BooleanField())
    timestamp = serializers.CharField()
